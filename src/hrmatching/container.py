"""Dependency injection container for the matching engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .core import (
    AggregatorConfig,
    AptitudeAnalyzer,
    AptitudeConfig,
    FuzzyTokenSimilarity,
    JaccardTextSimilarity,
    MatchingConfig,
    OutcomePredictor,
    PredictionConfig,
    RateBucket,
    ScoreAggregator,
    SimilarityMatcher,
    TokenizerConfig,
)
from .pipeline import MatchingEngine

_TEXT_STRATEGIES = {
    "jaccard": JaccardTextSimilarity,
    "fuzzy": FuzzyTokenSimilarity,
}


class MatchingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    text_similarity = providers.Singleton(JaccardTextSimilarity)

    score_aggregator = providers.Singleton(ScoreAggregator)
    aptitude_analyzer = providers.Singleton(AptitudeAnalyzer)

    similarity_matcher = providers.Singleton(
        SimilarityMatcher,
        text_similarity=text_similarity,
    )

    outcome_predictor = providers.Singleton(
        OutcomePredictor,
        matcher=similarity_matcher,
    )

    engine = providers.Factory(
        MatchingEngine,
        aggregator=score_aggregator,
        analyzer=aptitude_analyzer,
        matcher=similarity_matcher,
        predictor=outcome_predictor,
        similar_limit=config.engine.similar_limit.as_int(),
    )


def create_container(*, settings: dict | None = None) -> MatchingContainer:
    """Instantiate container with optional overrides."""

    container = MatchingContainer()
    container.config.from_dict({"engine": {"similar_limit": 5}})

    if not settings:
        return container

    engine_settings = settings.get("engine", {})
    if engine_settings:
        container.config.from_dict({"engine": engine_settings})

    text_settings = settings.get("text")
    if text_settings:
        text_settings = dict(text_settings)
        strategy = _TEXT_STRATEGIES[text_settings.pop("strategy", "jaccard")]
        tokenizer_kwargs: dict[str, Any] = {}
        if text_settings.get("min_token_length") is not None:
            tokenizer_kwargs["min_token_length"] = text_settings["min_token_length"]
        if text_settings.get("stop_words") is not None:
            tokenizer_kwargs["stop_words"] = frozenset(text_settings["stop_words"])
        container.text_similarity.override(
            providers.Singleton(strategy, config=TokenizerConfig(**tokenizer_kwargs))
        )

    if "aggregator" in settings:
        aggregator_config = AggregatorConfig(**settings["aggregator"])
        container.score_aggregator.override(
            providers.Singleton(ScoreAggregator, config=aggregator_config)
        )

    if "aptitude" in settings:
        aptitude_config = AptitudeConfig(**settings["aptitude"])
        container.aptitude_analyzer.override(
            providers.Singleton(AptitudeAnalyzer, config=aptitude_config)
        )

    if "matching" in settings:
        matching_config = MatchingConfig(**_tuple_bands(settings["matching"]))
        container.similarity_matcher.override(
            providers.Singleton(
                SimilarityMatcher,
                config=matching_config,
                text_similarity=container.text_similarity,
            )
        )

    if "prediction" in settings:
        prediction_settings = dict(settings["prediction"])
        if "buckets" in prediction_settings:
            prediction_settings["buckets"] = tuple(
                RateBucket(**bucket) for bucket in prediction_settings["buckets"]
            )
        container.outcome_predictor.override(
            providers.Singleton(
                OutcomePredictor,
                matcher=container.similarity_matcher,
                config=PredictionConfig(**prediction_settings),
            )
        )

    return container


def _tuple_bands(matching_settings: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(matching_settings)
    for key in ("age_bands", "aptitude_bands"):
        if key in normalized:
            normalized[key] = tuple(tuple(band) for band in normalized[key])
    return normalized
