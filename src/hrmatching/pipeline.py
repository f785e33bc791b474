"""Engine facade: assembles component outputs into one candidate report."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

import pendulum
import structlog
from pydantic import BaseModel

from .core import (
    AggregateScores,
    AptitudeAnalysis,
    AptitudeAnalyzer,
    OutcomePredictor,
    PoolEntry,
    PredictionResult,
    ScoreAggregator,
    SimilarCandidate,
    SimilarityMatcher,
)
from .schemas import Candidate, Evaluation, EvaluationCriterion

_logger = structlog.get_logger(__name__)


def build_history_pool(
    target: Candidate,
    candidates: Iterable[Candidate],
    evaluations: Iterable[Evaluation],
) -> list[PoolEntry]:
    """Pair stored candidates with their decided evaluations, excluding ``target``.

    A candidate has at most one evaluation; if a snapshot holds more, the last
    one wins.
    """
    by_candidate = {evaluation.candidate_id: evaluation for evaluation in evaluations}
    pool: list[PoolEntry] = []
    skipped = 0
    for candidate in candidates:
        if candidate.candidate_id == target.candidate_id:
            continue
        evaluation = by_candidate.get(candidate.candidate_id)
        if evaluation is None or not evaluation.is_decided:
            skipped += 1
            continue
        pool.append((candidate, evaluation))
    _logger.debug(
        "history_pool.built",
        target=target.candidate_id,
        pool_size=len(pool),
        skipped=skipped,
    )
    return pool


@dataclass(slots=True)
class CandidateReport:
    """Everything the presentation layer shows for one candidate."""

    candidate_id: str
    job_type: str
    scores: AggregateScores | None
    aptitude: AptitudeAnalysis | None
    similar_candidates: list[SimilarCandidate]
    prediction: PredictionResult
    generated_at: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return _to_plain(self)


class MatchingEngine:
    """Run aggregation, aptitude analysis, matching and prediction together."""

    def __init__(
        self,
        *,
        aggregator: ScoreAggregator,
        analyzer: AptitudeAnalyzer,
        matcher: SimilarityMatcher,
        predictor: OutcomePredictor,
        similar_limit: int = 5,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._analyzer = analyzer
        self._matcher = matcher
        self._predictor = predictor
        self._similar_limit = similar_limit
        self._now_provider = now_provider or (lambda: pendulum.now("UTC"))

    def evaluate(
        self,
        *,
        candidate: Candidate,
        evaluation: Evaluation | None = None,
        criteria: Sequence[EvaluationCriterion] = (),
        history: Iterable[PoolEntry] = (),
    ) -> CandidateReport:
        pool = list(history)
        job_type = evaluation.job_type if evaluation is not None else candidate.applied_job_type

        scores = (
            self._aggregator.aggregate(evaluation, criteria) if evaluation is not None else None
        )
        aptitude = self._analyzer.analyze(candidate.aptitude, job_type)
        similar = self._matcher.find_similar(candidate, pool, limit=self._similar_limit)
        prediction = self._predictor.predict(candidate, evaluation, pool)

        if not pool:
            _logger.info("prediction.no_history", candidate=candidate.candidate_id)
        _logger.debug(
            "engine.report",
            candidate=candidate.candidate_id,
            job_type=job_type,
            pool_size=len(pool),
            prediction=prediction.prediction,
            confidence=prediction.confidence,
            has_aptitude=aptitude is not None,
        )

        return CandidateReport(
            candidate_id=candidate.candidate_id,
            job_type=job_type,
            scores=scores,
            aptitude=aptitude,
            similar_candidates=similar,
            prediction=prediction,
            generated_at=self._now_provider().to_iso8601_string(),
            metadata={"pool_size": len(pool)},
        )


def _to_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            item.name: _to_plain(getattr(value, item.name))
            for item in dataclasses.fields(value)
        }
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value
