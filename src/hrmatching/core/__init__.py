"""Candidate evaluation and matching engine components."""

from __future__ import annotations

from .aggregation import AggregateScores, AggregatorConfig, CategoryScore, CriterionScore, ScoreAggregator
from .aptitude import AptitudeAnalysis, AptitudeAnalyzer, AptitudeConfig, JobFitProfile
from .matching import MatchingConfig, PoolEntry, SimilarCandidate, SimilarityMatcher
from .prediction import OutcomePredictor, PredictionConfig, PredictionResult, RateBucket
from .statistics import HiringStatistics, JobTypeStats, summarize_history
from .text_similarity import (
    FuzzyTokenSimilarity,
    JaccardTextSimilarity,
    TextSimilarity,
    TokenizerConfig,
    tokenize,
)

__all__ = [
    "AggregateScores",
    "AggregatorConfig",
    "AptitudeAnalysis",
    "AptitudeAnalyzer",
    "AptitudeConfig",
    "CategoryScore",
    "CriterionScore",
    "FuzzyTokenSimilarity",
    "HiringStatistics",
    "JaccardTextSimilarity",
    "JobFitProfile",
    "JobTypeStats",
    "MatchingConfig",
    "OutcomePredictor",
    "PoolEntry",
    "PredictionConfig",
    "PredictionResult",
    "RateBucket",
    "ScoreAggregator",
    "SimilarCandidate",
    "SimilarityMatcher",
    "TextSimilarity",
    "TokenizerConfig",
    "summarize_history",
    "tokenize",
]
