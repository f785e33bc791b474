"""Hire/reject prediction from similar historical candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Mapping

from ..schemas import Candidate, Evaluation
from .matching import PoolEntry, SimilarCandidate, SimilarityMatcher

PredictionType = Literal["hire", "reject"]

NO_HISTORY_REASON = "Insufficient hiring history; the prediction has low confidence"


@dataclass(frozen=True)
class RateBucket:
    """Hire-rate bucket: ``confidence = base + (hire_rate - pivot) * slope``."""

    floor: float
    prediction: PredictionType
    base: float
    pivot: float
    slope: float

    def confidence(self, hire_rate: float) -> float:
        return self.base + (hire_rate - self.pivot) * self.slope


@dataclass
class PredictionConfig:
    """Buckets, override thresholds and sample sizes for prediction."""

    match_limit: int = 10
    # Checked top-down; the first bucket whose floor the rate reaches wins.
    buckets: tuple[RateBucket, ...] = (
        RateBucket(floor=0.7, prediction="hire", base=0.70, pivot=0.7, slope=0.5),
        RateBucket(floor=0.5, prediction="hire", base=0.50, pivot=0.5, slope=1.0),
        RateBucket(floor=0.3, prediction="reject", base=0.50, pivot=0.5, slope=-1.0),
        RateBucket(floor=0.0, prediction="reject", base=0.70, pivot=0.3, slope=-0.5),
    )
    high_score_override: float = 3.5
    low_score_override: float = 2.0
    override_penalty: float = 0.1
    override_floor: float = 0.6
    default_prediction: PredictionType = "hire"
    default_confidence: float = 0.5
    min_sample_for_rate_reason: int = 3


@dataclass(slots=True)
class PredictionResult:
    """Prediction with confidence and ordered rationale."""

    prediction: PredictionType
    confidence: float
    reasons: list[str]
    hire_rate: float | None = None
    sample_size: int = 0
    similar_candidates: list[SimilarCandidate] = field(default_factory=list)


class OutcomePredictor:
    """Predict a hiring outcome from the outcomes of similar candidates."""

    method = "prediction"

    def __init__(
        self,
        *,
        matcher: SimilarityMatcher | None = None,
        config: PredictionConfig | None = None,
    ) -> None:
        self._matcher = matcher or SimilarityMatcher()
        self._config = config or PredictionConfig()

    def predict(
        self,
        candidate: Candidate,
        evaluation: Evaluation | None,
        pool: Iterable[PoolEntry],
    ) -> PredictionResult:
        cfg = self._config
        matches = self._matcher.find_similar(candidate, pool, limit=cfg.match_limit)
        if not matches:
            return PredictionResult(
                prediction=cfg.default_prediction,
                confidence=cfg.default_confidence,
                reasons=[NO_HISTORY_REASON],
            )

        hired = [match for match in matches if match.evaluation.final_decision == "hired"]
        hire_rate = len(hired) / len(matches)
        current_avg = _mean_score(evaluation.scores if evaluation is not None else {})
        hired_avg = _mean_of(
            float(score) for match in hired for score in match.evaluation.scores.values()
        )

        reasons: list[str] = []
        if len(matches) >= cfg.min_sample_for_rate_reason:
            reasons.append(
                f"{len(hired)} of {len(matches)} similar candidates were hired "
                f"(hire rate: {hire_rate * 100:.1f}%)"
            )
        if hired:
            reasons.append(f"Hired similar candidates averaged {hired_avg:.1f} points")
            if current_avg > 0:
                if current_avg >= hired_avg:
                    reasons.append(
                        f"The current evaluation score ({current_avg:.1f}) is at or above "
                        "the hired candidates' average"
                    )
                else:
                    reasons.append(
                        f"The current evaluation score ({current_avg:.1f}) is below "
                        "the hired candidates' average"
                    )

        prediction, confidence = self.base_prediction(hire_rate)

        if current_avg >= cfg.high_score_override and prediction == "reject":
            prediction = "hire"
            confidence = max(cfg.override_floor, confidence - cfg.override_penalty)
            reasons.append("Adjusted to hire because of the high current evaluation score")
        elif current_avg <= cfg.low_score_override and prediction == "hire":
            prediction = "reject"
            confidence = max(cfg.override_floor, confidence - cfg.override_penalty)
            reasons.append("Adjusted to reject because of the low current evaluation score")

        return PredictionResult(
            prediction=prediction,
            confidence=confidence,
            reasons=reasons,
            hire_rate=hire_rate,
            sample_size=len(matches),
            similar_candidates=matches,
        )

    def base_prediction(self, hire_rate: float) -> tuple[PredictionType, float]:
        """Map a hire rate to its bucket's prediction and confidence."""
        for bucket in self._config.buckets:
            if hire_rate >= bucket.floor:
                return bucket.prediction, bucket.confidence(hire_rate)
        last = self._config.buckets[-1]
        return last.prediction, last.confidence(hire_rate)


def _mean_score(scores: Mapping[str, int]) -> float:
    return _mean_of(float(value) for value in scores.values())


def _mean_of(values: Iterable[float]) -> float:
    collected = list(values)
    if not collected:
        return 0.0
    return sum(collected) / len(collected)
