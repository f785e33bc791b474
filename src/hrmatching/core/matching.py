"""Similar-candidate search over a historical pool."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..schemas import Candidate, Evaluation, job_type_label
from .text_similarity import JaccardTextSimilarity, TextSimilarity

PoolEntry = tuple[Candidate, Evaluation]


@dataclass
class MatchingConfig:
    """Term weights, proximity bands and reason thresholds for similarity."""

    job_type_weight: float = 40.0
    education_weight: float = 10.0
    major_weight: float = 10.0
    experience_weight: float = 20.0
    self_summary_weight: float = 15.0
    age_weight: float = 5.0
    aptitude_weight: float = 10.0
    # (max gap, points) checked in order; first band that fits wins.
    age_bands: tuple[tuple[float, float], ...] = ((3, 5), (7, 3), (10, 1))
    aptitude_bands: tuple[tuple[float, float], ...] = ((5, 10), (10, 7), (15, 4), (20, 2))
    education_reason_threshold: float = 0.5
    major_reason_threshold: float = 0.5
    experience_reason_threshold: float = 0.4
    self_summary_reason_threshold: float = 0.3
    age_reason_gap: float = 3
    aptitude_reason_gap: float = 10
    default_limit: int = 5


@dataclass(slots=True)
class SimilarCandidate:
    """Historical candidate ranked against a target."""

    candidate: Candidate
    evaluation: Evaluation
    similarity_score: float
    reasons: list[str] = field(default_factory=list)


class SimilarityMatcher:
    """Score a target candidate against decided historical candidates."""

    method = "similarity"

    def __init__(
        self,
        *,
        config: MatchingConfig | None = None,
        text_similarity: TextSimilarity | None = None,
    ) -> None:
        self._config = config or MatchingConfig()
        self._text = text_similarity or JaccardTextSimilarity()

    def find_similar(
        self,
        target: Candidate,
        pool: Iterable[PoolEntry],
        limit: int | None = None,
    ) -> list[SimilarCandidate]:
        """Return the ``limit`` most similar pool entries, best first.

        The pool must already exclude the target and hold only decided
        evaluations. Ties keep their pool order.
        """
        limit = self._config.default_limit if limit is None else limit
        scored = [
            SimilarCandidate(
                candidate=candidate,
                evaluation=evaluation,
                similarity_score=self.similarity(target, candidate),
                reasons=self.reasons(target, candidate),
            )
            for candidate, evaluation in pool
        ]
        scored.sort(key=lambda item: item.similarity_score, reverse=True)
        return scored[: max(limit, 0)]

    def similarity(self, left: Candidate, right: Candidate) -> float:
        """Weighted similarity normalized to 0-100."""
        cfg = self._config
        score = 0.0
        total_weight = 0.0

        if left.applied_job_type == right.applied_job_type:
            score += cfg.job_type_weight
        total_weight += cfg.job_type_weight

        score += self._text.similarity(left.education, right.education) * cfg.education_weight
        total_weight += cfg.education_weight

        if left.major and right.major:
            score += self._text.similarity(left.major, right.major) * cfg.major_weight
            total_weight += cfg.major_weight

        score += self._text.similarity(left.experience, right.experience) * cfg.experience_weight
        total_weight += cfg.experience_weight

        score += (
            self._text.similarity(left.self_summary, right.self_summary)
            * cfg.self_summary_weight
        )
        total_weight += cfg.self_summary_weight

        age_gap = _gap(left.age, right.age)
        if age_gap is not None:
            score += _band_points(age_gap, cfg.age_bands)
            total_weight += cfg.age_weight

        if left.aptitude is not None and right.aptitude is not None:
            aptitude_gap = abs(left.aptitude.total_score - right.aptitude.total_score)
            score += _band_points(aptitude_gap, cfg.aptitude_bands)
            total_weight += cfg.aptitude_weight

        if total_weight <= 0:
            return 0.0
        return min(max(score / total_weight * 100, 0.0), 100.0)

    def reasons(self, left: Candidate, right: Candidate) -> list[str]:
        """Human-readable explanations, evaluated independently of the score."""
        cfg = self._config
        reasons: list[str] = []

        if left.applied_job_type == right.applied_job_type:
            reasons.append(
                f"Applied for the same job type ({job_type_label(left.applied_job_type)})"
            )
        if self._text.similarity(left.education, right.education) > cfg.education_reason_threshold:
            reasons.append("Similar educational background")
        if (
            left.major
            and right.major
            and self._text.similarity(left.major, right.major) > cfg.major_reason_threshold
        ):
            reasons.append("Similar field of study")
        if (
            self._text.similarity(left.experience, right.experience)
            > cfg.experience_reason_threshold
        ):
            reasons.append("Similar work experience")
        if (
            self._text.similarity(left.self_summary, right.self_summary)
            > cfg.self_summary_reason_threshold
        ):
            reasons.append("Similar self-presentation")

        age_gap = _gap(left.age, right.age)
        if age_gap is not None and age_gap <= cfg.age_reason_gap:
            reasons.append("Close in age")

        if left.aptitude is not None and right.aptitude is not None:
            aptitude_gap = abs(left.aptitude.total_score - right.aptitude.total_score)
            if aptitude_gap <= cfg.aptitude_reason_gap:
                reasons.append("Similar aptitude test results")

        return reasons


def _gap(left: float | None, right: float | None) -> float | None:
    if left is None or right is None:
        return None
    return abs(left - right)


def _band_points(gap: float, bands: tuple[tuple[float, float], ...]) -> float:
    for max_gap, points in bands:
        if gap <= max_gap:
            return points
    return 0.0
