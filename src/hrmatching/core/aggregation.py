"""Evaluation score aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Mapping, Sequence

from ..schemas import CRITERION_CATEGORIES, Evaluation, EvaluationCriterion

ScoreBand = Literal["excellent", "good", "fair", "poor"]


@dataclass
class AggregatorConfig:
    """Band thresholds on the 1-4 score scale."""

    excellent_threshold: float = 3.5
    good_threshold: float = 2.5
    fair_threshold: float = 1.5


@dataclass(slots=True)
class CriterionScore:
    """Criterion paired with its submitted score (0 when missing)."""

    criterion: EvaluationCriterion
    score: int
    comment: str
    band: ScoreBand | None


@dataclass(slots=True)
class CategoryScore:
    """Per-category reporting view."""

    category: str
    average_score: float
    total_weight: float
    scored_criteria: int
    band: ScoreBand | None


@dataclass(slots=True)
class AggregateScores:
    """Totals for one evaluation."""

    total_score: float
    weighted_score: float
    total_band: ScoreBand | None
    weighted_band: ScoreBand | None
    categories: list[CategoryScore] = field(default_factory=list)
    criteria_scores: list[CriterionScore] = field(default_factory=list)


class ScoreAggregator:
    """Combine per-criterion scores into unweighted and weighted totals."""

    method = "score_aggregate"

    def __init__(self, *, config: AggregatorConfig | None = None) -> None:
        self._config = config or AggregatorConfig()

    def aggregate(
        self,
        evaluation: Evaluation,
        criteria: Sequence[EvaluationCriterion],
    ) -> AggregateScores:
        scores = evaluation.scores
        total_score = self.total_score(scores)
        weighted_score = self.weighted_score(scores, criteria)

        criteria_scores = [
            CriterionScore(
                criterion=criterion,
                score=scores.get(criterion.criterion_id, 0),
                comment=evaluation.comments.get(criterion.criterion_id, ""),
                band=self.band(scores[criterion.criterion_id])
                if criterion.criterion_id in scores
                else None,
            )
            for criterion in criteria
        ]

        return AggregateScores(
            total_score=total_score,
            weighted_score=weighted_score,
            total_band=self.band(total_score) if scores else None,
            weighted_band=self.band(weighted_score) if weighted_score > 0 else None,
            categories=self.group_by_category(scores, criteria),
            criteria_scores=criteria_scores,
        )

    @staticmethod
    def total_score(scores: Mapping[str, int]) -> float:
        """Arithmetic mean of every submitted score, 0 when none."""
        values = [float(value) for value in scores.values()]
        if not values:
            return 0.0
        return sum(values) / len(values)

    @staticmethod
    def weighted_score(
        scores: Mapping[str, int],
        criteria: Iterable[EvaluationCriterion],
    ) -> float:
        """Weight-normalized mean over criteria that carry a submitted score."""
        weighted_sum = 0.0
        total_weight = 0.0
        for criterion in criteria:
            score = scores.get(criterion.criterion_id)
            if score is None:
                continue
            weight = criterion.weight / 100
            weighted_sum += score * weight
            total_weight += weight
        return weighted_sum / total_weight if total_weight > 0 else 0.0

    def group_by_category(
        self,
        scores: Mapping[str, int],
        criteria: Sequence[EvaluationCriterion],
    ) -> list[CategoryScore]:
        grouped: dict[str, list[EvaluationCriterion]] = {
            category: [] for category in CRITERION_CATEGORIES
        }
        for criterion in criteria:
            grouped.setdefault(criterion.category, []).append(criterion)

        categories: list[CategoryScore] = []
        for category, members in grouped.items():
            if not members:
                continue
            values = [
                float(scores[member.criterion_id])
                for member in members
                if member.criterion_id in scores
            ]
            average = sum(values) / len(values) if values else 0.0
            categories.append(
                CategoryScore(
                    category=category,
                    average_score=average,
                    total_weight=sum(member.weight for member in members),
                    scored_criteria=len(values),
                    band=self.band(average) if values else None,
                )
            )
        return categories

    def band(self, score: float) -> ScoreBand:
        if score >= self._config.excellent_threshold:
            return "excellent"
        if score >= self._config.good_threshold:
            return "good"
        if score >= self._config.fair_threshold:
            return "fair"
        return "poor"
