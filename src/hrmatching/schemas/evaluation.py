"""Evaluation criteria and per-candidate evaluation records."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RecommendationTag = Literal["hire", "consider", "reject"]
FinalDecision = Literal["hired", "rejected", "pending"]

# Report order for the built-in categories; other labels follow in first-seen order.
CRITERION_CATEGORIES: tuple[str, ...] = ("ability_experience", "values", "orientation")


class EvaluationCriterion(BaseModel):
    """Weighted criterion configured for a job type."""

    criterion_id: str = Field(validation_alias=AliasChoices("criterion_id", "criterionId", "id"))
    name: str = ""
    description: str = ""
    weight: float = 0.0
    category: str = CRITERION_CATEGORIES[0]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Evaluation(BaseModel):
    """Recruiter scoring pass for one candidate (scores are 1-4)."""

    candidate_id: str
    job_type: str
    scores: dict[str, int] = Field(default_factory=dict)
    comments: dict[str, str] = Field(default_factory=dict)
    overall_comment: str = ""
    recommendation: RecommendationTag = "consider"
    is_complete: bool = False
    final_decision: FinalDecision | None = None
    evaluator_id: str | None = None
    evaluator_name: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    @property
    def is_decided(self) -> bool:
        """True once the evaluation is complete with a hired/rejected outcome."""
        return self.is_complete and self.final_decision in ("hired", "rejected")
