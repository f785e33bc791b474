"""Job type identifiers and per-job-type criteria configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .evaluation import EvaluationCriterion

JOB_TYPE_LABELS: dict[str, str] = {
    "fresh_sales": "New-graduate sales",
    "experienced_sales": "Experienced sales",
    "specialist": "Experienced specialist",
    "engineer": "Engineer",
    "part_time_base": "Part-time (branch)",
    "part_time_sales": "Part-time (sales)",
    "finance_accounting": "Finance & accounting",
    "human_resources": "Human resources",
    "business_development": "Business development",
    "marketing": "Marketing",
}


def job_type_label(job_type: str) -> str:
    """Display label for a job type, falling back to the raw identifier."""
    return JOB_TYPE_LABELS.get(job_type, job_type)


class JobTypeConfig(BaseModel):
    """Ordered evaluation criteria for a single job type."""

    job_type: str
    name: str = ""
    description: str = ""
    criteria: list[EvaluationCriterion] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def total_weight(self) -> float:
        return sum(criterion.weight for criterion in self.criteria)
