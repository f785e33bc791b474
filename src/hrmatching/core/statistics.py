"""Hiring outcome statistics over decided evaluations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..schemas import Evaluation


@dataclass(slots=True)
class JobTypeStats:
    total: int = 0
    hired: int = 0
    rate: float = 0.0


@dataclass(slots=True)
class HiringStatistics:
    """Totals and hiring rates (percent) for decided evaluations."""

    total_evaluated: int
    hired: int
    rejected: int
    overall_hiring_rate: float
    job_type_stats: dict[str, JobTypeStats] = field(default_factory=dict)


def summarize_history(evaluations: Iterable[Evaluation]) -> HiringStatistics:
    decided = [evaluation for evaluation in evaluations if evaluation.is_decided]

    job_type_stats: dict[str, JobTypeStats] = {}
    for evaluation in decided:
        stats = job_type_stats.setdefault(evaluation.job_type, JobTypeStats())
        stats.total += 1
        if evaluation.final_decision == "hired":
            stats.hired += 1
    for stats in job_type_stats.values():
        stats.rate = _percent(stats.hired, stats.total)

    hired = sum(1 for evaluation in decided if evaluation.final_decision == "hired")
    rejected = sum(1 for evaluation in decided if evaluation.final_decision == "rejected")
    return HiringStatistics(
        total_evaluated=len(decided),
        hired=hired,
        rejected=rejected,
        overall_hiring_rate=_percent(hired, len(decided)),
        job_type_stats=job_type_stats,
    )


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0
