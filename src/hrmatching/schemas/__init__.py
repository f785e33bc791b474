"""Pydantic schema definitions for store records and configuration."""

from __future__ import annotations

from .candidate import (
    AptitudeResult,
    BehavioralTraits,
    Candidate,
    CognitiveTraits,
    EmotionalTraits,
    JobFitTraits,
    LanguageScore,
    NonVerbalScore,
    PersonalityProfile,
)
from .evaluation import CRITERION_CATEGORIES, Evaluation, EvaluationCriterion
from .job import JOB_TYPE_LABELS, JobTypeConfig, job_type_label

__all__ = [
    "AptitudeResult",
    "BehavioralTraits",
    "CRITERION_CATEGORIES",
    "Candidate",
    "CognitiveTraits",
    "EmotionalTraits",
    "Evaluation",
    "EvaluationCriterion",
    "JOB_TYPE_LABELS",
    "JobFitTraits",
    "JobTypeConfig",
    "LanguageScore",
    "NonVerbalScore",
    "PersonalityProfile",
    "job_type_label",
]
