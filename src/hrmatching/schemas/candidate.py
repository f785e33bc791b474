"""Candidate and aptitude-test (SPI) records."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ReliabilityLevel = Literal["high", "medium", "low"]

# Personality traits are 0-100; the midpoint stands in for an omitted trait.
_TRAIT_DEFAULT = 50.0


class _StoreRecord(BaseModel):
    """Accepts both snake_case names and the record store's camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class LanguageScore(_StoreRecord):
    """Language ability section (deviation scale)."""

    total_score: float
    vocabulary: float | None = None
    reading: float | None = None
    grammar: float | None = None
    percentile: float | None = None


class NonVerbalScore(_StoreRecord):
    """Non-verbal ability section (deviation scale)."""

    total_score: float
    calculation: float | None = None
    logic: float | None = None
    spatial: float | None = None
    data_analysis: float | None = None
    percentile: float | None = None


class BehavioralTraits(_StoreRecord):
    leadership: float = _TRAIT_DEFAULT
    teamwork: float = _TRAIT_DEFAULT
    initiative: float = _TRAIT_DEFAULT
    persistence: float = _TRAIT_DEFAULT
    adaptability: float = _TRAIT_DEFAULT
    communication: float = _TRAIT_DEFAULT


class CognitiveTraits(_StoreRecord):
    analytical: float = _TRAIT_DEFAULT
    creative: float = _TRAIT_DEFAULT
    practical: float = _TRAIT_DEFAULT
    strategic: float = _TRAIT_DEFAULT


class EmotionalTraits(_StoreRecord):
    stability: float = _TRAIT_DEFAULT
    stress: float = _TRAIT_DEFAULT
    optimism: float = _TRAIT_DEFAULT
    empathy: float = _TRAIT_DEFAULT


class JobFitTraits(_StoreRecord):
    sales: float = _TRAIT_DEFAULT
    management: float = _TRAIT_DEFAULT
    technical: float = _TRAIT_DEFAULT
    creative: float = _TRAIT_DEFAULT
    service: float = _TRAIT_DEFAULT


class PersonalityProfile(_StoreRecord):
    """Personality section split into the four trait blocks."""

    behavioral: BehavioralTraits = Field(default_factory=BehavioralTraits)
    cognitive: CognitiveTraits = Field(default_factory=CognitiveTraits)
    emotional: EmotionalTraits = Field(default_factory=EmotionalTraits)
    job_fit: JobFitTraits = Field(default_factory=JobFitTraits)

    def trait(self, block: str, name: str) -> float:
        """Return a trait by block and name, e.g. ``trait("job_fit", "sales")``."""
        return float(getattr(getattr(self, block), name))


class AptitudeResult(_StoreRecord):
    """Full SPI result attached to a candidate."""

    language: LanguageScore
    non_verbal: NonVerbalScore
    personality: PersonalityProfile = Field(default_factory=PersonalityProfile)
    total_score: float
    percentile: float | None = None
    reliability: ReliabilityLevel = "high"
    test_date: str | None = None
    test_version: str | None = None
    test_duration: int | None = None

    @property
    def ability_score(self) -> float:
        """Mean of the language and non-verbal totals."""
        return (self.language.total_score + self.non_verbal.total_score) / 2


class Candidate(_StoreRecord):
    """Applicant record as supplied by the record store."""

    candidate_id: str = Field(validation_alias=AliasChoices("candidate_id", "candidateId", "id"))
    name: str = ""
    email: str | None = None
    phone: str | None = None
    age: int | None = None
    education: str = ""
    major: str = ""
    experience: str = ""
    self_summary: str = Field(
        default="",
        validation_alias=AliasChoices("self_summary", "selfSummary", "selfPr"),
    )
    applied_job_type: str = Field(
        validation_alias=AliasChoices("applied_job_type", "appliedJobType", "appliedPosition"),
    )
    aptitude: AptitudeResult | None = Field(
        default=None,
        validation_alias=AliasChoices("aptitude", "spiResults"),
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )
