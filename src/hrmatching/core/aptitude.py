"""Aptitude-test (SPI) analysis against a job type."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from typing import Callable, Literal

from ..schemas import AptitudeResult, PersonalityProfile

TeamFit = Literal["high", "medium", "low"]

Trait = tuple[str, str]
Comparator = Callable[[float, float], bool]


@dataclass(frozen=True)
class JobFitProfile:
    """Traits averaged into each of the three job-fit blend components."""

    job_fit: tuple[str, ...]
    cognitive: tuple[str, ...]
    behavioral: tuple[str, ...]


_SALES_PROFILE = JobFitProfile(
    job_fit=("sales",),
    cognitive=("practical", "strategic"),
    behavioral=("communication", "initiative", "persistence"),
)

JOB_FIT_PROFILES: dict[str, JobFitProfile] = {
    "fresh_sales": _SALES_PROFILE,
    "experienced_sales": _SALES_PROFILE,
    "engineer": JobFitProfile(
        job_fit=("technical",),
        cognitive=("analytical", "practical"),
        behavioral=("persistence", "adaptability"),
    ),
    "specialist": JobFitProfile(
        job_fit=("technical", "management"),
        cognitive=("analytical", "strategic"),
        behavioral=("leadership", "initiative"),
    ),
    "part_time_base": JobFitProfile(
        job_fit=("service",),
        cognitive=("practical",),
        behavioral=("teamwork", "communication", "adaptability"),
    ),
    "part_time_sales": JobFitProfile(
        job_fit=("sales", "service"),
        cognitive=("practical",),
        behavioral=("communication", "persistence", "initiative"),
    ),
}

DEFAULT_JOB_FIT_PROFILE = JobFitProfile(
    job_fit=("sales", "technical", "management"),
    cognitive=("analytical", "practical"),
    behavioral=("teamwork", "communication"),
)

FALLBACK_ROLES: dict[str, str] = {
    "fresh_sales": "New-graduate sales (develop from fundamentals)",
    "experienced_sales": "Experienced sales (immediate contributor)",
    "engineer": "Engineering role",
    "specialist": "Specialist role",
    "part_time_base": "Part-time staff (branch / store)",
    "part_time_sales": "Part-time staff (sales support)",
}
DEFAULT_FALLBACK_ROLE = "Generalist track, placed by aptitude"

CLOSING_RECOMMENDATIONS: dict[str, str] = {
    "fresh_sales": "Use sales fundamentals training and a senior-mentor program",
    "experienced_sales": "Leverage existing skills while supporting adaptation to company culture",
    "engineer": "Pair technical training with opportunities to build communication skills",
    "specialist": "Provide an environment that uses their expertise and room to contribute organization-wide",
    "part_time_base": "Support customer-service skills training and basic store operations knowledge",
    "part_time_sales": "Focus support on sales fundamentals and telephone handling skills",
}

STRENGTH_TRAITS: tuple[tuple[str, str, str], ...] = (
    ("behavioral", "leadership", "Leadership"),
    ("behavioral", "teamwork", "Teamwork"),
    ("behavioral", "initiative", "Initiative and ownership"),
    ("behavioral", "persistence", "Persistence and follow-through"),
    ("behavioral", "adaptability", "Adaptability and flexibility"),
    ("behavioral", "communication", "Communication"),
    ("cognitive", "analytical", "Analytical thinking"),
    ("cognitive", "creative", "Creative thinking"),
    ("cognitive", "practical", "Practical thinking"),
    ("cognitive", "strategic", "Strategic thinking"),
    ("emotional", "stability", "Emotional stability"),
    ("emotional", "stress", "Stress tolerance"),
    ("emotional", "optimism", "Optimism"),
    ("emotional", "empathy", "Empathy"),
)

DEVELOPMENT_TRAITS: tuple[tuple[str, str, str], ...] = (
    ("behavioral", "leadership", "Demonstrating leadership"),
    ("behavioral", "teamwork", "Improving teamwork"),
    ("behavioral", "initiative", "Taking more initiative"),
    ("behavioral", "persistence", "Building persistence"),
    ("behavioral", "communication", "Improving communication"),
    ("cognitive", "analytical", "Strengthening analytical skills"),
    ("cognitive", "practical", "Improving practical execution"),
    ("emotional", "stability", "Improving emotional stability"),
    ("emotional", "stress", "Improving stress management"),
)


@dataclass(frozen=True)
class TraitRule:
    """Conjunction of trait comparisons that emits ``message`` when all hold."""

    conditions: tuple[tuple[Trait, Comparator, float], ...]
    message: str

    def matches(self, personality: PersonalityProfile) -> bool:
        return all(
            compare(personality.trait(*trait), threshold)
            for trait, compare, threshold in self.conditions
        )


_gt = operator.gt
_lt = operator.lt

INSIGHT_RULES: tuple[TraitRule, ...] = (
    TraitRule(
        ((("behavioral", "leadership"), _gt, 60), (("behavioral", "teamwork"), _gt, 60)),
        "Balances leadership and teamwork; can act as a core member of the organization",
    ),
    TraitRule(
        ((("behavioral", "initiative"), _gt, 70), (("behavioral", "persistence"), _gt, 70)),
        "Highly proactive and persistent; stays resilient on difficult problems",
    ),
    TraitRule(
        ((("cognitive", "analytical"), _gt, 60), (("cognitive", "practical"), _gt, 60)),
        "Combines analysis with practical execution across theory and day-to-day work",
    ),
    TraitRule(
        ((("emotional", "stability"), _gt, 60), (("emotional", "stress"), _gt, 60)),
        "Emotionally stable; stays calm in high-pressure environments",
    ),
    TraitRule(
        ((("behavioral", "communication"), _gt, 70), (("emotional", "empathy"), _gt, 60)),
        "Strong communication and empathy; builds relationships smoothly",
    ),
    TraitRule(
        ((("cognitive", "creative"), _gt, 70), (("cognitive", "analytical"), _lt, 50)),
        "Highly creative but needs a stronger analytical approach",
    ),
    TraitRule(
        ((("behavioral", "leadership"), _gt, 70), (("behavioral", "teamwork"), _lt, 50)),
        "Strong leadership, but cooperation as a team member needs attention",
    ),
)

RISK_TRAITS: tuple[tuple[str, str, str], ...] = (
    ("emotional", "stability", "Performance may fluctuate due to emotional instability"),
    ("emotional", "stress", "Low stress tolerance raises attrition risk"),
    ("behavioral", "teamwork", "Limited teamwork may hinder organizational adaptation"),
    ("behavioral", "communication", "Limited communication may cause misunderstandings and friction"),
    ("behavioral", "adaptability", "Difficulty adapting to change may lower work efficiency"),
)
LOW_RELIABILITY_RISK = "Low response reliability; interpret results with care"

RECOMMENDATION_RULES: tuple[TraitRule, ...] = (
    TraitRule(
        ((("behavioral", "leadership"), _gt, 60),),
        "Assign projects or roles that use their leadership early on",
    ),
    TraitRule(
        ((("cognitive", "analytical"), _gt, 60),),
        "Offer involvement in planning and strategy work that uses their analytical skills",
    ),
    TraitRule(
        ((("behavioral", "communication"), _gt, 60),),
        "Consider them for external negotiation or internal coordination roles",
    ),
    TraitRule(
        ((("emotional", "stress"), _lt, 50),),
        "Provide stress-management training and mental-health support",
    ),
    TraitRule(
        ((("behavioral", "teamwork"), _lt, 50),),
        "Increase team-building training and group-work opportunities",
    ),
    TraitRule(
        ((("cognitive", "practical"), _lt, 50),),
        "Emphasize OJT and on-site training to build hands-on experience",
    ),
)


@dataclass
class AptitudeConfig:
    """Weights and thresholds for aptitude analysis."""

    job_fit_weight: float = 0.4
    cognitive_weight: float = 0.3
    behavioral_weight: float = 0.3
    ability_weight: float = 0.2
    strength_threshold: float = 70.0
    development_threshold: float = 40.0
    ability_strength_threshold: float = 60.0
    ability_development_threshold: float = 40.0
    role_threshold: float = 60.0
    team_fit_weights: dict[str, float] = None  # type: ignore[assignment]
    team_fit_high: float = 65.0
    team_fit_medium: float = 45.0
    management_weights: dict[str, float] = None  # type: ignore[assignment]
    risk_threshold: float = 30.0
    max_strengths: int = 5
    max_developments: int = 3
    max_insights: int = 4
    max_risks: int = 3
    max_recommendations: int = 4

    def __post_init__(self) -> None:
        if self.team_fit_weights is None:
            self.team_fit_weights = {
                "behavioral.teamwork": 0.30,
                "behavioral.communication": 0.25,
                "emotional.empathy": 0.20,
                "behavioral.adaptability": 0.15,
                "emotional.stability": 0.10,
            }
        if self.management_weights is None:
            self.management_weights = {
                "behavioral.leadership": 0.25,
                "cognitive.strategic": 0.20,
                "behavioral.communication": 0.15,
                "emotional.stability": 0.15,
                "job_fit.management": 0.10,
                "behavioral.initiative": 0.10,
                "emotional.stress": 0.05,
            }


@dataclass(slots=True)
class AptitudeAnalysis:
    """Job-fit analysis derived from an aptitude result."""

    job_fit_score: int
    strength_areas: list[str]
    development_areas: list[str]
    personality_insights: list[str]
    recommended_role: str
    team_fit: TeamFit
    management_potential: int
    risk_factors: list[str]
    recommendations: list[str]
    summary: str = ""
    metadata: dict[str, float] = field(default_factory=dict)


class AptitudeAnalyzer:
    """Translate raw SPI sub-scores into a job-fit analysis."""

    method = "aptitude"

    def __init__(
        self,
        *,
        config: AptitudeConfig | None = None,
        profiles: dict[str, JobFitProfile] | None = None,
    ) -> None:
        self._config = config or AptitudeConfig()
        self._profiles = dict(JOB_FIT_PROFILES)
        if profiles:
            self._profiles.update(profiles)

    def analyze(self, aptitude: AptitudeResult | None, job_type: str) -> AptitudeAnalysis | None:
        """Return ``None`` when no aptitude test was administered."""
        if aptitude is None:
            return None

        base_score = self._base_job_fit(aptitude.personality, job_type)
        team_score = self._weighted_traits(aptitude.personality, self._config.team_fit_weights)

        return AptitudeAnalysis(
            job_fit_score=self.job_fit_score(aptitude, job_type),
            strength_areas=self.strength_areas(aptitude),
            development_areas=self.development_areas(aptitude),
            personality_insights=self.personality_insights(aptitude),
            recommended_role=self.recommended_role(aptitude, job_type),
            team_fit=self.team_fit(aptitude),
            management_potential=self.management_potential(aptitude),
            risk_factors=self.risk_factors(aptitude),
            recommendations=self.recommendations(aptitude, job_type),
            summary=self.summarize(aptitude),
            metadata={
                "base_job_fit": base_score,
                "ability_score": aptitude.ability_score,
                "team_score": team_score,
            },
        )

    def job_fit_score(self, aptitude: AptitudeResult, job_type: str) -> int:
        base_score = self._base_job_fit(aptitude.personality, job_type)
        ability_weight = self._config.ability_weight
        blended = base_score * (1 - ability_weight) + aptitude.ability_score * ability_weight
        return _clamp_round(blended)

    def _base_job_fit(self, personality: PersonalityProfile, job_type: str) -> float:
        profile = self._profiles.get(job_type, DEFAULT_JOB_FIT_PROFILE)
        return (
            _mean(personality, "job_fit", profile.job_fit) * self._config.job_fit_weight
            + _mean(personality, "cognitive", profile.cognitive) * self._config.cognitive_weight
            + _mean(personality, "behavioral", profile.behavioral) * self._config.behavioral_weight
        )

    def strength_areas(self, aptitude: AptitudeResult) -> list[str]:
        threshold = self._config.strength_threshold
        strengths = [
            label
            for block, trait, label in STRENGTH_TRAITS
            if aptitude.personality.trait(block, trait) >= threshold
        ]
        ability_threshold = self._config.ability_strength_threshold
        if aptitude.language.total_score >= ability_threshold:
            strengths.append("Verbal ability")
        if aptitude.non_verbal.total_score >= ability_threshold:
            strengths.append("Numerical and logical reasoning")
        return strengths[: self._config.max_strengths]

    def development_areas(self, aptitude: AptitudeResult) -> list[str]:
        threshold = self._config.development_threshold
        developments = [
            label
            for block, trait, label in DEVELOPMENT_TRAITS
            if aptitude.personality.trait(block, trait) < threshold
        ]
        ability_threshold = self._config.ability_development_threshold
        if aptitude.language.total_score < ability_threshold:
            developments.append("Improving verbal ability")
        if aptitude.non_verbal.total_score < ability_threshold:
            developments.append("Improving numerical and logical reasoning")
        return developments[: self._config.max_developments]

    def personality_insights(self, aptitude: AptitudeResult) -> list[str]:
        insights = [rule.message for rule in INSIGHT_RULES if rule.matches(aptitude.personality)]
        return insights[: self._config.max_insights]

    def recommended_role(self, aptitude: AptitudeResult, job_type: str) -> str:
        personality = aptitude.personality
        job_fit = personality.job_fit
        candidates = (
            ("sales", job_fit.sales),
            ("management", job_fit.management),
            ("technical", job_fit.technical),
            ("creative", job_fit.creative),
            ("service", job_fit.service),
        )
        # max() keeps the first entry on ties.
        area, value = max(candidates, key=lambda item: item[1])
        if value > self._config.role_threshold:
            if area == "sales":
                if personality.behavioral.leadership > self._config.role_threshold:
                    return "Sales team leader / manager"
                return "Sales specialist"
            if area == "management":
                return "Project manager / management track"
            if area == "technical":
                if personality.cognitive.creative > self._config.role_threshold:
                    return "Technical specialist / innovator"
                return "Engineer / technologist"
            if area == "creative":
                return "Creative / planning role"
            return "Customer service / support"
        return FALLBACK_ROLES.get(job_type, DEFAULT_FALLBACK_ROLE)

    def team_fit(self, aptitude: AptitudeResult) -> TeamFit:
        score = self._weighted_traits(aptitude.personality, self._config.team_fit_weights)
        if score >= self._config.team_fit_high:
            return "high"
        if score >= self._config.team_fit_medium:
            return "medium"
        return "low"

    def management_potential(self, aptitude: AptitudeResult) -> int:
        score = self._weighted_traits(aptitude.personality, self._config.management_weights)
        return _clamp_round(score)

    def risk_factors(self, aptitude: AptitudeResult) -> list[str]:
        threshold = self._config.risk_threshold
        risks = [
            message
            for block, trait, message in RISK_TRAITS
            if aptitude.personality.trait(block, trait) < threshold
        ]
        if aptitude.reliability == "low":
            risks.append(LOW_RELIABILITY_RISK)
        return risks[: self._config.max_risks]

    def recommendations(self, aptitude: AptitudeResult, job_type: str) -> list[str]:
        recommendations = [
            rule.message for rule in RECOMMENDATION_RULES if rule.matches(aptitude.personality)
        ]
        closing = CLOSING_RECOMMENDATIONS.get(job_type)
        if closing:
            recommendations.append(closing)
        return recommendations[: self._config.max_recommendations]

    def summarize(self, aptitude: AptitudeResult) -> str:
        """One-sentence description of ability level and personality type."""
        percentile = (
            f"{aptitude.percentile:g}th percentile overall"
            if aptitude.percentile is not None
            else "percentile not reported"
        )
        return (
            f"Shows {self._ability_level(aptitude)} baseline ability with a "
            f"{self._personality_type(aptitude.personality)} profile; "
            f"verbal {aptitude.language.total_score:g}, "
            f"non-verbal {aptitude.non_verbal.total_score:g}, {percentile}."
        )

    @staticmethod
    def _ability_level(aptitude: AptitudeResult) -> str:
        average = aptitude.ability_score
        if average >= 60:
            return "high"
        if average >= 45:
            return "standard"
        return "basic"

    @staticmethod
    def _personality_type(personality: PersonalityProfile) -> str:
        behavioral = personality.behavioral
        cognitive = personality.cognitive
        if behavioral.leadership > 60 and cognitive.strategic > 60:
            return "leadership-and-strategy oriented"
        if behavioral.teamwork > 60 and behavioral.communication > 60:
            return "teamwork-and-communication oriented"
        if cognitive.analytical > 60 and cognitive.practical > 60:
            return "analytical and practical"
        if behavioral.initiative > 60 and behavioral.persistence > 60:
            return "proactive and persistent"
        return "well-balanced"

    @staticmethod
    def _weighted_traits(personality: PersonalityProfile, weights: dict[str, float]) -> float:
        total = 0.0
        for key, weight in weights.items():
            block, trait = key.split(".", 1)
            total += personality.trait(block, trait) * weight
        return total


def _mean(personality: PersonalityProfile, block: str, traits: tuple[str, ...]) -> float:
    if not traits:
        return 0.0
    return sum(personality.trait(block, trait) for trait in traits) / len(traits)


def _clamp_round(value: float) -> int:
    # Half-up rounding; round() would send 72.5 to 72.
    return math.floor(max(0.0, min(100.0, value)) + 0.5)
