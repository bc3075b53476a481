"""
Match and scoring data models for O1-Match.

Defines the tunable factor weights, the per-factor breakdown, the display
details behind each factor, and the final match result.
"""

from typing import Optional

from pydantic import ConfigDict, Field, computed_field, model_validator

from o1match.utils.constants import DEFAULT_MATCHING_WEIGHTS, MatchCategory, MatchFactor

from .base import EmbeddedModel


class MatchingWeights(EmbeddedModel):
    """Weights of the five match factors. Must sum to 1.0."""

    o1_score: float = Field(default=DEFAULT_MATCHING_WEIGHTS["o1_score"], ge=0, le=1)
    criteria: float = Field(default=DEFAULT_MATCHING_WEIGHTS["criteria"], ge=0, le=1)
    skills: float = Field(default=DEFAULT_MATCHING_WEIGHTS["skills"], ge=0, le=1)
    education: float = Field(default=DEFAULT_MATCHING_WEIGHTS["education"], ge=0, le=1)
    experience: float = Field(default=DEFAULT_MATCHING_WEIGHTS["experience"], ge=0, le=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_total(self) -> "MatchingWeights":
        if abs(self.total_weight - 1.0) > 1e-6:
            raise ValueError(f"Matching weights must sum to 1.0, got {self.total_weight:.4f}")
        return self

    @classmethod
    def from_defaults(cls) -> "MatchingWeights":
        """Create matching weights from default constants."""
        return cls(**DEFAULT_MATCHING_WEIGHTS)

    def for_factor(self, factor: MatchFactor) -> float:
        return getattr(self, MatchFactor(factor).value)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {factor.value: self.for_factor(factor) for factor in MatchFactor}

    @property
    def total_weight(self) -> float:
        """Calculate sum of all weights."""
        return (
            self.o1_score
            + self.criteria
            + self.skills
            + self.education
            + self.experience
        )


class FactorScore(EmbeddedModel):
    """Sub-score of one factor and its contribution to the total."""

    score: float = Field(0.0, ge=0, le=100)
    weight: float = Field(0.0, ge=0, le=1)

    @computed_field
    @property
    def weighted(self) -> float:
        return self.score * self.weight


# -----------------------------------------------------------------------------
# Factor details
# -----------------------------------------------------------------------------


class ScoreRequirementMatch(EmbeddedModel):
    """Talent O-1 score against the job's minimum."""

    required: int = 0
    has: int = 0
    met: bool = True


class CriterionMatch(EmbeddedModel):
    """A single O-1 criterion row."""

    criterion: str
    preferred: bool = True  # False for criteria the job did not ask for
    has: bool = False


class SkillMatch(EmbeddedModel):
    """A single skill requirement row."""

    skill: str
    required: bool = True
    has: bool = False
    matched_by: Optional[str] = None  # Talent skill that satisfied it


class EducationMatch(EmbeddedModel):
    required: Optional[str] = None
    has: Optional[str] = None
    met: bool = True


class ExperienceMatch(EmbeddedModel):
    required: Optional[int] = None
    has: int = 0
    met: bool = True


class MatchDetails(EmbeddedModel):
    """Display detail for each factor of a match."""

    score_requirement: ScoreRequirementMatch = Field(default_factory=ScoreRequirementMatch)
    criteria_match: list[CriterionMatch] = Field(default_factory=list)
    skills_match: list[SkillMatch] = Field(default_factory=list)
    education_match: EducationMatch = Field(default_factory=EducationMatch)
    experience_match: ExperienceMatch = Field(default_factory=ExperienceMatch)

    @property
    def missing_required_skills(self) -> list[str]:
        return [s.skill for s in self.skills_match if s.required and not s.has]

    @property
    def missing_preferred_criteria(self) -> list[str]:
        return [c.criterion for c in self.criteria_match if c.preferred and not c.has]


# -----------------------------------------------------------------------------
# Result
# -----------------------------------------------------------------------------


class MatchResult(EmbeddedModel):
    """Complete result of matching a talent to a job."""

    model_config = ConfigDict(use_enum_values=False)

    overall_score: int = Field(0, ge=0, le=100)
    category: MatchCategory = MatchCategory.POOR
    summary: str = ""
    # Keyed by MatchFactor value
    breakdown: dict[str, FactorScore] = Field(default_factory=dict)
    details: MatchDetails = Field(default_factory=MatchDetails)

    def factor_score(self, factor: MatchFactor) -> float:
        """Sub-score of a factor, 0 if absent."""
        entry = self.breakdown.get(MatchFactor(factor).value)
        return entry.score if entry else 0.0


# -----------------------------------------------------------------------------
# Service responses
# -----------------------------------------------------------------------------


class SingleMatch(EmbeddedModel):
    """One talent scored against one job."""

    model_config = ConfigDict(use_enum_values=False)

    talent_id: str
    job_id: str
    match: MatchResult


class JobMatchSummary(EmbeddedModel):
    """A ranked job for a talent, with listing details for display."""

    job_id: str
    title: Optional[str] = None
    company_name: Optional[str] = None
    logo_url: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    work_arrangement: Optional[str] = None
    locations: list[str] = Field(default_factory=list)
    match_score: int
    match_category: MatchCategory
    match_summary: str


class TalentMatchSummary(EmbeddedModel):
    """A ranked talent for a job, with profile details for display."""

    talent_id: str
    candidate_id: Optional[str] = None
    o1_score: int
    current_job_title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    visa_status: Optional[str] = None
    criteria_met: list[str] = Field(default_factory=list)
    match_score: int
    match_category: MatchCategory
    match_summary: str
    breakdown: dict[str, FactorScore] = Field(default_factory=dict)
