"""
Talent profile document for O1-Match.
"""

from typing import Optional

from pydantic import Field, field_validator

from o1match.utils.constants import ProfileVisibility

from .base import BaseDocument
from .profile import TalentMatchProfile


class TalentProfile(BaseDocument):
    """A stored talent profile (collection ``talent_profiles``)."""

    candidate_id: Optional[str] = None

    # Matchable attributes
    o1_score: int = Field(0, ge=0, le=100)
    criteria_met: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    education_level: Optional[str] = None
    years_experience: Optional[int] = Field(None, ge=0)

    # Display attributes
    current_job_title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    visa_status: Optional[str] = None
    visibility: ProfileVisibility = ProfileVisibility.PRIVATE

    @field_validator("o1_score", mode="before")
    @classmethod
    def default_score(cls, v: Optional[int]) -> int:
        return 0 if v is None else v

    @field_validator("criteria_met", "skills", mode="before")
    @classmethod
    def default_list(cls, v: Optional[list[str]]) -> list[str]:
        return [] if v is None else v

    def to_match_profile(self) -> TalentMatchProfile:
        """Snapshot the matchable attributes for the match engine."""
        return TalentMatchProfile(
            id=self.id,
            o1_score=self.o1_score,
            criteria_met=self.criteria_met,
            skills=self.skills,
            education_level=self.education_level,
            years_experience=self.years_experience,
        )
