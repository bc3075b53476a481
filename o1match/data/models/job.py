"""
Job listing and employer documents for O1-Match.

Defines the schema for job listings, their match requirements, and the
employer profiles that own them.
"""

from typing import Optional

from pydantic import Field, field_validator

from o1match.utils.constants import JobStatus

from .base import BaseDocument, PyObjectId
from .profile import JobMatchProfile


class EmployerProfile(BaseDocument):
    """A stored employer profile (collection ``employer_profiles``)."""

    user_id: str
    company_name: str
    logo_url: Optional[str] = None


class JobListing(BaseDocument):
    """A stored job listing (collection ``job_listings``)."""

    employer_id: Optional[PyObjectId] = None
    title: str = ""
    status: JobStatus = JobStatus.DRAFT

    # Match requirements
    min_score: Optional[int] = Field(None, ge=0, le=100)
    preferred_criteria: list[str] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    required_education: Optional[str] = None
    min_experience: Optional[int] = Field(None, ge=0)

    # Display attributes
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    work_arrangement: Optional[str] = None  # onsite, remote, hybrid
    locations: list[str] = Field(default_factory=list)

    @field_validator("preferred_criteria", "required_skills", "preferred_skills", "locations", mode="before")
    @classmethod
    def default_list(cls, v: Optional[list[str]]) -> list[str]:
        return [] if v is None else v

    @field_validator("salary_min", "salary_max")
    @classmethod
    def validate_salary(cls, v: Optional[float]) -> Optional[float]:
        """Validate salary amount is non-negative."""
        if v is not None and v < 0:
            raise ValueError("Salary amount must be non-negative")
        return v

    def to_match_profile(self) -> JobMatchProfile:
        """Snapshot the requirements for the match engine."""
        return JobMatchProfile(
            id=self.id,
            min_score=self.min_score,
            preferred_criteria=self.preferred_criteria,
            required_skills=self.required_skills,
            preferred_skills=self.preferred_skills,
            required_education=self.required_education,
            min_experience=self.min_experience,
        )
