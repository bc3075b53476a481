"""
Match profiles: the normalized inputs of the match engine.

Profiles are immutable snapshots built from stored records. Every optional
attribute is resolved to a neutral default at construction time, so the
scoring code never has to deal with missing values:

- absent sets become empty sets
- absent numbers become 0 (for job requirements, 0 means "no requirement")
- absent or unrecognized education becomes ``EducationLevel.NONE``
  (for job requirements, NONE means "no requirement")
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from o1match.utils.constants import EducationLevel


def _to_tag_set(value: Any) -> frozenset[str]:
    """Coerce None, a string, or an iterable of strings into lowercase tags."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        return frozenset()
    return frozenset(
        item.strip().lower()
        for item in value
        if isinstance(item, str) and item.strip()
    )


def _to_score(value: Any) -> int:
    """Coerce to an int clamped into [0, 100]."""
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, score))


def _to_non_negative_int(value: Any) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


class MatchProfile(BaseModel):
    """Frozen base for match profiles."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return "" if v is None else str(v)


class TalentMatchProfile(MatchProfile):
    """A candidate's matchable attributes at the time of scoring."""

    o1_score: int = 0
    criteria_met: frozenset[str] = frozenset()
    skills: frozenset[str] = frozenset()
    education_level: EducationLevel = EducationLevel.NONE
    years_experience: int = 0

    @field_validator("o1_score", mode="before")
    @classmethod
    def normalize_score(cls, v: Any) -> int:
        return _to_score(v)

    @field_validator("criteria_met", "skills", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> frozenset[str]:
        return _to_tag_set(v)

    @field_validator("education_level", mode="before")
    @classmethod
    def normalize_education(cls, v: Any) -> EducationLevel:
        return EducationLevel.parse(v)

    @field_validator("years_experience", mode="before")
    @classmethod
    def normalize_years(cls, v: Any) -> int:
        return _to_non_negative_int(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TalentMatchProfile":
        """Build a profile from a stored talent record, ignoring extra fields."""
        return cls(
            id=record.get("id", record.get("_id")),
            o1_score=record.get("o1_score"),
            criteria_met=record.get("criteria_met"),
            skills=record.get("skills"),
            education_level=record.get("education_level"),
            years_experience=record.get("years_experience"),
        )


class JobMatchProfile(MatchProfile):
    """A job listing's requirements at the time of scoring."""

    min_score: int = 0
    preferred_criteria: frozenset[str] = frozenset()
    required_skills: frozenset[str] = frozenset()
    preferred_skills: frozenset[str] = frozenset()
    required_education: EducationLevel = EducationLevel.NONE
    min_experience: int = 0

    @field_validator("min_score", mode="before")
    @classmethod
    def normalize_score(cls, v: Any) -> int:
        return _to_score(v)

    @field_validator("preferred_criteria", "required_skills", "preferred_skills", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> frozenset[str]:
        return _to_tag_set(v)

    @field_validator("required_education", mode="before")
    @classmethod
    def normalize_education(cls, v: Any) -> EducationLevel:
        return EducationLevel.parse(v)

    @field_validator("min_experience", mode="before")
    @classmethod
    def normalize_years(cls, v: Any) -> int:
        return _to_non_negative_int(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "JobMatchProfile":
        """Build a profile from a stored job record, ignoring extra fields."""
        return cls(
            id=record.get("id", record.get("_id")),
            min_score=record.get("min_score"),
            preferred_criteria=record.get("preferred_criteria"),
            required_skills=record.get("required_skills"),
            preferred_skills=record.get("preferred_skills"),
            required_education=record.get("required_education"),
            min_experience=record.get("min_experience"),
        )

    @property
    def has_skill_requirements(self) -> bool:
        return bool(self.required_skills or self.preferred_skills)
