"""
Pydantic data models and schemas for O1-Match.

This module provides all data models used throughout the application,
including match engine inputs and outputs and stored documents.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin

# Match engine inputs
from .profile import JobMatchProfile, MatchProfile, TalentMatchProfile

# Match engine outputs and service responses
from .match import (
    CriterionMatch,
    EducationMatch,
    ExperienceMatch,
    FactorScore,
    JobMatchSummary,
    MatchDetails,
    MatchingWeights,
    MatchResult,
    ScoreRequirementMatch,
    SingleMatch,
    SkillMatch,
    TalentMatchSummary,
)

# Stored documents
from .job import EmployerProfile, JobListing
from .talent import TalentProfile

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    # Profiles
    "JobMatchProfile",
    "MatchProfile",
    "TalentMatchProfile",
    # Match
    "CriterionMatch",
    "EducationMatch",
    "ExperienceMatch",
    "FactorScore",
    "JobMatchSummary",
    "MatchDetails",
    "MatchingWeights",
    "MatchResult",
    "ScoreRequirementMatch",
    "SingleMatch",
    "SkillMatch",
    "TalentMatchSummary",
    # Documents
    "EmployerProfile",
    "JobListing",
    "TalentProfile",
]
