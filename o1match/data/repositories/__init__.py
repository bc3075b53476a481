"""
Database repositories for O1-Match data access.

This module provides repository classes for the profile store collections,
implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .employer_repository import EmployerRepository, get_employer_repository
from .job_repository import JobRepository, get_job_repository
from .talent_repository import TalentRepository, get_talent_repository

__all__ = [
    # Base
    "BaseRepository",
    # Employer
    "EmployerRepository",
    "get_employer_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Talent
    "TalentRepository",
    "get_talent_repository",
]
