"""
Shared test fixtures for the O1-Match test suite.

Sets environment variables before any o1match imports to prevent config
failures, then provides factory fixtures for match profiles and stored
documents, plus in-memory repositories for the match service.
"""

import os

# === Set environment BEFORE any o1match imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "o1match_test")

from typing import Any, Optional

import pytest
from bson import ObjectId
from loguru import logger

from o1match.core.matching import MatchingEngine
from o1match.data.models import (
    EmployerProfile,
    JobListing,
    JobMatchProfile,
    TalentMatchProfile,
    TalentProfile,
)
from o1match.services import MatchService
from o1match.utils.config import MatchingSettings
from o1match.utils.constants import JobStatus, ProfileVisibility

# Engine debug output stays off the test console
logger.remove()


# ---------------------------------------------------------------------------
# Factory fixtures for match profiles
# ---------------------------------------------------------------------------


@pytest.fixture
def make_talent():
    """Factory that returns a callable to build TalentMatchProfile objects."""

    def _factory(**overrides: Any) -> TalentMatchProfile:
        data = {
            "id": "talent-1",
            "o1_score": 70,
            "criteria_met": ["critical_employment", "original_contribution"],
            "skills": ["python", "machine learning"],
            "education_level": "masters",
            "years_experience": 6,
        }
        data.update(overrides)
        return TalentMatchProfile(**data)

    return _factory


@pytest.fixture
def make_job():
    """Factory that returns a callable to build JobMatchProfile objects."""

    def _factory(**overrides: Any) -> JobMatchProfile:
        data = {
            "id": "job-1",
            "min_score": 65,
            "preferred_criteria": ["critical_employment"],
            "required_skills": ["python"],
            "preferred_skills": ["machine learning", "aws"],
            "required_education": "bachelors",
            "min_experience": 3,
        }
        data.update(overrides)
        return JobMatchProfile(**data)

    return _factory


@pytest.fixture
def shortfall_talent(make_talent):
    """Talent far below the default job on every factor."""
    return make_talent(
        id="talent-2",
        o1_score=40,
        criteria_met=[],
        skills=[],
        education_level=None,
        years_experience=0,
    )


# ---------------------------------------------------------------------------
# Matching engine fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def matching_engine():
    """MatchingEngine with the default weights."""
    return MatchingEngine()


# ---------------------------------------------------------------------------
# Stored document factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_talent_profile():
    """Factory for stored TalentProfile documents with a fresh ObjectId."""

    def _factory(**overrides: Any) -> TalentProfile:
        data = {
            "_id": ObjectId(),
            "candidate_id": "cand-001",
            "o1_score": 70,
            "criteria_met": ["critical_employment"],
            "skills": ["python"],
            "education_level": "masters",
            "years_experience": 6,
            "current_job_title": "ML Engineer",
            "city": "Austin",
            "state": "TX",
            "visa_status": "H-1B",
            "visibility": ProfileVisibility.PUBLIC,
        }
        data.update(overrides)
        return TalentProfile(**data)

    return _factory


@pytest.fixture
def employer():
    return EmployerProfile(
        _id=ObjectId(),
        user_id="user-employer",
        company_name="Acme Robotics",
        logo_url="https://example.com/acme.png",
    )


@pytest.fixture
def make_job_listing(employer):
    """Factory for stored JobListing documents owned by ``employer``."""

    def _factory(**overrides: Any) -> JobListing:
        data = {
            "_id": ObjectId(),
            "employer_id": employer.id,
            "title": "Research Engineer",
            "status": JobStatus.ACTIVE,
            "min_score": 65,
            "preferred_criteria": ["critical_employment"],
            "required_skills": ["python"],
            "preferred_skills": ["aws"],
            "required_education": "bachelors",
            "min_experience": 3,
            "salary_min": 150000,
            "salary_max": 190000,
            "work_arrangement": "hybrid",
            "locations": ["Austin, TX"],
        }
        data.update(overrides)
        return JobListing(**data)

    return _factory


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class InMemoryTalentRepository:
    def __init__(self, talents: Optional[list[TalentProfile]] = None):
        self.talents = list(talents or [])
        self.pool_queries: list[tuple[float, int]] = []

    def get_by_id(self, id_value: Any) -> Optional[TalentProfile]:
        return next((t for t in self.talents if str(t.id) == str(id_value)), None)

    def get_public_pool(self, min_o1_score: float = 0, limit: int = 100) -> list[TalentProfile]:
        self.pool_queries.append((min_o1_score, limit))
        pool = [
            t for t in self.talents
            if t.visibility == ProfileVisibility.PUBLIC.value and t.o1_score >= min_o1_score
        ]
        return sorted(pool, key=lambda t: t.o1_score, reverse=True)[:limit]


class InMemoryJobRepository:
    def __init__(self, jobs: Optional[list[JobListing]] = None):
        self.jobs = list(jobs or [])

    def get_by_id(self, id_value: Any) -> Optional[JobListing]:
        return next((j for j in self.jobs if str(j.id) == str(id_value)), None)

    def get_active_jobs(self, limit: int = 100) -> list[JobListing]:
        return [j for j in self.jobs if j.status == JobStatus.ACTIVE.value][:limit]


class InMemoryEmployerRepository:
    def __init__(self, employers: Optional[list[EmployerProfile]] = None):
        self.employers = list(employers or [])

    def get_by_user_id(self, user_id: str) -> Optional[EmployerProfile]:
        return next((e for e in self.employers if e.user_id == user_id), None)

    def get_many(self, ids: list) -> dict[str, EmployerProfile]:
        wanted = {str(i) for i in ids}
        return {str(e.id): e for e in self.employers if str(e.id) in wanted}


@pytest.fixture
def make_match_service(matching_engine):
    """Factory building a MatchService over in-memory repositories."""

    def _factory(
        talents: Optional[list[TalentProfile]] = None,
        jobs: Optional[list[JobListing]] = None,
        employers: Optional[list[EmployerProfile]] = None,
        **settings: Any,
    ) -> MatchService:
        return MatchService(
            talent_repository=InMemoryTalentRepository(talents),
            job_repository=InMemoryJobRepository(jobs),
            employer_repository=InMemoryEmployerRepository(employers),
            engine=matching_engine,
            settings=MatchingSettings(**settings),
        )

    return _factory
