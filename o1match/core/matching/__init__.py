"""Talent-job matching engine module."""

from .matching_engine import (
    JobMatch,
    MatchingEngine,
    TalentMatch,
    calculate_match_score,
    get_best_job_matches,
    get_best_talent_matches,
    get_matching_engine,
    reset_matching_engine,
)
from .skills import find_matching_skill, normalize_skill, skills_match

__all__ = [
    "JobMatch",
    "MatchingEngine",
    "TalentMatch",
    "calculate_match_score",
    "get_best_job_matches",
    "get_best_talent_matches",
    "get_matching_engine",
    "reset_matching_engine",
    "find_matching_skill",
    "normalize_skill",
    "skills_match",
]
