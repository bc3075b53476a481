"""
Application-wide constants for O1-Match.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_DISPLAY_NAME: Final[str] = "O-1 Talent and Job Matching"


# =============================================================================
# Collections
# =============================================================================

TALENT_COLLECTION: Final[str] = "talent_profiles"
JOB_COLLECTION: Final[str] = "job_listings"
EMPLOYER_COLLECTION: Final[str] = "employer_profiles"


# =============================================================================
# Scoring Constants
# =============================================================================

# Default weights for the five match factors (must sum to 1.0)
DEFAULT_MATCHING_WEIGHTS: Final[dict[str, float]] = {
    "o1_score": 0.40,
    "criteria": 0.30,
    "skills": 0.20,
    "education": 0.05,
    "experience": 0.05,
}

# Lower bound (inclusive) of each match category, on the 0-100 scale
SCORE_THRESHOLDS: Final[dict[str, int]] = {
    "excellent": 80,
    "strong": 65,
    "moderate": 50,
    "weak": 35,
}

# O-1 score factor
SCORE_AT_THRESHOLD: Final[float] = 80.0
SCORE_EXCESS_BONUS: Final[float] = 0.5
SCORE_BELOW_THRESHOLD_CEILING: Final[float] = 70.0

# Criteria factor
EXTRA_CRITERION_BONUS: Final[float] = 5.0
EXTRA_CRITERIA_BONUS_CAP: Final[float] = 20.0

# Skills factor (points out of 100)
REQUIRED_SKILLS_POINTS: Final[float] = 60.0
PREFERRED_SKILLS_POINTS: Final[float] = 40.0
MIN_PARTIAL_SKILL_LENGTH: Final[int] = 3

# Education factor
EDUCATION_GAP_PENALTY: Final[float] = 30.0

# Factors scoring at or above this are reported as strengths in summaries
STRENGTH_THRESHOLD: Final[float] = 70.0
# Factors scoring below this are reported as deficiencies in summaries
DEFICIENCY_THRESHOLD: Final[float] = 50.0
MAX_LISTED_MISSING_SKILLS: Final[int] = 3


# =============================================================================
# Skill Synonyms
# =============================================================================

# Spellings whose symbols carry meaning, rewritten before punctuation is dropped
SKILL_SYMBOL_SPELLINGS: Final[dict[str, str]] = {
    "c++": "cpp",
    "c#": "csharp",
    "f#": "fsharp",
    ".net": "dotnet",
}

# Canonical skill -> alternative spellings. Compared after normalization.
SKILL_SYNONYMS: Final[dict[str, tuple[str, ...]]] = {
    "javascript": ("js", "ecmascript", "es6", "es2015+", "vanilla js"),
    "typescript": ("ts",),
    "python": ("py", "python3"),
    "react": ("reactjs", "react.js"),
    "nodejs": ("node", "node.js"),
    "nextjs": ("next", "next.js"),
    "postgresql": ("postgres", "psql", "pg"),
    "mongodb": ("mongo",),
    "docker": ("containerization", "containers"),
    "kubernetes": ("k8s",),
    "aws": ("amazon web services", "amazon aws"),
    "gcp": ("google cloud", "google cloud platform"),
    "azure": ("microsoft azure",),
    "machine learning": ("ml", "machine-learning"),
    "deep learning": ("dl", "deep-learning"),
    "artificial intelligence": ("ai", "artificial-intelligence"),
    "data science": ("data-science", "ds"),
    "java": ("java8", "java11", "java17"),
    "csharp": ("c#", ".net", "dotnet"),
    "cpp": ("c++", "cplusplus"),
    "golang": ("go",),
    "rust": ("rustlang",),
    "sql": ("mysql", "mssql", "sqlite"),
    "graphql": ("gql",),
    "rest": ("restful", "rest api", "restful api"),
    "html": ("html5",),
    "css": ("css3", "scss", "sass", "less"),
    "git": ("github", "gitlab", "version control"),
    "agile": ("scrum", "kanban", "sprint"),
    "leadership": ("team lead", "tech lead", "engineering manager"),
    "communication": ("presentation", "public speaking"),
    "problem solving": ("analytical", "critical thinking"),
}


# =============================================================================
# Enums
# =============================================================================


class MatchFactor(str, Enum):
    """The weighted factors combined into an overall match score."""

    O1_SCORE = "o1_score"
    CRITERIA = "criteria"
    SKILLS = "skills"
    EDUCATION = "education"
    EXPERIENCE = "experience"

    @property
    def label(self) -> str:
        """Human-readable factor name."""
        return _FACTOR_LABELS[self]


_FACTOR_LABELS: Final[dict[MatchFactor, str]] = {
    MatchFactor.O1_SCORE: "O-1 score",
    MatchFactor.CRITERIA: "criteria overlap",
    MatchFactor.SKILLS: "skills",
    MatchFactor.EDUCATION: "education",
    MatchFactor.EXPERIENCE: "experience",
}


class MatchCategory(str, Enum):
    """Categorical levels for match scores."""

    EXCELLENT = "excellent"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: float) -> "MatchCategory":
        """Convert a 0-100 score to a category."""
        if score >= SCORE_THRESHOLDS["excellent"]:
            return cls.EXCELLENT
        elif score >= SCORE_THRESHOLDS["strong"]:
            return cls.STRONG
        elif score >= SCORE_THRESHOLDS["moderate"]:
            return cls.MODERATE
        elif score >= SCORE_THRESHOLDS["weak"]:
            return cls.WEAK
        return cls.POOR


class EducationLevel(str, Enum):
    """Ordinal education levels, lowest first."""

    NONE = "none"
    HIGH_SCHOOL = "high_school"
    ASSOCIATE = "associate"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"

    @property
    def rank(self) -> int:
        """Ordinal position (none == 0)."""
        return _EDUCATION_ORDER.index(self)

    @classmethod
    def parse(cls, value: object) -> "EducationLevel":
        """
        Leniently map a free-text degree to a level.

        Unrecognized or empty values map to NONE.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.NONE

        text = value.strip().lower()
        if not text:
            return cls.NONE
        if text in _EDUCATION_VALUES:
            return cls(text)

        words = set(text.replace("'", "").replace(".", "").replace("-", " ").split())
        compact = "".join(ch for ch in text if ch.isalpha())

        if "phd" in compact or "doctor" in compact or words & {"dphil", "edd", "md"}:
            return cls.PHD
        if "master" in compact or words & {"ms", "msc", "ma", "mba", "meng", "mfa"}:
            return cls.MASTERS
        if "bachelor" in compact or words & {"bs", "bsc", "ba", "beng", "bfa", "undergraduate"}:
            return cls.BACHELORS
        if "associate" in compact or words & {"aa", "as", "aas"}:
            return cls.ASSOCIATE
        if "highschool" in compact or words & {"ged", "diploma", "secondary"}:
            return cls.HIGH_SCHOOL
        return cls.NONE


_EDUCATION_ORDER: Final[tuple[EducationLevel, ...]] = tuple(EducationLevel)
_EDUCATION_VALUES: Final[frozenset[str]] = frozenset(level.value for level in EducationLevel)


class JobStatus(str, Enum):
    """Status of a job listing."""

    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"
    FILLED = "filled"


class ProfileVisibility(str, Enum):
    """Who may discover a talent profile."""

    PUBLIC = "public"
    PRIVATE = "private"


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    TALENT_SCORED = "talent_scored"
    TALENT_RANKED = "talent_ranked"
    JOBS_RANKED = "jobs_ranked"
    ACCESS_DENIED = "access_denied"
