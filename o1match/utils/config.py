"""
Configuration management for O1-Match.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from o1match.utils.constants import DEFAULT_MATCHING_WEIGHTS

if TYPE_CHECKING:
    from o1match.data.models.match import MatchingWeights


# Base path
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB profile store configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "o1match"
    username: str | None = None
    password: str | None = None


class MatchingSettings(BaseSettings):
    """Match engine weights and candidate pool sizing."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    # Factor weights
    weight_o1_score: float = Field(default=DEFAULT_MATCHING_WEIGHTS["o1_score"], ge=0, le=1)
    weight_criteria: float = Field(default=DEFAULT_MATCHING_WEIGHTS["criteria"], ge=0, le=1)
    weight_skills: float = Field(default=DEFAULT_MATCHING_WEIGHTS["skills"], ge=0, le=1)
    weight_education: float = Field(default=DEFAULT_MATCHING_WEIGHTS["education"], ge=0, le=1)
    weight_experience: float = Field(default=DEFAULT_MATCHING_WEIGHTS["experience"], ge=0, le=1)

    # Records fetched from the store before ranking
    candidate_pool_limit: int = Field(default=100, ge=1)
    default_job_limit: int = Field(default=10, ge=0)
    default_talent_limit: int = Field(default=20, ge=0)

    # Talent pool only includes profiles with o1_score >= ratio * job.min_score
    talent_pool_score_ratio: float = Field(default=0.5, ge=0, le=1)

    def to_weights(self) -> "MatchingWeights":
        """Build validated matching weights from these settings."""
        from o1match.data.models.match import MatchingWeights

        return MatchingWeights(
            o1_score=self.weight_o1_score,
            criteria=self.weight_criteria,
            skills=self.weight_skills,
            education=self.weight_education,
            experience=self.weight_experience,
        )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "o1match.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "O1-Match"
    version: str = "0.1.0"
    description: str = "Talent and job matching for O-1 visa hiring"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
