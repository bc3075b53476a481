"""
Utility modules for O1-Match.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from o1match.utils.config import (
    AppSettings,
    MatchingSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from o1match.utils.constants import (
    APP_DISPLAY_NAME,
    AuditAction,
    EducationLevel,
    JobStatus,
    MatchCategory,
    MatchFactor,
    ProfileVisibility,
)
from o1match.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
)

__all__ = [
    # Config
    "AppSettings",
    "MatchingSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_DISPLAY_NAME",
    "AuditAction",
    "EducationLevel",
    "JobStatus",
    "MatchCategory",
    "MatchFactor",
    "ProfileVisibility",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
]
