"""
Application services built on the matching engine and profile store.
"""

from .match_service import MatchService, get_match_service

__all__ = [
    "MatchService",
    "get_match_service",
]
