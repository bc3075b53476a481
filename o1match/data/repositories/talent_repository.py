"""
Talent profile repository for O1-Match.
"""

from typing import Optional

from o1match.data.models.talent import TalentProfile
from o1match.utils.constants import TALENT_COLLECTION, ProfileVisibility

from .base import BaseRepository


class TalentRepository(BaseRepository[TalentProfile]):
    """Repository for talent profile documents."""

    @property
    def collection_name(self) -> str:
        return TALENT_COLLECTION

    @property
    def model_class(self) -> type[TalentProfile]:
        return TalentProfile

    def get_public_pool(self, min_o1_score: float = 0, limit: int = 100) -> list[TalentProfile]:
        """
        Get public talent profiles eligible for ranking.

        Args:
            min_o1_score: Lowest O-1 score to include
            limit: Maximum number of profiles to fetch

        Returns:
            Public profiles, highest O-1 score first
        """
        return self.find(
            {
                "visibility": ProfileVisibility.PUBLIC.value,
                "o1_score": {"$gte": min_o1_score},
            },
            limit=limit,
            sort_by="o1_score",
            sort_order=-1,
        )


_talent_repository: Optional[TalentRepository] = None


def get_talent_repository() -> TalentRepository:
    """Get the talent repository singleton instance."""
    global _talent_repository
    if _talent_repository is None:
        _talent_repository = TalentRepository()
    return _talent_repository
