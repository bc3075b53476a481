"""
Employer profile repository for O1-Match.
"""

from typing import Optional

from o1match.data.models.job import EmployerProfile
from o1match.utils.constants import EMPLOYER_COLLECTION

from .base import BaseRepository


class EmployerRepository(BaseRepository[EmployerProfile]):
    """Repository for employer profile documents."""

    @property
    def collection_name(self) -> str:
        return EMPLOYER_COLLECTION

    @property
    def model_class(self) -> type[EmployerProfile]:
        return EmployerProfile

    def get_by_user_id(self, user_id: str) -> Optional[EmployerProfile]:
        """Get the employer profile owned by a user account."""
        return self.find_one({"user_id": user_id})

    def get_many(self, ids: list) -> dict[str, EmployerProfile]:
        """Get employer profiles by id, keyed by the string id."""
        object_ids = [oid for oid in (self._to_object_id(i) for i in ids) if oid is not None]
        if not object_ids:
            return {}
        employers = self.find({"_id": {"$in": object_ids}}, limit=len(object_ids))
        return {str(employer.id): employer for employer in employers}


_employer_repository: Optional[EmployerRepository] = None


def get_employer_repository() -> EmployerRepository:
    """Get the employer repository singleton instance."""
    global _employer_repository
    if _employer_repository is None:
        _employer_repository = EmployerRepository()
    return _employer_repository
