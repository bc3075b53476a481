"""
Base repository class providing common MongoDB operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.results import InsertManyResult

from o1match.data.database import DatabaseManager, get_database_manager
from o1match.data.models.base import BaseDocument, utcnow
from o1match.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    def _get_collection(self) -> Collection:
        return self._db_manager.get_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> Optional[ObjectId]:
        """Convert to ObjectId, None when the value is not a valid id."""
        if isinstance(id_value, ObjectId):
            return id_value
        if isinstance(id_value, str) and ObjectId.is_valid(id_value):
            return ObjectId(id_value)
        return None

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID. Malformed ids are simply not found."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            logger.debug(f"Malformed {self.collection_name} id: {id_value!r}")
            return None
        document = self._get_collection().find_one({"_id": object_id})
        return self._to_model(document)

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query."""
        cursor = self._get_collection().find(query).skip(skip).limit(limit)
        cursor = cursor.sort(sort_by or "created_at", sort_order)
        return self._to_models(list(cursor))

    def find_one(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query."""
        return self._to_model(self._get_collection().find_one(query))

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def bulk_create(self, models: list[T]) -> list[T]:
        """Create multiple documents at once."""
        if not models:
            return []

        now = utcnow()
        documents = []
        for model in models:
            doc = model.model_dump_mongo()
            doc["created_at"] = doc["updated_at"] = now
            documents.append(doc)

        result: InsertManyResult = self._get_collection().insert_many(documents)
        for model, inserted_id in zip(models, result.inserted_ids):
            model.id = inserted_id

        logger.debug(f"Bulk created {len(models)} {self.collection_name} documents")
        return models
