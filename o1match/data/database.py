"""
Database connection manager for O1-Match.

Provides MongoDB connection management for the profile store.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from o1match.utils.config import get_settings
from o1match.utils.constants import EMPLOYER_COLLECTION, JOB_COLLECTION, TALENT_COLLECTION
from o1match.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the MongoDB connection.

    The client is created lazily and reused for the life of the process.
    """

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._client: Optional[MongoClient] = None

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded so special characters survive.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`", "/", "@"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    # -------------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------------

    def get_client(self) -> MongoClient:
        """Get or create the MongoDB client."""
        if self._client is None:
            logger.info("Creating MongoDB client")
            self._client = MongoClient(
                self._uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
                maxPoolSize=50,
            )
        return self._client

    def get_database(self) -> Database:
        """Get the configured database."""
        return self.get_client()[self._db_name]

    def get_collection(self, collection_name: str) -> Any:
        """Get a collection by name."""
        return self.get_database()[collection_name]

    def check_connection(self) -> bool:
        """Check if the connection is healthy."""
        try:
            self.get_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Connection check failed: {e}")
            self.close()
            return False
        except PyMongoError as e:
            logger.error(f"Unexpected connection error: {e}")
            self.close()
            return False

    def close(self) -> None:
        """Close the client connection."""
        if self._client:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create indexes backing the match queries."""
        logger.info("Ensuring database indexes")

        talents = self.get_collection(TALENT_COLLECTION)
        talents.create_index([("visibility", ASCENDING), ("o1_score", DESCENDING)])
        talents.create_index("candidate_id")

        jobs = self.get_collection(JOB_COLLECTION)
        jobs.create_index("status")
        jobs.create_index("employer_id")
        jobs.create_index("created_at")

        employers = self.get_collection(EMPLOYER_COLLECTION)
        employers.create_index("user_id", unique=True)

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
