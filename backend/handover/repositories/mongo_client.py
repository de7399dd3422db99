"""MongoDB access - shared client, collections and index definitions"""
from typing import Any, Dict, List, Optional, Tuple
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..config.settings import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROJECTS = "projects"
SETTINGS = "settings"

# (keys, options) per collection, applied by create_indexes()
INDEXES: Dict[str, List[Tuple[List[Tuple[str, int]], Dict[str, Any]]]] = {
    PROJECTS: [
        ([("project_id", ASCENDING)], {"unique": True}),
        ([("status", ASCENDING)], {}),
        ([("publishing_status", ASCENDING)], {}),
        ([("created_at", DESCENDING)], {}),
    ],
    SETTINGS: [
        ([("setting_id", ASCENDING)], {"unique": True}),
    ],
}

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    """
    Shared client, created on first use

    pymongo connects lazily, so creating the client never blocks; the first
    query (or health_check) surfaces connection problems.
    """
    global _client
    if _client is None:
        logger.info(f"Creating MongoDB client for database {settings.mongo_db}")
        _client = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            tz_aware=True,
        )
    return _client


def get_database() -> Database:
    return get_client()[settings.mongo_db]


def get_collection(name: str) -> Collection:
    return get_database()[name]


def close_connection() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")


def create_indexes() -> None:
    """Ensure the indexes in INDEXES exist (idempotent)"""
    db = get_database()
    for collection_name, indexes in INDEXES.items():
        for keys, options in indexes:
            db[collection_name].create_index(keys, **options)
    logger.info(f"Ensured indexes on {', '.join(INDEXES)}")


def health_check() -> Dict[str, Any]:
    """Ping the server; never raises"""
    try:
        get_client().admin.command("ping")
    except PyMongoError as e:
        logger.error(f"MongoDB health check failed: {e}")
        return {"status": "unhealthy", "database": settings.mongo_db, "error": str(e)}
    return {"status": "healthy", "database": settings.mongo_db}
