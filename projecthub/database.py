"""
ProjectHub Backend — Database Client Management
================================================

What:  Async PyMongo client, database handle, FastAPI dependency and index setup.
How:   A single AsyncMongoClient is created lazily on first use and shared by
       all requests (the driver pools connections internally). Route handlers
       receive the database handle through `Depends(get_database)`, which
       tests override with a mock.
Who:   Used by route handlers, the health check and the application lifespan.

Collections:
    users     — accounts (unique username, unique email)
    projects  — projects with embedded like / bookmark / comment-id arrays
    comments  — comments referencing their parent project
"""

import logging
from typing import Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.config import settings
from projecthub.models import comment, project, user

logger = logging.getLogger(__name__)

_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    """Return the shared client, creating it on first call."""
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )
    return _client


async def get_database() -> AsyncDatabase:
    """
    FastAPI dependency that provides the application database.

    Example usage in a route:
        @router.get("/projects")
        async def list_projects(db: AsyncDatabase = Depends(get_database)):
            ...
    """
    return get_client()[settings.mongo_db_name]


async def ensure_indexes(db: AsyncDatabase) -> None:
    """
    Create the indexes the services rely on.

    `create_index` is idempotent, so this runs on every startup.
    """
    await db[user.COLLECTION].create_index([("username", ASCENDING)], unique=True)
    await db[user.COLLECTION].create_index([("email", ASCENDING)], unique=True)
    await db[project.COLLECTION].create_index([("owner.id", ASCENDING)])
    await db[project.COLLECTION].create_index([("technologies", ASCENDING)])
    await db[comment.COLLECTION].create_index([("projectId", ASCENDING)])
    logger.info("Database indexes ensured on '%s'", db.name)


async def close_client() -> None:
    """
    What:  Closes the shared client and its connection pool.
    When:  Called during application shutdown (lifespan handler).
    """
    global _client
    if _client is not None:
        await _client.close()
        _client = None
