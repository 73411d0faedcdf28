"""
ProjectHub Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db: Mock database whose collections are AsyncMock-backed
    ├── alice / bob: CurrentUser identities with matching user documents
    ├── alice_token / bob_token: Signed bearer tokens
    ├── project_doc: A stored project owned by alice
    └── test_client: HTTPX AsyncClient wired to the app with mock_db
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any projecthub imports
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["MONGO_DB_NAME"] = "projecthub_test"
os.environ["JWT_SECRET"] = "test-secret-that-is-at-least-32-characters-long"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from projecthub.schemas.user import CurrentUser
from projecthub.security import create_access_token, hash_password

COLLECTIONS = ("users", "projects", "comments")


def make_collection() -> MagicMock:
    """
    A mock PyMongo async collection.

    `find()` is synchronous and returns a cursor; `cursor.sort()` returns the
    same cursor and `await cursor.to_list()` yields `collection.cursor.to_list.return_value`.
    """
    collection = MagicMock()
    for method in (
        "insert_one",
        "find_one",
        "find_one_and_update",
        "update_one",
        "delete_one",
        "delete_many",
        "create_index",
    ):
        setattr(collection, method, AsyncMock())
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    collection.cursor = cursor
    return collection


def make_user_document(user: CurrentUser, password: str = "secret123") -> dict:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(user.id),
        "username": user.username,
        "email": f"{user.username}@example.com",
        "firstName": user.username.capitalize(),
        "lastName": "Tester",
        "bio": None,
        "hashedPassword": hash_password(password),
        "createdAt": now,
        "updatedAt": now,
    }


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db():
    """
    Provides a mock database: `db["projects"]` etc. return per-collection mocks.

    Usage:
        async def test_get_project(mock_db):
            mock_db["projects"].find_one.return_value = project_doc
            record = await project_service.get_project_by_id(mock_db, project_id)
    """
    collections = {name: make_collection() for name in COLLECTIONS}
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    db.command = AsyncMock(return_value={"ok": 1})
    db.name = "projecthub_test"
    return db


@pytest.fixture
def alice() -> CurrentUser:
    return CurrentUser(id=str(ObjectId()), username="alice")


@pytest.fixture
def bob() -> CurrentUser:
    return CurrentUser(id=str(ObjectId()), username="bob")


@pytest.fixture
def alice_token(alice) -> str:
    return create_access_token(alice.id, alice.username)


@pytest.fixture
def bob_token(bob) -> str:
    return create_access_token(bob.id, bob.username)


@pytest.fixture
def known_users(mock_db, alice, bob):
    """
    Makes `users.find_one` match alice's and bob's documents against simple
    equality, `$or` and `$ne` queries, so their tokens authenticate and
    their usernames/emails count as taken.
    """
    documents = {alice.id: make_user_document(alice), bob.id: make_user_document(bob)}

    def matches(document, query):
        for key, expected in query.items():
            if key == "$or":
                if not any(matches(document, clause) for clause in expected):
                    return False
            elif isinstance(expected, dict) and "$ne" in expected:
                if document.get(key) == expected["$ne"]:
                    return False
            elif document.get(key) != expected:
                return False
        return True

    async def find_one(query, *args, **kwargs):
        for document in documents.values():
            if matches(document, query):
                return document
        return None

    mock_db["users"].find_one.side_effect = find_one
    return documents


@pytest.fixture
def project_doc(alice) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "name": "Rusty CLI",
        "description": "A command line tool",
        "github": "https://github.com/alice/rusty-cli",
        "technologies": ["Rust"],
        "deploymentLink": None,
        "owner": {"id": alice.id, "username": alice.username},
        "likes": [],
        "savedBy": [],
        "comments": [],
        "createdAt": now,
        "updatedAt": now,
    }


@pytest_asyncio.fixture
async def test_client(mock_db, known_users):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app (the lifespan
    does not run, so no real database is contacted).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from projecthub.database import get_database
    from projecthub.main import app

    async def override_get_database():
        return mock_db

    app.dependency_overrides[get_database] = override_get_database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
