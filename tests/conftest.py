"""
Pytest configuration and fixtures.

WHY: Fixtures provide reusable test setup/teardown logic. Every test gets a
fresh application wired to an in-memory MongoDB fake, so no external
services are needed.
"""

import os

# Settings are loaded at import time; a signing secret must exist first.
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-car-doctor")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Dict, Any, List
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

from car_doctor.core import auth as auth_module
from car_doctor.core.auth import create_access_token
from car_doctor.core.config import settings
from car_doctor.main import create_app
from tests.fakes import FakeDatabase, FakeMongoClient


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def sample_services() -> List[Dict[str, Any]]:
    """Catalog documents as they are stored in MongoDB."""
    return [
        {
            "_id": ObjectId("6627a6c4f1c2a9b3e4d5f601"),
            "title": "Engine Diagnostic",
            "price": 150,
            "img": "https://example.com/engine.jpg",
            "description": "Full engine health check",
        },
        {
            "_id": ObjectId("6627a6c4f1c2a9b3e4d5f602"),
            "title": "Brake Repair",
            "price": 89.5,
            "img": "https://example.com/brakes.jpg",
            "description": "Pads and discs",
        },
    ]


@pytest.fixture
def services_collection(fake_db: FakeDatabase, sample_services):
    collection = fake_db[settings.SERVICES_COLLECTION]
    collection.documents.extend(sample_services)
    return collection


@pytest.fixture
def checkouts_collection(fake_db: FakeDatabase):
    return fake_db[settings.CHECKOUTS_COLLECTION]


@pytest.fixture
def app(fake_db: FakeDatabase):
    """Application wired to the fake MongoDB client."""
    return create_app(mongo_client=FakeMongoClient(fake_db))


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    Yields:
        AsyncClient: HTTP client for making test requests
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_token():
    """Factory for signed session tokens."""

    def _make(uid: str = "u1", **extra: Any) -> str:
        return create_access_token({"uid": uid, **extra})

    return _make


@pytest.fixture
def mock_redis(monkeypatch) -> MagicMock:
    """
    Replace the deny-list Redis client with a mock.

    ``setex`` records keys into ``mock_redis.revoked`` and ``exists``
    answers from it, so revocation round-trips within a test. Tests that
    need Redis to fail set ``side_effect`` on either method.
    """
    revoked: Dict[str, int] = {}

    async def _setex(key: str, ttl: int, value: str) -> bool:
        revoked[key] = ttl
        return True

    async def _exists(*keys: str) -> int:
        return sum(1 for key in keys if key in revoked)

    redis = MagicMock()
    redis.setex = AsyncMock(side_effect=_setex)
    redis.exists = AsyncMock(side_effect=_exists)
    redis.revoked = revoked

    async def _get_redis():
        return redis

    monkeypatch.setattr(auth_module, "get_redis", _get_redis)
    return redis


@pytest.fixture
def revocation_enabled(monkeypatch, mock_redis) -> MagicMock:
    monkeypatch.setattr(settings, "TOKEN_REVOCATION_ENABLED", True)
    return mock_redis


@pytest.fixture(autouse=True)
def reset_redis_client():
    """
    Reset the cached Redis client before and after each test.

    WHY: core.auth keeps a lazily created client in a module global.
    """
    auth_module._redis_client = None
    yield
    auth_module._redis_client = None
