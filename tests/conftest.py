"""Pytest configuration and fixtures."""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from mern_buddy.config import settings
from mern_buddy.database import ensure_indexes, get_database
from mern_buddy.main import app


@pytest_asyncio.fixture
async def app_client():
    """
    Create a test client with a clean test database.

    This fixture:
    - Creates a test database connection (skips if MongoDB is unreachable)
    - Yields an async HTTP client for testing
    - Cleans up the test database after each test
    """
    test_client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=2000)
    try:
        await test_client.admin.command("ping")
    except PyMongoError:
        test_client.close()
        pytest.skip("MongoDB is not available")

    test_db_name = f"{settings.mongodb_db_name}_test"
    test_db = test_client[test_db_name]
    await ensure_indexes(test_db)

    # Override the database dependency
    from mern_buddy.database import database
    original_db = database.db
    database.db = test_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    # Cleanup: drop test database
    await test_client.drop_database(test_db_name)

    database.db = original_db
    test_client.close()


@pytest.fixture
def auth_headers(app_client):
    """Factory registering a user and returning bearer headers for it."""

    async def _auth_headers(email: str, password: str = "password123") -> dict:
        await app_client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": "Test User"},
        )
        login_response = await app_client.post(
            "/auth/login",
            json={"email": email, "password": password},
        )
        token = login_response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest_asyncio.fixture
async def mock_db_client():
    """
    Client whose database dependency is a MagicMock.

    Yields (client, mock_db) so router behaviour can be tested without
    a running MongoDB.
    """
    from unittest.mock import MagicMock

    mock_db = MagicMock()
    app.dependency_overrides[get_database] = lambda: mock_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client, mock_db

    app.dependency_overrides.pop(get_database, None)
