"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, API client, mocks).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings bound to an in-memory SQLite database
    ├── database: Database handle with the notes table created
    ├── test_app: FastAPI app built by create_app() around that database
    ├── test_client: HTTPX AsyncClient talking to test_app
    ├── mock_db_session: AsyncMock session for service unit tests
    └── sample_note_data: Field values for building Note objects
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings BEFORE any app imports: app.main builds its module-level
# app from these, and must not need a PostgreSQL server.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.config import Settings
from app.database import Database
from app.main import create_app


@pytest.fixture
def test_settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", log_level="WARNING")


@pytest_asyncio.fixture
async def database(test_settings):
    """
    A fresh in-memory database per test.

    StaticPool keeps the single connection (and therefore the data) alive
    for every session the app opens during the test.
    """
    db = Database(test_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def test_app(test_settings, database):
    return create_app(test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Async HTTP test client for endpoint testing.

    raise_app_exceptions=False: Starlette re-raises unexpected errors after
    the catch-all handler has produced the 500, and the client should see
    the response, not the exception.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.get.return_value = note
            result = await note_service.get_note(mock_db_session, str(note.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "title": "Groceries",
        "content": "Milk, eggs, bread",
        "created": now,
        "changed": now,
    }
