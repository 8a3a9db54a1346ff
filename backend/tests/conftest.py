"""
Tutorials API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── sample_tutorial_data: Attribute dict for a stored tutorial
    ├── database: Fresh in-memory SQLite Database with tables created
    ├── app: FastAPI app bound to that database
    ├── test_client: HTTPX AsyncClient talking to the app in-process
    ├── seed_tutorials: Helper inserting rows directly through the ORM
    ├── broken_app: App whose database has no tables (every query fails)
    └── broken_client: AsyncClient for broken_app, 500s returned not raised
"""

import os

# Override settings BEFORE any app import; app.config reads the environment once
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.models.tutorial import Tutorial


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find_one(mock_db_session):
            mock_db_session.get.return_value = tutorial
            result = await tutorial_service.find_one(mock_db_session, "1")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_tutorial_data() -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "id": 7,
        "title": "Node.js Rest APIs with Express",
        "description": "Build a CRUD API step by step",
        "published": True,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING")


@pytest_asyncio.fixture
async def database():
    """In-memory SQLite database with the schema created; disposed after the test."""
    db = Database("sqlite+aiosqlite://")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(test_settings, database):
    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def seed_tutorials(database):
    """
    Returns an async helper that inserts tutorials and returns their ids.

    Usage:
        ids = await seed_tutorials([{"title": "a"}, {"title": "b", "published": True}])
    """

    async def _seed(rows: List[Dict[str, Any]]) -> List[int]:
        async with database.session_factory() as session:
            tutorials = [Tutorial(**row) for row in rows]
            session.add_all(tutorials)
            await session.commit()
            return [t.id for t in tutorials]

    return _seed


@pytest.fixture
def broken_app(test_settings):
    """App bound to a database whose tables were never created: every query fails."""
    return create_app(settings=test_settings, database=Database("sqlite+aiosqlite://"))


@pytest_asyncio.fixture
async def broken_client(broken_app):
    # Unhandled errors still come back as the 500 body instead of raising in the test
    transport = ASGITransport(app=broken_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
