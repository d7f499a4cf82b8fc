"""
Quillpost Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at a fresh SQLite file in tmp_path
    ├── database: Database over that file, schema applied, disposed after
    ├── db_session: AsyncSession from that database
    ├── mock_db_session: Mock session for storage-failure paths
    ├── app: Application built by create_app(test_settings)
    └── test_client: HTTPX AsyncClient talking to `app` in-process
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Importing quillpost.main builds the module-level app from the environment;
# keep it away from a real ./database.sqlite
os.environ.setdefault("DB_PATH", "./test-quillpost.sqlite")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from quillpost.config import Settings  # noqa: E402
from quillpost.database import Database  # noqa: E402
from tests.utils import build_app, open_client  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated database file, one per test."""
    return Settings(
        db_path=str(tmp_path / "quillpost.sqlite"),
        log_level="WARNING",
        require_existing_post=False,
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with the schema applied."""
    db = Database(test_settings)
    assert await db.init_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """A session on the temporary database, closed after the test."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with pytest.raises(DatabaseError):
            await Storage(mock_db_session).get_by_id(User, 1)
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
def app(test_settings):
    """A fresh application over the test database."""
    return build_app(test_settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    client = await open_client(app)
    async with client:
        yield client
    await app.state.database.dispose()
