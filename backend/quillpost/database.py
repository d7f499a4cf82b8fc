"""
Quillpost Backend — Database Handle & Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap and the
       FastAPI session dependency.
How:   A `Database` object owns one engine and one session factory. The app
       factory creates it, stores it on `app.state.database`, and the
       `get_db_session` dependency hands each request its own session.
Who:   Created by `create_app()`; used by routes via FastAPI's Depends().

Why an object instead of module globals:
    Tests build an app over a temporary SQLite file and throw it away;
    nothing in the process points at "the" database.

SQLite specifics:
    - aiosqlite runs sqlite3 in a worker thread, keeping the event loop free
    - `timeout` is sqlite3's busy timeout: a statement waiting on another
      writer's lock gives up after `db_timeout` seconds instead of hanging
    - SQLite itself serializes writers; no application-level locking
"""

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import DateTime, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from quillpost.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which `init_schema`
    hands to `create_all`.
    """
    pass


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp stored as a naive UTC value.

    SQLite has no timezone type: SQLAlchemy's DateTime round-trips aware values
    as naive ones. This decorator normalizes to UTC on the way in and re-attaches
    UTC on the way out, so a timestamp reads back exactly as it was written.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("UTCDateTime requires a timezone-aware datetime")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Database:
    """
    Owns the engine and session factory for one SQLite file.

    Attributes:
        engine:          AsyncEngine bound to `settings.database_url`
        session_factory: async_sessionmaker producing per-request sessions
        schema_ready:    True once `init_schema()` succeeded; reported by /health
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            connect_args={"timeout": settings.db_timeout},
            # SQL echo only when debugging; very noisy otherwise
            echo=settings.log_level == "DEBUG",
        )
        # expire_on_commit=False: attributes stay readable after commit
        # without a second round trip
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.schema_ready = False

    async def init_schema(self) -> bool:
        """
        Create the users, posts and comments tables if they do not exist.

        When:    Every startup (lifespan). Safe to run repeatedly.
        Returns: True on success, False on failure.

        A failure is logged at ERROR and leaves `schema_ready` False. It does
        not raise: the process keeps serving so /health can report the problem,
        and requests against missing tables fail with 500.
        """
        # Register every model on Base.metadata before create_all
        import quillpost.models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            self.schema_ready = False
            logger.error(
                "Schema initialization failed for %s: %s",
                self.settings.db_path,
                str(e),
            )
            return False

        self.schema_ready = True
        logger.info("Database schema initialized at %s", self.settings.db_path)
        return True

    async def ping(self) -> bool:
        """Run `SELECT 1`; False if the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the `Database` stored on the app by `create_app()`
        2. Opens a session and yields it to the route handler
        3. On success: commits (a no-op when storage already committed)
        4. On error: rolls back
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/users/{user_id}")
        async def get_user(user_id: int, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
