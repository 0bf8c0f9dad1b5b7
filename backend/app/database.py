"""
Notes API — Database Session Management
=========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A Database object owns an async engine with connection pooling and a
       session factory. create_app() builds one and stores it on app.state;
       the session dependency reads it from there for every request.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created with the app; sessions are created per-request.

Why app.state instead of a module-level engine:
    The store handle is passed to the app at construction time, so a test
    can build an app bound to an in-memory SQLite database without patching
    module globals.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite uses a StaticPool instead: every session shares one connection,
    which is what keeps an in-memory database alive across requests.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers models with a single metadata object, which Alembic reads
    for migrations and Database.create_schema() uses for create_all().
    """
    pass


class Database:
    """
    Store handle: an async engine plus the session factory bound to it.

    Attributes:
        engine:          AsyncEngine managing the connection pool
        session_factory: Produces one AsyncSession per request
    """

    def __init__(self, settings: Settings):
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            # Echo SQL queries in DEBUG mode for development visibility
            echo=settings.log_level == "DEBUG",
            **self._engine_options(settings),
        )
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _engine_options(settings: Settings) -> dict:
        if settings.is_sqlite:
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_recycle": 3600,
        }

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet (tests and DB_CREATE_SCHEMA=true)."""
        # Model import registers the notes table on Base.metadata
        from app.models import note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def ping(self) -> None:
        """Run SELECT 1; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database
        2. Yields it to the route handler (the handler performs queries)
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    Why no commit here:
        The code after `yield` may run after the response has been sent, so
        a commit failing here could no longer change the status the client
        saw. NoteService commits its writes itself, inside the request.

    Raises:
        Any exception is propagated to the registered exception handlers,
        which translate it into a failure envelope.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            # Roll back for ANY failure, including non-DB errors raised after a write
            await session.rollback()
            raise
        finally:
            await session.close()
