"""Async SQLAlchemy database engine and session management.

Provides the store handle the API is built around:
- Database: owns the async engine and session factory
- Lifecycle: created at startup, disposed at shutdown (see api.main.lifespan)
- FastAPI dependency injection via get_session()
- Automatic session lifecycle (commit on success, rollback on error)
- Multi-database support (PostgreSQL via asyncpg, SQLite via aiosqlite)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from patterns.domain_config import DatabaseConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Store handle
# ---------------------------------------------------------------------------

class Database:
    """Engine + session factory for one relational store.

    Usage::

        db = Database(DatabaseConfig(url="sqlite+aiosqlite:///./books.db"))
        await db.init()
        async with db.session() as session:
            ...
        await db.close()
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config

        engine_kwargs = {"echo": config.echo, "pool_pre_ping": True}
        if not config.is_sqlite:
            engine_kwargs.update(
                pool_size=config.pool_size,
                max_overflow=config.max_overflow,
            )

        self.engine: AsyncEngine = create_async_engine(config.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    # -- Lifecycle hooks --

    async def init(self) -> None:
        """Create tables from models when configured to (dev/test only)."""
        if not self.config.create_tables:
            return

        from core.models.base import Base
        import verticals.books.models.db_models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def close(self) -> None:
        """Dispose of the connection pool on shutdown."""
        await self.engine.dispose()
        logger.info("Database connection pool disposed")


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

def get_database(request: Request) -> Database:
    """Return the store handle the application acquired at startup."""
    return request.app.state.database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session with automatic commit/rollback.

    Declare it with scope="function" so the commit finishes before the
    response is sent; a failed commit then surfaces as a 500.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(
            session: AsyncSession = Depends(get_session, scope="function"),
        ):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    async with get_database(request).session() as session:
        yield session
