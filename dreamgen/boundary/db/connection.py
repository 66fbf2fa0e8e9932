"""
Database connection management.

Provides async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, dreamgen.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dreamgen.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. Cached so every request shares one pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    settings = get_settings()
    db_config = settings.database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory() -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Commits when the route completes without error, rolls back otherwise.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create all tables registered on Base.metadata."""
    from dreamgen.boundary.db import models  # noqa: F401  (registers mappers)
    from dreamgen.boundary.db.base import Base

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
