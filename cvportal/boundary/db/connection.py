"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, FastAPI session
dependency and table creation. Engines are cached per URL.

Dependencies: sqlalchemy, cvportal.configs
System role: Database connection lifecycle management
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from cvportal.boundary.db.base import Base
from cvportal.configs import get_settings
from cvportal.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


def create_engine_for(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create an async engine for the given settings.

    PostgreSQL (asyncpg) gets a sized connection pool with pre-ping.
    SQLite shares one connection (StaticPool) so in-memory databases
    survive across sessions.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async engine
    """
    url = db_config.async_database_url
    if db_config.is_sqlite:
        return create_async_engine(
            url,
            echo=db_config.echo_sql,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide async engine built from application settings.

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    return create_engine_for(get_settings().database)


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False for explicit
    transaction control.

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection.

    Yields:
        AsyncSession: Session scoped to the request lifetime
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def init_models(engine: AsyncEngine | None = None) -> None:
    """Create all registered tables that do not exist yet."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:init_models - Tables ready")
