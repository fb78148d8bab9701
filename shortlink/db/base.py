"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Lazy engine and session factory creation
- Table creation on startup
- Health check functionality
"""

from typing import AsyncGenerator, Dict, Optional
import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortlink.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine_config(database_url: str) -> Dict:
    """Get the engine configuration for the current environment and driver.

    Returns:
        Dict: Engine configuration parameters.
    """
    if settings.ENVIRONMENT.value == "testing":
        # Use NullPool for tests to avoid connection issues
        return {"echo": False, "poolclass": NullPool}

    config: Dict = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        config.update(
            pool_size=settings.POSTGRES_POOL_SIZE,
            max_overflow=settings.POSTGRES_POOL_MAX_OVERFLOW,
            pool_timeout=settings.POSTGRES_POOL_TIMEOUT,
            pool_recycle=settings.POSTGRES_POOL_RECYCLE,
        )
    return config


def get_engine() -> AsyncEngine:
    """Return the shared async engine, creating it on first use.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    global _engine
    if _engine is None:
        engine_url = str(settings.SQLALCHEMY_DATABASE_URI)
        logger.info(f"Creating database engine for {engine_url.split('://', 1)[0]}")
        _engine = create_async_engine(engine_url, **get_engine_config(engine_url))
    return _engine


def get_session_factory() -> async_sessionmaker:
    """Return the shared async session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async session with proper error handling and cleanup.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    session = get_session_factory()()
    try:
        yield session
    finally:
        await session.close()


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables registered on the SQLModel metadata."""
    # Import models so they are registered with SQLModel metadata
    from shortlink.models import Mapping  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables are in place")


async def dispose_engine() -> None:
    """Close all pooled connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(session: AsyncSession) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
