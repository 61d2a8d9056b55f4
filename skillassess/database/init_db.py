"""
Database initialization and connection management.

This module provides functions for:
1. Creating and disposing the async engine
2. Handing out sessions with guaranteed release
3. Creating the schema for development setups
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from skillassess.common.exceptions import DatabaseError
from skillassess.common.logger import app_logger
from .base import Base

logger = app_logger.getChild("database.init_db")

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> AsyncEngine:
    """Get the global async engine instance."""
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call initialize_database() first.")
    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory bound to the global engine."""
    if _session_factory is None:
        raise RuntimeError("Database engine not initialized. Call initialize_database() first.")
    return _session_factory


async def initialize_database(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30,
) -> AsyncEngine:
    """
    Initialize the async database engine and verify connectivity.

    Args:
        database_url: Database connection URL
        echo: Whether to echo SQL statements
        pool_size: Connection pool size
        max_overflow: Maximum number of connections to allow above pool_size
        pool_timeout: Timeout for getting a connection from the pool

    Returns:
        AsyncEngine instance
    """
    global _engine, _session_factory

    engine_kwargs = {"echo": echo}
    if database_url.startswith("postgresql"):
        engine_kwargs.update({
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_pre_ping": True,
        })

    logger.info(f"Initializing database with URL: {database_url.split('://')[0]}://...")
    try:
        _engine = create_async_engine(database_url, **engine_kwargs)
        _session_factory = sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)

        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize async database: {e}")
        raise DatabaseError("could not connect", e) from e

    logger.info("Database engine initialized successfully")
    return _engine


async def create_schema() -> None:
    """Create all tables that do not exist yet."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def close_database() -> None:
    """Close the database engine and all connections."""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database engine closed successfully")


@asynccontextmanager
async def session_scope(factory: Optional[sessionmaker] = None) -> AsyncIterator[AsyncSession]:
    """
    Provide a transactional scope around a series of operations.

    Commits on success, rolls back on any error and always closes the
    session. Storage errors surface as ``DatabaseError``.
    """
    session = (factory or get_session_factory())()
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Database session error: {e}")
        raise DatabaseError(str(e), e) from e
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
