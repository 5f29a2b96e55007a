from __future__ import annotations

"""
Asynchronous Database Utilities Module

This module provides the async SQLAlchemy engine, the session factory, and
the FastAPI dependency yielding a session per request.

**Security Note**: Avoid logging connection details; DATABASE_URL may carry
credentials.

Key Components:
    - engine: The asynchronous SQLAlchemy engine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_db_session: A FastAPI dependency yielding an async session.
    - create_async_db_and_tables: Utility to create tables using the async engine.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_auth.core.config.settings import settings
from panel_auth.core.logging import logger

# Register table models on SQLModel.metadata
from panel_auth.domain.entities import PasswordResetTokenRecord, User  # noqa: F401

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    future=True,
)

AsyncSessionFactory = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    Rolls back the transaction if an exception escapes the request and
    always closes the session.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with AsyncSessionFactory() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise


async def create_async_db_and_tables(bind: AsyncEngine = engine) -> None:
    """
    Create tables using the async engine.

    Used at application start-up for SQLite deployments and by test suites.
    """
    logger.info("Creating async database tables")
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created")
