"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from panel_auth.core.config.settings import settings
from panel_auth.core.logging import logger
from panel_auth.infrastructure.database.async_db import (
    AsyncSessionFactory,
    create_async_db_and_tables,
    engine,
)
from panel_auth.infrastructure.repositories import PasswordResetTokenRepository


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the tables and purge stale tokens on startup, release the engine on shutdown."""
        await create_async_db_and_tables()
        async with AsyncSessionFactory() as session:
            await PasswordResetTokenRepository(session).delete_expired()
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        await engine.dispose()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
