"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI application
with exception handlers and the panel routers registered.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from panel_auth.adapters.api.v1 import api_router
from panel_auth.core.config.settings import settings
from panel_auth.core.handlers import register_exception_handlers
from panel_auth.core.lifecycle import create_lifespan_manager


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    The panel pages are mounted under ``settings.PANEL_PATH``.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.PANEL_PATH)

    return app
