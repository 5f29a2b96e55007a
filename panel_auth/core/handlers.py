from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

This module contains centralized handlers for custom application exceptions,
translating them into appropriate HTTP responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from panel_auth.core.exceptions import (
    DatabaseError,
    FormValidationError,
    LockedPropertyError,
    PageExpiredError,
    PanelAuthError,
    TooManyRequestsError,
)
from panel_auth.utils.i18n import get_request_language, get_translated_message

__all__ = [
    "form_validation_error_handler",
    "locked_property_error_handler",
    "page_expired_error_handler",
    "too_many_requests_error_handler",
    "database_error_handler",
    "panel_auth_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)

HTTP_419_PAGE_EXPIRED = 419


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def form_validation_error_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    """Handles `FormValidationError`, returning a `422 Unprocessable Entity`.

    The body carries the first message as ``detail`` and every failure keyed
    by field name under ``errors``.

    Args:
        request: The incoming `Request` object.
        exc: The `FormValidationError` instance.

    Returns:
        A `JSONResponse` with a 422 status code, error detail and field errors.
    """
    logger.info(
        "Form validation failed",
        fields=sorted(exc.errors),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "errors": exc.errors},
    )


async def locked_property_error_handler(request: Request, exc: LockedPropertyError) -> JSONResponse:
    """Handles `LockedPropertyError`, returning a `403 Forbidden`.

    A client tried to change the email or token fixed when the page was
    mounted. Logged as a warning since it only happens on tampering.
    """
    logger.warning(
        "Attempt to change a locked property",
        property=exc.property_name,
        client_ip=_client_ip(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": exc.message},
    )


async def page_expired_error_handler(request: Request, exc: PageExpiredError) -> JSONResponse:
    """Handles `PageExpiredError`, returning a `419 Page Expired`."""
    return JSONResponse(
        status_code=HTTP_419_PAGE_EXPIRED,
        content={"detail": exc.message},
    )


async def too_many_requests_error_handler(
    request: Request, exc: TooManyRequestsError
) -> JSONResponse:
    """Handles a `TooManyRequestsError` that escaped its page, returning `429`.

    Args:
        request: The incoming `Request` object.
        exc: The `TooManyRequestsError` instance.

    Returns:
        A `JSONResponse` with a 429 status code and a ``Retry-After`` header.
    """
    logger.warning(
        "Rate limit exceeded",
        seconds_until_available=exc.seconds_until_available,
        client_ip=_client_ip(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": exc.message},
        headers={"Retry-After": str(exc.seconds_until_available)},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handles `DatabaseError`, returning a `500 Internal Server Error`.

    The driver message is logged but never returned to the client.
    """
    logger.error(
        "Database operation failed",
        error_message=str(exc),
        path=request.url.path,
    )
    language = get_request_language(request)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": get_translated_message("internal_server_error", language)},
    )


async def panel_auth_error_handler(request: Request, exc: PanelAuthError) -> JSONResponse:
    """Handles any other `PanelAuthError`, returning a `400 Bad Request`."""
    logger.warning("Unhandled application error", error=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the catch-all
    `PanelAuthError` handler only sees errors without a dedicated handler.
    """
    app.add_exception_handler(FormValidationError, form_validation_error_handler)
    app.add_exception_handler(LockedPropertyError, locked_property_error_handler)
    app.add_exception_handler(PageExpiredError, page_expired_error_handler)
    app.add_exception_handler(TooManyRequestsError, too_many_requests_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(PanelAuthError, panel_auth_error_handler)
