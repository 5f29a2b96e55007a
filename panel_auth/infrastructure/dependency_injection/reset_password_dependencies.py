"""Dependency wiring for the reset password page.

Request-scoped collaborators (repositories, notification sink, workflow) are
built per request; the rate limiter, page state store and event publisher
are process-wide so their state survives between requests.
"""

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_auth.core.config.settings import settings
from panel_auth.domain.interfaces import (
    IEventPublisher,
    INotificationSink,
    IPageStateStore,
    IPasswordBroker,
    IPasswordResetTokenRepository,
    IRateLimiter,
    IUserRepository,
)
from panel_auth.domain.services.password_reset import PasswordBroker, ResetPasswordWorkflow
from panel_auth.domain.value_objects.auth_context import AuthContext
from panel_auth.infrastructure.database.async_db import get_db_session
from panel_auth.infrastructure.repositories import (
    PasswordResetTokenRepository,
    UserRepository,
)
from panel_auth.infrastructure.services import (
    FlashNotificationSink,
    InMemoryEventPublisher,
    InMemoryPageStateStore,
    InMemoryRateLimiter,
)


@lru_cache
def get_rate_limiter() -> IRateLimiter:
    return InMemoryRateLimiter()


@lru_cache
def get_page_state_store() -> IPageStateStore:
    return InMemoryPageStateStore(ttl_seconds=settings.PAGE_STATE_TTL_SECONDS)


@lru_cache
def get_event_publisher() -> IEventPublisher:
    return InMemoryEventPublisher()


def get_user_repository(
    db_session: Annotated[AsyncSession, Depends(get_db_session)],
) -> IUserRepository:
    return UserRepository(db_session)


def get_token_repository(
    db_session: Annotated[AsyncSession, Depends(get_db_session)],
) -> IPasswordResetTokenRepository:
    return PasswordResetTokenRepository(db_session)


def get_password_broker(
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
    token_repository: Annotated[IPasswordResetTokenRepository, Depends(get_token_repository)],
) -> IPasswordBroker:
    return PasswordBroker(user_repository, token_repository)


def get_notification_sink() -> INotificationSink:
    return FlashNotificationSink()


def get_auth_context(request: Request) -> AuthContext:
    """Resolve who is calling from what the host's auth middleware recorded.

    Reads the Starlette ``scope["user"]`` convention and an optional
    ``request.state.intended_url``.
    """
    user = request.scope.get("user")
    intended_url = getattr(request.state, "intended_url", None)
    if user is not None and getattr(user, "is_authenticated", False):
        return AuthContext(
            is_authenticated=True,
            user_id=getattr(user, "id", None),
            intended_url=intended_url,
        )
    return AuthContext(intended_url=intended_url)


def get_reset_password_workflow(
    request: Request,
    broker: Annotated[IPasswordBroker, Depends(get_password_broker)],
    rate_limiter: Annotated[IRateLimiter, Depends(get_rate_limiter)],
    notifications: Annotated[INotificationSink, Depends(get_notification_sink)],
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
    event_publisher: Annotated[IEventPublisher, Depends(get_event_publisher)],
) -> ResetPasswordWorkflow:
    return ResetPasswordWorkflow(
        broker=broker,
        rate_limiter=rate_limiter,
        notifications=notifications,
        user_repository=user_repository,
        event_publisher=event_publisher,
        client_ip=request.client.host if request.client else None,
        correlation_id=request.headers.get("X-Request-ID") or str(uuid.uuid4()),
    )
