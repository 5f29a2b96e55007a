"""Reset Password Workflow.

This domain service drives the reset password page: it mounts the page state
from the link the user followed, then handles the form submission by
throttling, validating, and delegating the reset to the password broker.
"""

import hashlib
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import structlog

from panel_auth.core.config.settings import settings
from panel_auth.core.exceptions import TooManyRequestsError
from panel_auth.domain.entities.reset_attempt import ResetAttempt
from panel_auth.domain.events.password_reset_events import PasswordResetCompletedEvent
from panel_auth.domain.forms.reset_password_form import ResetPasswordForm
from panel_auth.domain.interfaces.repositories import IUserRepository
from panel_auth.domain.interfaces.resettable import Resettable
from panel_auth.domain.interfaces.services import (
    IEventPublisher,
    IForm,
    INotificationSink,
    IPasswordBroker,
    IRateLimiter,
)
from panel_auth.domain.value_objects.auth_context import AuthContext
from panel_auth.domain.value_objects.notification import Notification
from panel_auth.domain.value_objects.redirect import PasswordResetResponse, Redirect
from panel_auth.utils.i18n import get_translated_message
from panel_auth.utils.security import hash_password, random_string

logger = structlog.get_logger(__name__)


class ResetPasswordWorkflow:
    """Request-scoped controller of the reset password page.

    This service is responsible for:
    - Redirecting authenticated users away from the page
    - Capturing and locking the email/token pair at mount
    - Throttling submissions per client
    - Gating the broker call behind form validation
    - Applying the new password through the broker callback
    - Reporting the outcome as a notification
    """

    COMPONENT = "reset-password"
    RATE_LIMIT_PREFIX = "panel-rate-limiter:"

    def __init__(
        self,
        broker: IPasswordBroker,
        rate_limiter: IRateLimiter,
        notifications: INotificationSink,
        user_repository: IUserRepository,
        event_publisher: IEventPublisher,
        form: Optional[IForm] = None,
        client_ip: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ):
        """Initialize with required collaborators.

        Args:
            broker: Verifies reset credentials and runs the password callback
            rate_limiter: Attempt counters shared across requests
            notifications: Sink for user-facing messages
            user_repository: Persists the user after the password changes
            event_publisher: Receives the password reset domain event
            form: Form bound to the page state (defaults to ResetPasswordForm)
            client_ip: Address of the requesting client, part of the throttle key
            correlation_id: Optional correlation ID for request tracking
        """
        self._broker = broker
        self._rate_limiter = rate_limiter
        self._notifications = notifications
        self._user_repository = user_repository
        self._event_publisher = event_publisher
        self.form = form or ResetPasswordForm()
        self._client_ip = client_ip or "unknown"
        self._correlation_id = correlation_id
        self.attempt: Optional[ResetAttempt] = None
        self.throttled = False

    def mount(
        self,
        auth: AuthContext,
        email: Optional[str] = None,
        token: Optional[str] = None,
        query: Optional[Mapping[str, Any]] = None,
        language: str = settings.DEFAULT_LANGUAGE,
    ) -> Optional[Redirect]:
        """Prepare the page for the link the user followed.

        Returns:
            Redirect: When the user is already logged in; nothing is mounted
            None: When the page was mounted and should be rendered
        """
        if auth.is_authenticated:
            target = auth.intended_url or settings.PANEL_HOME_URL
            logger.info(
                "Authenticated user redirected away from reset page",
                user_id=auth.user_id,
                target=target,
            )
            return Redirect(url=target)

        query = query or {}
        attempt = ResetAttempt(language=language)
        attempt.token = token if token is not None else query.get("token")
        attempt.email = email if email is not None else query.get("email")
        attempt.lock()

        self.restore(attempt)

        logger.info(
            "Reset password page mounted",
            has_email=attempt.email is not None,
            token_prefix=attempt.token[:8] if attempt.token else "none",
            correlation_id=self._correlation_id,
        )
        return None

    def restore(self, attempt: ResetAttempt) -> None:
        """Bind previously mounted page state to this workflow."""
        self.attempt = attempt
        self.form.fill(attempt)

    async def reset_password(self) -> Optional[PasswordResetResponse]:
        """Handle a submission of the reset form.

        Returns:
            PasswordResetResponse: The password was reset
            None: The attempt was throttled or rejected by the broker

        Raises:
            FormValidationError: If the form state is invalid
        """
        attempt = self._require_attempt()
        language = attempt.language
        self.throttled = False

        try:
            await self.rate_limit(
                settings.RESET_PASSWORD_MAX_ATTEMPTS,
                settings.RESET_PASSWORD_DECAY_SECONDS,
            )
        except TooManyRequestsError as exc:
            self.throttled = True
            logger.warning(
                "Reset password submission throttled",
                seconds_until_available=exc.seconds_until_available,
                correlation_id=self._correlation_id,
            )
            self._notifications.send(Notification.danger(get_translated_message(
                "reset_password.messages.throttled",
                language,
                seconds=exc.seconds_until_available,
                minutes=exc.minutes_until_available,
            )))
            return None

        data = self.form.get_state()

        data["email"] = attempt.email
        data["token"] = attempt.token

        status = await self._broker.reset(data, self._apply_new_password)
        attempt.clear_input()

        if status.is_success:
            logger.info("Password reset completed", correlation_id=self._correlation_id)
            self._notifications.send(
                Notification.success(get_translated_message(status.value, language))
            )
            return PasswordResetResponse(url=settings.PANEL_LOGIN_URL)

        logger.warning(
            "Password reset rejected by broker",
            status=status.value,
            correlation_id=self._correlation_id,
        )
        self._notifications.send(
            Notification.danger(get_translated_message(status.value, language))
        )
        return None

    async def rate_limit(
        self, max_attempts: int, decay_seconds: int = 60, method: str = "reset_password"
    ) -> None:
        """Spend one attempt of the client's budget for ``method``.

        Raises:
            TooManyRequestsError: If the budget for the window is spent
        """
        key = self.rate_limit_key(method)

        if await self._rate_limiter.too_many_attempts(key, max_attempts):
            raise TooManyRequestsError(await self._rate_limiter.available_in(key))

        await self._rate_limiter.hit(key, decay_seconds)

    def rate_limit_key(self, method: str) -> str:
        raw = f"{self.COMPONENT}|{method}|{self._client_ip}"
        return self.RATE_LIMIT_PREFIX + hashlib.sha1(raw.encode()).hexdigest()

    async def _apply_new_password(self, user: Resettable, password: str) -> None:
        user.force_fill(
            hashed_password=hash_password(password),
            remember_token=random_string(settings.REMEMBER_TOKEN_LENGTH),
        )
        await self._user_repository.save(user)

        await self._event_publisher.publish(PasswordResetCompletedEvent(
            occurred_at=datetime.now(timezone.utc),
            user_id=user.id,
            correlation_id=self._correlation_id,
            email=user.get_email_for_password_reset(),
            ip_address=self._client_ip,
        ))

    def _require_attempt(self) -> ResetAttempt:
        if self.attempt is None:
            raise RuntimeError("ResetPasswordWorkflow.reset_password() called before mount()")
        return self.attempt
