"""Tests for the reset password page workflow.

Collaborators with I/O are mocked; the rate limiter and the notification
sink are the in-memory implementations driven by a fake clock.
"""

from unittest.mock import AsyncMock

import pytest

from panel_auth.core.exceptions import FormValidationError, TooManyRequestsError
from panel_auth.domain.events.password_reset_events import PasswordResetCompletedEvent
from panel_auth.domain.forms import ResetPasswordForm
from panel_auth.domain.services.password_reset import ResetPasswordWorkflow
from panel_auth.domain.value_objects import (
    AuthContext,
    NotificationStatus,
    PasswordResetResponse,
    PasswordResetStatus,
    PasswordRule,
    Redirect,
)
from panel_auth.infrastructure.services import FlashNotificationSink, InMemoryRateLimiter
from panel_auth.utils.security import verify_password
from tests.factories import create_fake_user

STRONG = "N3w-Str0ng!pass"
TOKEN = "t" * 64


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    return InMemoryRateLimiter(clock=clock)


@pytest.fixture
def notifications():
    return FlashNotificationSink()


@pytest.fixture
def mock_broker():
    """Mock password broker."""
    return AsyncMock()


@pytest.fixture
def mock_user_repository():
    """Mock user repository."""
    return AsyncMock()


@pytest.fixture
def mock_event_publisher():
    """Mock event publisher."""
    return AsyncMock()


@pytest.fixture
def user():
    return create_fake_user(id=42, email="admin@example.com", remember_token="r" * 60)


@pytest.fixture
def workflow(mock_broker, rate_limiter, notifications, mock_user_repository, mock_event_publisher):
    return ResetPasswordWorkflow(
        broker=mock_broker,
        rate_limiter=rate_limiter,
        notifications=notifications,
        user_repository=mock_user_repository,
        event_publisher=mock_event_publisher,
        client_ip="10.0.0.1",
        correlation_id="corr-1",
    )


@pytest.fixture
def mounted(workflow):
    workflow.mount(AuthContext.guest(), query={"email": "admin@example.com", "token": TOKEN})
    return workflow


def submit(workflow, password=STRONG, confirmation=STRONG):
    workflow.attempt.fill({"password": password, "passwordConfirmation": confirmation})


def broker_accepting(user):
    async def _reset(credentials, callback):
        await callback(user, credentials["password"])
        return PasswordResetStatus.PASSWORD_RESET

    return _reset


class TestMount:
    """Mounting the page from a reset link."""

    def test_authenticated_user_is_redirected_to_intended_url(self, workflow):
        auth = AuthContext(is_authenticated=True, user_id=1, intended_url="/admin/users")

        result = workflow.mount(auth, email="admin@example.com", token=TOKEN)

        assert result == Redirect(url="/admin/users")
        assert workflow.attempt is None

    def test_authenticated_user_without_intended_url_goes_home(self, workflow):
        result = workflow.mount(AuthContext(is_authenticated=True, user_id=1))

        assert result.url == "/admin"

    def test_guest_mount_reads_query_and_locks(self, mounted):
        assert mounted.attempt.email == "admin@example.com"
        assert mounted.attempt.token == TOKEN
        assert mounted.attempt.is_locked

    def test_parameters_take_precedence_over_query(self, workflow):
        result = workflow.mount(
            AuthContext.guest(),
            email="param@example.com",
            token="param-token",
            query={"email": "query@example.com", "token": "query-token"},
        )

        assert result is None
        assert workflow.attempt.email == "param@example.com"
        assert workflow.attempt.token == "param-token"

    def test_mount_without_link_values(self, workflow):
        workflow.mount(AuthContext.guest())

        assert workflow.attempt.email is None
        assert workflow.attempt.token is None

    @pytest.mark.asyncio
    async def test_reset_before_mount_is_an_error(self, workflow):
        with pytest.raises(RuntimeError):
            await workflow.reset_password()


class TestResetPassword:
    """Submitting the reset form."""

    @pytest.mark.asyncio
    async def test_successful_reset(
        self, mounted, mock_broker, mock_user_repository, mock_event_publisher, notifications, user
    ):
        # Arrange
        mock_broker.reset.side_effect = broker_accepting(user)
        submit(mounted)

        # Act
        response = await mounted.reset_password()

        # Assert
        assert isinstance(response, PasswordResetResponse)
        assert response.url == "/admin/login"

        credentials = mock_broker.reset.await_args.args[0]
        assert credentials == {"email": "admin@example.com", "token": TOKEN, "password": STRONG}

        assert verify_password(STRONG, user.hashed_password)
        assert len(user.remember_token) == 60
        assert user.remember_token != "r" * 60
        mock_user_repository.save.assert_awaited_once_with(user)

        mock_event_publisher.publish.assert_awaited_once()
        event = mock_event_publisher.publish.await_args.args[0]
        assert isinstance(event, PasswordResetCompletedEvent)
        assert event.user_id == 42
        assert event.email == "admin@example.com"
        assert event.ip_address == "10.0.0.1"
        assert event.correlation_id == "corr-1"

        [notification] = notifications.pull()
        assert notification.status is NotificationStatus.SUCCESS
        assert notification.title == "Your password has been reset."

        assert mounted.attempt.password == ""
        assert not mounted.throttled

    @pytest.mark.asyncio
    async def test_password_accepted_by_injected_rule_is_applied(
        self, mock_broker, rate_limiter, notifications, mock_user_repository, mock_event_publisher, user
    ):
        # Arrange
        workflow = ResetPasswordWorkflow(
            broker=mock_broker,
            rate_limiter=rate_limiter,
            notifications=notifications,
            user_repository=mock_user_repository,
            event_publisher=mock_event_publisher,
            form=ResetPasswordForm(
                rule=PasswordRule(min_length=4, mixed_case=False, numbers=False, symbols=False)
            ),
        )
        workflow.mount(AuthContext.guest(), query={"email": "admin@example.com", "token": TOKEN})
        mock_broker.reset.side_effect = broker_accepting(user)
        submit(workflow, password="simple", confirmation="simple")

        # Act
        response = await workflow.reset_password()

        # Assert
        assert isinstance(response, PasswordResetResponse)
        assert verify_password("simple", user.hashed_password)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, title",
        [
            (PasswordResetStatus.INVALID_TOKEN, "This password reset token is invalid."),
            (PasswordResetStatus.INVALID_USER, "We can't find a user with that email address."),
        ],
    )
    async def test_broker_rejection(
        self, mounted, mock_broker, mock_user_repository, notifications, status, title
    ):
        mock_broker.reset.return_value = status
        submit(mounted)

        response = await mounted.reset_password()

        assert response is None
        assert not mounted.throttled
        mock_user_repository.save.assert_not_awaited()
        [notification] = notifications.pull()
        assert notification.status is NotificationStatus.DANGER
        assert notification.title == title

    @pytest.mark.asyncio
    async def test_validation_failure_never_reaches_broker(self, mounted, mock_broker, notifications):
        submit(mounted, confirmation="Different-Passw0rd!")

        with pytest.raises(FormValidationError) as exc_info:
            await mounted.reset_password()

        assert "password" in exc_info.value.errors
        mock_broker.reset.assert_not_awaited()
        assert notifications.pull() == []

    @pytest.mark.asyncio
    async def test_confirmation_is_not_sent_to_broker(self, mounted, mock_broker):
        mock_broker.reset.return_value = PasswordResetStatus.INVALID_TOKEN
        submit(mounted)

        await mounted.reset_password()

        credentials = mock_broker.reset.await_args.args[0]
        assert "passwordConfirmation" not in credentials
        assert "password_confirmation" not in credentials


class TestRateLimiting:
    """Submissions are throttled at two per minute per client."""

    @pytest.mark.asyncio
    async def test_third_attempt_within_window_is_throttled(
        self, mounted, mock_broker, notifications, clock
    ):
        # Arrange
        mock_broker.reset.return_value = PasswordResetStatus.INVALID_TOKEN

        # Act
        for _ in range(2):
            submit(mounted)
            assert await mounted.reset_password() is None
            notifications.pull()

        clock.now += 15
        submit(mounted)
        response = await mounted.reset_password()

        # Assert
        assert response is None
        assert mounted.throttled
        assert mock_broker.reset.await_count == 2
        [notification] = notifications.pull()
        assert notification.status is NotificationStatus.DANGER
        assert "45 seconds" in notification.title
        assert "within 1 min" in notification.title

    @pytest.mark.asyncio
    async def test_budget_is_restored_after_the_window(
        self, mounted, mock_broker, notifications, clock
    ):
        mock_broker.reset.return_value = PasswordResetStatus.INVALID_TOKEN
        for _ in range(3):
            submit(mounted)
            await mounted.reset_password()

        clock.now += 60
        submit(mounted)
        await mounted.reset_password()

        assert not mounted.throttled
        assert mock_broker.reset.await_count == 3

    @pytest.mark.asyncio
    async def test_invalid_submissions_spend_the_budget(self, mounted, mock_broker):
        mock_broker.reset.return_value = PasswordResetStatus.INVALID_TOKEN
        for _ in range(2):
            submit(mounted, password="weak", confirmation="weak")
            with pytest.raises(FormValidationError):
                await mounted.reset_password()

        submit(mounted)
        response = await mounted.reset_password()

        assert response is None
        assert mounted.throttled
        mock_broker.reset.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rate_limit_raises_when_budget_spent(self, workflow):
        await workflow.rate_limit(1, 60)

        with pytest.raises(TooManyRequestsError) as exc_info:
            await workflow.rate_limit(1, 60)

        assert exc_info.value.seconds_until_available == 60
        assert exc_info.value.minutes_until_available == 1

    def test_rate_limit_key_is_per_client_and_method(self, workflow, rate_limiter, notifications):
        other_client = ResetPasswordWorkflow(
            broker=AsyncMock(),
            rate_limiter=rate_limiter,
            notifications=notifications,
            user_repository=AsyncMock(),
            event_publisher=AsyncMock(),
            client_ip="10.0.0.2",
        )

        key = workflow.rate_limit_key("reset_password")

        assert key.startswith("panel-rate-limiter:")
        assert key == workflow.rate_limit_key("reset_password")
        assert key != workflow.rate_limit_key("other")
        assert key != other_client.rate_limit_key("reset_password")
