"""Service interfaces for the reset password page.

Each collaborator of the reset workflow is expressed as an abstraction so
the workflow can run against in-memory fakes in tests and against the host
framework's services in production.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from panel_auth.domain.entities.reset_attempt import ResetAttempt
from panel_auth.domain.events.password_reset_events import BaseDomainEvent
from panel_auth.domain.interfaces.resettable import Resettable
from panel_auth.domain.value_objects.notification import Notification
from panel_auth.domain.value_objects.password_reset_status import PasswordResetStatus

ResetCallback = Callable[[Resettable, str], Awaitable[None]]


class IEventPublisher(ABC):
    """Interface for publishing domain events."""

    @abstractmethod
    async def publish(self, event: BaseDomainEvent) -> None:
        """Publish a single domain event."""
        raise NotImplementedError

    @abstractmethod
    async def publish_many(self, events: List[BaseDomainEvent]) -> None:
        """Publish multiple domain events."""
        raise NotImplementedError


class IRateLimiter(ABC):
    """Interface for counting attempts against a key within a time window."""

    @abstractmethod
    async def hit(self, key: str, decay_seconds: int = 60) -> int:
        """Record an attempt and return the attempt count in the current window."""
        raise NotImplementedError

    @abstractmethod
    async def attempts(self, key: str) -> int:
        """Attempts recorded in the current window."""
        raise NotImplementedError

    @abstractmethod
    async def too_many_attempts(self, key: str, max_attempts: int) -> bool:
        """Whether the key has already used ``max_attempts`` in the current window."""
        raise NotImplementedError

    @abstractmethod
    async def available_in(self, key: str) -> int:
        """Seconds until the current window for the key closes."""
        raise NotImplementedError

    @abstractmethod
    async def clear(self, key: str) -> None:
        """Forget all attempts for the key."""
        raise NotImplementedError


class INotificationSink(ABC):
    """Interface for user-facing notifications."""

    @abstractmethod
    def send(self, notification: Notification) -> None:
        """Queue a notification for display."""
        raise NotImplementedError

    @abstractmethod
    def pull(self) -> List[Notification]:
        """Return queued notifications and empty the queue."""
        raise NotImplementedError


class IPasswordBroker(ABC):
    """Interface for verifying reset credentials and applying a new password."""

    @abstractmethod
    async def reset(
        self, credentials: Mapping[str, Optional[str]], callback: ResetCallback
    ) -> PasswordResetStatus:
        """Reset a password.

        Args:
            credentials: ``email``, ``token`` and ``password``
            callback: Awaited with the resolved user and the new password
                once the token has been verified

        Returns:
            PasswordResetStatus: Outcome of the attempt
        """
        raise NotImplementedError

    @abstractmethod
    async def create_token(self, user: Resettable) -> str:
        """Issue a new reset token for the user."""
        raise NotImplementedError

    @abstractmethod
    async def token_exists(self, user: Resettable, token: str) -> bool:
        """Whether the token is currently valid for the user."""
        raise NotImplementedError


class IForm(ABC):
    """Interface for a declarative form bound to page state."""

    @abstractmethod
    def fill(self, attempt: ResetAttempt) -> None:
        """Bind the form to the page state it reads from."""
        raise NotImplementedError

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """Validate and return the dehydrated state.

        Raises:
            FormValidationError: If any field rule fails.
        """
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> List[Dict[str, Any]]:
        """Describe the fields for rendering."""
        raise NotImplementedError


class IPageStateStore(ABC):
    """Interface for keeping mounted page state between requests."""

    @abstractmethod
    async def put(self, attempt: ResetAttempt) -> str:
        """Store page state and return its identifier."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, page_id: str) -> Optional[ResetAttempt]:
        """Fetch page state, or None if unknown or expired."""
        raise NotImplementedError

    @abstractmethod
    async def forget(self, page_id: str) -> None:
        """Discard page state."""
        raise NotImplementedError
