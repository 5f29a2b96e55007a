"""Password Reset Domain Events.

These events represent significant business occurrences in the password reset domain
that other parts of the system may need to react to (logging, session revocation,
security notifications).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class BaseDomainEvent:
    """Base class for all domain events.

    Attributes:
        occurred_at: When the event occurred
        user_id: ID of the user associated with the event
        correlation_id: Optional correlation ID for tracking
    """

    occurred_at: datetime
    user_id: Optional[int]
    correlation_id: Optional[str]

    def __post_init__(self):
        """Ensure occurred_at is timezone-aware."""
        if not self.occurred_at.tzinfo:
            object.__setattr__(self, 'occurred_at',
                               self.occurred_at.replace(tzinfo=timezone.utc))


@dataclass(frozen=True)
class PasswordResetCompletedEvent(BaseDomainEvent):
    """Event emitted when a user's password has been reset.

    Listeners use it to revoke other sessions, notify the account owner,
    or write an audit trail.

    Attributes:
        email: Email address of the user
        reset_method: Method used for reset (e.g., "token")
        ip_address: Optional IP address of the requester
    """

    email: str
    reset_method: str = "token"
    ip_address: Optional[str] = None
