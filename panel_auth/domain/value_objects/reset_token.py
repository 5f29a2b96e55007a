"""Reset Token Value Object for secure token management.

This value object encapsulates password reset token business rules. The raw
token is only ever handed to the user; storage keeps a keyed digest.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ClassVar, Optional


@dataclass(frozen=True)
class ResetToken:
    """Password reset token value object.

    Attributes:
        value: The raw token string (64 hex characters when generated)
        created_at: When the token was issued
        expires_at: Token expiration timestamp
    """

    value: str
    created_at: datetime
    expires_at: datetime

    TOKEN_BYTES: ClassVar[int] = 32
    DEFAULT_EXPIRY_MINUTES: ClassVar[int] = 60

    def __post_init__(self) -> None:
        """Validate token on construction."""
        if not self.value:
            raise ValueError("Reset token cannot be empty")

        if not self.created_at.tzinfo or not self.expires_at.tzinfo:
            raise ValueError("Reset token timestamps must be timezone-aware")

        if self.expires_at <= self.created_at:
            raise ValueError("Reset token must expire after it is created")

    @classmethod
    def generate(
        cls, expiry_minutes: Optional[int] = None, now: Optional[datetime] = None
    ) -> "ResetToken":
        """Generate a new cryptographically secure reset token.

        Args:
            expiry_minutes: Token expiry time in minutes (default: 60)
            now: Issue time (default: current UTC time)

        Returns:
            ResetToken: New token with expiration
        """
        created_at = now or datetime.now(timezone.utc)
        minutes = expiry_minutes or cls.DEFAULT_EXPIRY_MINUTES
        return cls(
            value=secrets.token_hex(cls.TOKEN_BYTES),
            created_at=created_at,
            expires_at=created_at + timedelta(minutes=minutes),
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Check whether the token has expired."""
        check_time = current_time or datetime.now(timezone.utc)
        return check_time >= self.expires_at

    def mask_for_logging(self) -> str:
        """Token prefix safe to write to logs."""
        return f"{self.value[:8]}..."
