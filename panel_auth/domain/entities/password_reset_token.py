from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Column, Field, SQLModel


class PasswordResetTokenRecord(SQLModel, table=True):
    """Stored password reset token, one per email address.

    Only a keyed digest of the token is kept, so a leaked table cannot be
    replayed against the reset page.

    Attributes:
        email: Address the token was issued for (primary key).
        token_digest: Keyed SHA-256 digest of the raw token.
        created_at: When the token was issued; expiry is measured from here.
    """

    __tablename__ = "password_reset_tokens"

    email: str = Field(primary_key=True, max_length=255)
    token_digest: str = Field(max_length=64)
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    def is_expired(self, expire_minutes: int, current_time: Optional[datetime] = None) -> bool:
        check_time = current_time or datetime.now(timezone.utc)
        created_at = self.created_at
        # SQLite hands timestamps back without an offset; they are stored in UTC.
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at + timedelta(minutes=expire_minutes) <= check_time
