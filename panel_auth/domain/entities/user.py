from datetime import datetime, timezone  # For timestamp fields
from typing import Any, Optional  # For optional fields

from sqlalchemy import DateTime  # Explicit DateTime type
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Represents a panel User entity and acts as an Aggregate Root.

    The record satisfies the ``Resettable`` capability: it exposes the email
    a reset is addressed to and accepts forced attribute updates from the
    password reset callback.

    Attributes:
        id: The unique identifier for the user (primary key).
        name: Display name shown in the panel.
        email: A unique, case-insensitive email address.
        hashed_password: The bcrypt-hashed password.
        remember_token: Random token backing "remember me" sessions. Rotated
            on every password reset so existing sessions are invalidated.
        is_active: Inactive users cannot log in to the panel.
        created_at: The timestamp of when the user account was created.
        updated_at: The timestamp of the last update to the user's record.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(default="", max_length=255)
    email: str = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),
        description="Unique, case-insensitive email address.",
    )
    hashed_password: Optional[str] = Field(default=None, max_length=255)
    remember_token: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    def get_email_for_password_reset(self) -> str:
        """The address password reset links for this user are sent to."""
        return self.email

    def force_fill(self, **attributes: Any) -> "User":
        """Assign attributes without going through input validation.

        Raises:
            AttributeError: If an attribute is not a column of the record.
        """
        for name, value in attributes.items():
            if name not in self.__class__.model_fields:
                raise AttributeError(f"User has no attribute {name!r}")
            setattr(self, name, value)
        self.updated_at = _utcnow()
        return self
