"""Domain entities."""

from .password_reset_token import PasswordResetTokenRecord
from .reset_attempt import ResetAttempt
from .user import User

__all__ = ["PasswordResetTokenRecord", "ResetAttempt", "User"]
