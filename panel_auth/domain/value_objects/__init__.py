"""Domain value objects."""

from .auth_context import AuthContext
from .notification import Notification, NotificationStatus
from .password import PasswordRule
from .password_reset_status import PasswordResetStatus
from .rate_limit import RateLimitState, RateLimitWindow
from .redirect import PasswordResetResponse, Redirect
from .reset_token import ResetToken

__all__ = [
    "AuthContext",
    "Notification",
    "NotificationStatus",
    "PasswordResetStatus",
    "PasswordResetResponse",
    "PasswordRule",
    "RateLimitState",
    "RateLimitWindow",
    "Redirect",
    "ResetToken",
]
