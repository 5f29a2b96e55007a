"""Outcome codes returned by the password reset broker.

Each value doubles as the i18n key of the message shown to the user.
"""

from enum import Enum


class PasswordResetStatus(str, Enum):
    PASSWORD_RESET = "passwords.reset"
    INVALID_USER = "passwords.user"
    INVALID_TOKEN = "passwords.token"

    @property
    def is_success(self) -> bool:
        return self is PasswordResetStatus.PASSWORD_RESET
