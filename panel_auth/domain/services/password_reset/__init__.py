"""Password Reset Domain Services.

This module contains the domain services that carry out a password reset
from the reset page.
"""

from .password_broker import PasswordBroker
from .reset_password_workflow import ResetPasswordWorkflow

__all__ = [
    "PasswordBroker",
    "ResetPasswordWorkflow",
]
