"""Domain Interfaces for dependency inversion.

These interfaces define the contracts the reset password workflow depends
on. Infrastructure provides the implementations.
"""

from .repositories import IPasswordResetTokenRepository, IUserRepository
from .resettable import Resettable
from .services import (
    IEventPublisher,
    IForm,
    INotificationSink,
    IPageStateStore,
    IPasswordBroker,
    IRateLimiter,
    ResetCallback,
)

__all__ = [
    "IEventPublisher",
    "IForm",
    "INotificationSink",
    "IPageStateStore",
    "IPasswordBroker",
    "IPasswordResetTokenRepository",
    "IRateLimiter",
    "IUserRepository",
    "Resettable",
    "ResetCallback",
]
