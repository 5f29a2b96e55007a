"""Repository interfaces for the password reset domain.

These interfaces keep the domain independent of how users and reset tokens
are stored.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from panel_auth.domain.interfaces.resettable import Resettable


class IUserRepository(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[Resettable]:
        """Get user by ID, or None when it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Resettable]:
        """Get user by email (case-insensitive), or None when it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: Resettable) -> Resettable:
        """Persist a new or updated user and return it."""
        raise NotImplementedError


class IPasswordResetTokenRepository(ABC):
    """Interface for password reset token storage.

    Implementations store at most one token per user and never keep the
    raw token.
    """

    @abstractmethod
    async def create(self, user: Resettable) -> str:
        """Issue a new token for the user, replacing any previous one.

        Returns:
            str: The raw token to hand to the user
        """
        raise NotImplementedError

    @abstractmethod
    async def exists(self, user: Resettable, token: str) -> bool:
        """Whether ``token`` is the user's current, unexpired token."""
        raise NotImplementedError

    @abstractmethod
    async def consume(
        self, user: Resettable, token: str, apply: Callable[[], Awaitable[None]]
    ) -> bool:
        """Burn the user's token and run ``apply`` in the same transaction.

        The token is deleted only if it still matches and has not expired.
        Of several concurrent calls with one token at most one succeeds.
        If ``apply`` raises, the deletion is rolled back and the error
        propagates.

        Returns:
            bool: False when the token was invalid, expired or already used
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_expired(self) -> int:
        """Remove expired tokens and return how many were removed."""
        raise NotImplementedError
