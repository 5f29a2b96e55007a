"""Password Broker.

The broker is the single authority on whether a reset token may be used.
It resolves the user, then burns the token and applies the new password
through a caller-supplied callback as one unit of work.
"""

from typing import Mapping, Optional

import structlog

from panel_auth.domain.interfaces.repositories import (
    IPasswordResetTokenRepository,
    IUserRepository,
)
from panel_auth.domain.interfaces.resettable import Resettable
from panel_auth.domain.interfaces.services import IPasswordBroker, ResetCallback
from panel_auth.domain.value_objects.password_reset_status import PasswordResetStatus

logger = structlog.get_logger(__name__)


class PasswordBroker(IPasswordBroker):
    """Token-checking password broker.

    Tokens are single use: a successful reset deletes the user's token, so
    replaying the same token yields ``INVALID_TOKEN``.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        token_repository: IPasswordResetTokenRepository,
    ):
        """Initialize with required dependencies.

        Args:
            user_repository: Repository used to resolve the user by email
            token_repository: Storage of issued reset tokens
        """
        self._user_repository = user_repository
        self._token_repository = token_repository

        logger.info("PasswordBroker initialized")

    async def reset(
        self, credentials: Mapping[str, Optional[str]], callback: ResetCallback
    ) -> PasswordResetStatus:
        """Reset the password of the user identified by ``credentials``.

        The callback runs only once the token has been claimed, so two
        submissions racing with one token cannot both reset the password.
        Errors raised by the callback propagate and leave the token in place.
        """
        email = credentials.get("email")
        token = credentials.get("token")

        user = await self._get_user(email)
        if user is None:
            logger.warning("Password reset for unknown user")
            return PasswordResetStatus.INVALID_USER

        password = credentials.get("password") or ""

        async def apply() -> None:
            await callback(user, password)

        if not token or not await self._token_repository.consume(user, token, apply):
            logger.warning(
                "Invalid or expired password reset token",
                user_id=user.id,
                token_prefix=token[:8] if token else "none",
            )
            return PasswordResetStatus.INVALID_TOKEN

        logger.info("Password reset token consumed", user_id=user.id)
        return PasswordResetStatus.PASSWORD_RESET

    async def create_token(self, user: Resettable) -> str:
        token = await self._token_repository.create(user)
        logger.info("Password reset token issued", user_id=user.id, token_prefix=token[:8])
        return token

    async def token_exists(self, user: Resettable, token: str) -> bool:
        return await self._token_repository.exists(user, token)

    async def _get_user(self, email: Optional[str]) -> Optional[Resettable]:
        if not email:
            return None
        return await self._user_repository.get_by_email(email)
