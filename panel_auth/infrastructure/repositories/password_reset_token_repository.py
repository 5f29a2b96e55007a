"""Password reset token repository using SQLModel.

One record per email address. Only the keyed digest of the token is
persisted; the raw token leaves this module exactly once, from ``create``.
"""

from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from structlog import get_logger

from panel_auth.core.config.settings import settings
from panel_auth.core.exceptions import DatabaseError
from panel_auth.domain.entities.password_reset_token import PasswordResetTokenRecord
from panel_auth.domain.interfaces.repositories import IPasswordResetTokenRepository
from panel_auth.domain.interfaces.resettable import Resettable
from panel_auth.domain.value_objects.reset_token import ResetToken
from panel_auth.utils.security import digest_token, token_matches

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """Database-backed password reset token storage."""

    def __init__(
        self,
        db_session: AsyncSession,
        expire_minutes: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize repository.

        Args:
            db_session: Async session for database operations
            expire_minutes: Token lifetime (default: PASSWORD_RESET_EXPIRE_MINUTES)
            clock: Source of the current UTC time
        """
        self.db_session = db_session
        self._expire_minutes = expire_minutes or settings.PASSWORD_RESET_EXPIRE_MINUTES
        self._clock = clock

    async def create(self, user: Resettable) -> str:
        email = user.get_email_for_password_reset()
        token = ResetToken.generate(self._expire_minutes, now=self._clock())

        record = await self.db_session.get(PasswordResetTokenRecord, email)
        if record is None:
            record = PasswordResetTokenRecord(email=email)
        record.token_digest = digest_token(token.value)
        record.created_at = token.created_at

        await self._commit(record)
        logger.debug("Password reset token stored", user_id=user.id, expires_at=token.expires_at.isoformat())
        return token.value

    async def exists(self, user: Resettable, token: str) -> bool:
        record = await self.db_session.get(
            PasswordResetTokenRecord, user.get_email_for_password_reset()
        )
        if record is None:
            return False

        if record.is_expired(self._expire_minutes, self._clock()):
            logger.info("Password reset token expired", user_id=user.id)
            return False

        return token_matches(token, record.token_digest)

    async def consume(
        self, user: Resettable, token: str, apply: Callable[[], Awaitable[None]]
    ) -> bool:
        if not await self.exists(user, token):
            return False

        statement = (
            delete(PasswordResetTokenRecord)
            .where(PasswordResetTokenRecord.email == user.get_email_for_password_reset())
            .where(PasswordResetTokenRecord.token_digest == digest_token(token))
        )
        try:
            result = await self.db_session.execute(statement)
            if result.rowcount != 1:
                # Another request burned the token between the check and the delete.
                await self.db_session.rollback()
                logger.warning("Password reset token already consumed", user_id=user.id)
                return False

            await apply()
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            raise DatabaseError(f"Failed to consume password reset token: {e}") from e
        except Exception:
            await self.db_session.rollback()
            raise

        return True

    async def delete_expired(self) -> int:
        now = self._clock()
        result = await self.db_session.exec(select(PasswordResetTokenRecord))
        expired = [r for r in result.all() if r.is_expired(self._expire_minutes, now)]
        try:
            for record in expired:
                await self.db_session.delete(record)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            raise DatabaseError(f"Failed to delete expired password reset tokens: {e}") from e

        logger.info("Expired password reset tokens deleted", count=len(expired))
        return len(expired)

    async def _commit(self, record: PasswordResetTokenRecord) -> None:
        try:
            self.db_session.add(record)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            raise DatabaseError(f"Failed to store password reset token: {e}") from e
