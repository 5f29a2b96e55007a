"""User Repository implementation using SQLModel.

This module provides the repository pattern implementation for User entity
operations, abstracting database access for domain services.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from structlog import get_logger

from panel_auth.core.exceptions import DatabaseError
from panel_auth.domain.entities.user import User
from panel_auth.domain.interfaces.repositories import IUserRepository

logger = get_logger(__name__)


class UserRepository(IUserRepository):
    """SQLModel implementation of IUserRepository.

    Emails are matched case-insensitively; they are stored as given.
    """

    def __init__(self, db_session: AsyncSession):
        """Initialize repository with database session.

        Args:
            db_session: Async session for database operations
        """
        self.db_session = db_session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        if user_id is None or user_id <= 0:
            return None
        return await self.db_session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        if not email or not email.strip():
            return None

        statement = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.db_session.exec(statement)
        return result.first()

    async def save(self, user: User) -> User:
        try:
            self.db_session.add(user)
            await self.db_session.commit()
            await self.db_session.refresh(user)
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Failed to save user", user_id=user.id, error=str(e))
            raise DatabaseError(f"Failed to save user: {e}") from e

        logger.debug("User saved", user_id=user.id)
        return user
