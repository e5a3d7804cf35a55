"""User Repository — SQLAlchemy persistence for registered users.

Invariants:
    - Username uniqueness is enforced by the store, surfaced as DuplicateUsernameError
    - Any other SQLAlchemy failure becomes StoreError with a client-safe message
    - The session is rolled back before any error leaves this module
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateUsernameError, ErrorContext, StoreError
from app.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """UserRepository backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(
        self, username: str, password_hash: str | None = None,
    ) -> User:
        user = User(username=username, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Username rejected by unique constraint: {e.orig}",
                extra={"username": username},
            )
            raise DuplicateUsernameError(username, ErrorContext(username=username))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to create user: {e}",
                extra={"username": username}, exc_info=True,
            )
            raise StoreError(
                f"Could not create username {username}", "insert",
                ErrorContext(username=username),
            )
        logger.info(
            "User registered", extra={"username": username, "user_id": user.id},
        )
        return user

    async def find_by_username(self, username: str) -> User | None:
        try:
            result = await self.db.execute(
                select(User).where(User.username == username),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"User lookup failed: {e}",
                extra={"username": username}, exc_info=True,
            )
            raise StoreError(
                "Could not look up user", "select", ErrorContext(username=username),
            )
        return result.scalar_one_or_none()
