import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.auth.models import User
from todo_api.database import UserRecord

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when inserting a user whose email is already registered."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> SQLite).
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmailError on email collision."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if email is registered."""
        pass


class SqlUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of the user repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user."""
        self.session.add(user.to_record())
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"[SqlUserRepository] Unique constraint rejected email={user.email}")
            raise DuplicateEmailError(user.email)
        logger.info(f"[SqlUserRepository] User created: id={user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        record = await self.session.get(UserRecord, user_id)
        if record is None:
            return None
        return User.from_record(record)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        result = await self.session.execute(
            select(UserRecord).where(UserRecord.email == email)
        )
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return User.from_record(record)

    async def exists_by_email(self, email: str) -> bool:
        """Check if email is registered."""
        result = await self.session.execute(
            select(UserRecord.id).where(UserRecord.email == email)
        )
        return result.first() is not None
