"""Credential store backed by the ``users`` table."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.core.exceptions import ConflictError
from travelstory.models.user import User


class UserStore:
    """Persistence for user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, full_name: str, email: str, password_hash: str) -> User:
        """Insert a user, relying on the unique email constraint.

        Raises:
            ConflictError: If the email is already registered
        """
        user = User(full_name=full_name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError("User Already exists") from e
        await self.db.refresh(user)
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()
