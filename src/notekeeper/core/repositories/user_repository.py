"""User repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User
from .errors import translate_errors


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user.

        Raises StoreError(DUPLICATE_KEY) when the username index rejects it.
        """
        user = User(**user_data)
        async with translate_errors(self.session):
            self.session.add(user)
            await self.session.commit()
            await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_user(self, user_id: UUID, update_data: dict) -> Optional[User]:
        """Update user data."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        for key, value in update_data.items():
            setattr(user, key, value)

        async with translate_errors(self.session):
            await self.session.commit()
            await self.session.refresh(user)
        return user

    async def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        user = await self.get_by_username(username)
        return user is not None
