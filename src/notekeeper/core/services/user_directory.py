"""User directory: unique usernames with hashed credentials."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ...security import hash_password, verify_password
from ..exceptions import DuplicateUsername, ValidationError
from ..models.user import User
from ..repositories.errors import StoreError, StoreErrorKind
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6


def _username_errors(username: str) -> List[str]:
    if not username:
        return ["Username is required"]
    if len(username) < USERNAME_MIN_LENGTH:
        return [f"Username must be at least {USERNAME_MIN_LENGTH} characters long"]
    if len(username) > USERNAME_MAX_LENGTH:
        return [f"Username must be at most {USERNAME_MAX_LENGTH} characters long"]
    return []


def _password_errors(password: str) -> List[str]:
    if not password:
        return ["Password is required"]
    if len(password) < PASSWORD_MIN_LENGTH:
        return [f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"]
    return []


class UserDirectory:
    """Creates and looks up users. The only place raw passwords are hashed."""

    def __init__(self, session: AsyncSession):
        self.user_repo = UserRepository(session)

    async def create(self, username: str, raw_password: str) -> User:
        """Validate, hash and store a new user.

        Raises ValidationError or DuplicateUsername. The unique index is the
        final arbiter: a duplicate-key failure from the store (two concurrent
        registrations passing the pre-check) maps to DuplicateUsername too.
        """
        username = (username or "").strip()
        errors = _username_errors(username) + _password_errors(raw_password)
        if errors:
            raise ValidationError(" ".join(errors))

        if await self.user_repo.is_username_taken(username):
            raise DuplicateUsername()

        password_hash = await run_in_threadpool(hash_password, raw_password)
        try:
            user = await self.user_repo.create_user(
                {"username": username, "password_hash": password_hash}
            )
        except StoreError as e:
            if e.kind is StoreErrorKind.DUPLICATE_KEY:
                raise DuplicateUsername() from e
            raise

        logger.info("Registered user", extra={"user_id": str(user.id)})
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        """Look up a user by (trimmed) username."""
        username = (username or "").strip()
        if not username:
            return None
        return await self.user_repo.get_by_username(username)

    async def get(self, user_id) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

    async def verify_credentials(self, user: User, raw_password: str) -> bool:
        """Check ``raw_password`` against the stored hash off the event loop."""
        return await run_in_threadpool(verify_password, raw_password, user.password_hash)

    async def change_password(self, user: User, raw_password: str) -> User:
        """Validate and store a new password hash for ``user``."""
        errors = _password_errors(raw_password)
        if errors:
            raise ValidationError(" ".join(errors))

        password_hash = await run_in_threadpool(hash_password, raw_password)
        updated = await self.user_repo.update_user(user.id, {"password_hash": password_hash})
        logger.info("Password changed", extra={"user_id": str(user.id)})
        return updated or user
