"""Authentication service implementation."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...security import TokenService
from ..exceptions import InvalidCredentials, MissingField, NotFound, ValidationError
from ..schemas.auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    UserResponse,
)
from ..schemas.common import MessageResponse
from .interfaces import IAuthService
from .user_directory import UserDirectory

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession, token_service: TokenService):
        self.session = session
        self.directory = UserDirectory(session)
        self.token_service = token_service

    async def register_user(self, request: RegisterRequest) -> MessageResponse:
        """Register new user. Login is a separate step, so no token is issued."""
        if not request.username or not request.password:
            raise MissingField()

        await self.directory.create(request.username, request.password)
        return MessageResponse(message="User registered successfully!")

    async def authenticate_user(self, request: LoginRequest) -> LoginResponse:
        """Login user and return an identity token."""
        if not request.username or not request.password:
            raise MissingField()

        # unknown user and wrong password must be indistinguishable
        user = await self.directory.find_by_username(request.username)
        if not user:
            raise InvalidCredentials()

        if not await self.directory.verify_credentials(user, request.password):
            raise InvalidCredentials()

        token = self.token_service.issue(str(user.id), user.username)
        logger.info("User logged in", extra={"user_id": str(user.id)})

        return LoginResponse(message="Login successful!", token=token)

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.directory.get(user_id)
        if not user:
            raise NotFound("User not found")

        return UserResponse.model_validate(user)

    async def change_password(self, user_id: UUID, request: PasswordChangeRequest) -> MessageResponse:
        """Change user password after re-checking the current one."""
        if not request.current_password or not request.new_password:
            raise ValidationError("Please provide both current and new password.")

        user = await self.directory.get(user_id)
        if not user:
            raise NotFound("User not found")

        if not await self.directory.verify_credentials(user, request.current_password):
            raise InvalidCredentials()

        await self.directory.change_password(user, request.new_password)
        return MessageResponse(message="Password changed successfully")
