"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    UserResponse,
)
from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import CurrentUser, get_current_user, get_token_service
from ..security import TokenService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register(
    request: Optional[RegisterRequest] = Body(default=None),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Register a new user. A missing body is treated like an empty one."""
    auth_service = AuthService(session, token_service)
    return await auth_service.register_user(request or RegisterRequest())


@router.post("/login", response_model=LoginResponse, responses={400: {"model": ErrorResponse}})
async def login(
    request: Optional[LoginRequest] = Body(default=None),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Authenticate user and get an identity token."""
    auth_service = AuthService(session, token_service)
    return await auth_service.authenticate_user(request or LoginRequest())


@router.get("/me", response_model=UserResponse, responses={401: {"model": ErrorResponse}})
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Get current user profile."""
    auth_service = AuthService(session, token_service)
    return await auth_service.get_current_user(current_user.user_id)


@router.post(
    "/change-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def change_password(
    request: Optional[PasswordChangeRequest] = Body(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Change user password."""
    auth_service = AuthService(session, token_service)
    return await auth_service.change_password(
        current_user.user_id, request or PasswordChangeRequest()
    )
