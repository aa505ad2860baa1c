"""
Service interfaces for NoteKeeper application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
from uuid import UUID

from ..schemas.auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    UserResponse,
)
from ..schemas.common import HealthCheckResponse, MessageResponse
from ..schemas.notes import NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Auth service for registration, login and account upkeep."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> MessageResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> LoginResponse:
        """Login user and return an identity token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        pass

    @abstractmethod
    async def change_password(self, user_id: UUID, request: PasswordChangeRequest) -> MessageResponse:
        """Change user password."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, user_id: UUID) -> NoteResponse:
        """Create new empty note."""
        pass

    @abstractmethod
    async def list_notes(self, user_id: UUID) -> List[NoteResponse]:
        """List the caller's notes, most recently updated first."""
        pass

    @abstractmethod
    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get note by ID."""
        pass

    @abstractmethod
    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update note with conflict detection."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: UUID) -> bool:
        """Delete note."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
