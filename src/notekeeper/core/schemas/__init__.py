"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    UserResponse,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import ConflictResponse, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "PasswordChangeRequest",
    "UserResponse",
    # Note schemas
    "NoteUpdate",
    "NoteResponse",
    "ConflictResponse",
    # Common schemas
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
