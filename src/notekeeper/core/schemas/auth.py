"""
Authentication schemas.

These schemas define the API contracts for registration, login and the
caller's own account. Presence and length rules for credentials are enforced
by the service layer so that the error messages stay uniform.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..models.types import format_timestamp


class CredentialsRequest(BaseModel):
    """Username/password pair; both fields may be absent on the wire."""

    username: Optional[str] = Field(default=None, description="Username")
    password: Optional[str] = Field(default=None, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "john_doe", "password": "secret123"}}
    )


class RegisterRequest(CredentialsRequest):
    """User registration request schema."""


class LoginRequest(CredentialsRequest):
    """User login request schema."""


class LoginResponse(BaseModel):
    """Successful login: identity token for the ``x-auth-token`` header."""

    message: str = Field(description="Confirmation message")
    token: str = Field(description="Signed identity token")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Login successful!",
                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            }
        }
    )


class UserResponse(BaseModel):
    """Public user profile - never carries the password hash."""

    id: uuid.UUID = Field(description="User unique identifier")
    username: str = Field(description="Username")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class PasswordChangeRequest(BaseModel):
    """Password change request schema."""

    current_password: Optional[str] = Field(default=None, description="Current password")
    new_password: Optional[str] = Field(default=None, description="New password")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
