"""
Application error taxonomy.

Every error a client may see derives from NoteKeeperError and carries the
HTTP status it maps to plus a human readable message. The exception handlers
registered in main.py turn them into ``{"message": ...}`` JSON bodies.
"""

from typing import Any, Dict, Optional

from fastapi import status


class NoteKeeperError(Exception):
    """Base class for errors rendered as structured JSON responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(NoteKeeperError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class MissingField(ValidationError):
    default_message = "Please provide both username and password."


class DuplicateUsername(NoteKeeperError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists."


class InvalidCredentials(NoteKeeperError):
    """Unknown user or wrong password - deliberately indistinguishable."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials."


class Unauthenticated(NoteKeeperError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "No token, authorization denied"


class NotAuthorized(NoteKeeperError):
    """Caller is authenticated but does not own the resource."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class NotFound(NoteKeeperError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Note not found"


class Conflict(NoteKeeperError):
    """Optimistic concurrency check failed; carries the stored state."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict: The note has been updated by another source."

    def __init__(self, latest_note: Any, message: Optional[str] = None):
        super().__init__(message)
        self.latest_note = latest_note

    def to_body(self) -> Dict[str, Any]:
        from .schemas.notes import NoteResponse

        body = super().to_body()
        body["latestNote"] = NoteResponse.from_note(self.latest_note).model_dump(
            mode="json", by_alias=True
        )
        return body


class InvalidToken(Exception):
    """Identity token failed verification (signature, structure or expiry)."""
