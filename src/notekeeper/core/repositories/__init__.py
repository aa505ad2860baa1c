"""Repository layer for data access."""

from .errors import StoreError, StoreErrorKind
from .note_repository import NoteRepository, UpdateOutcome, UpdateResult
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "NoteRepository",
    "UpdateOutcome",
    "UpdateResult",
    "StoreError",
    "StoreErrorKind",
]
