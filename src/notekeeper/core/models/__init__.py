"""
Database models for NoteKeeper.

SQLAlchemy ORM models that define the database schema:
    - User: account with username/password authentication
    - Note: owner-scoped document with a JSON payload
"""

from .base import BaseModel
from .note import DEFAULT_NOTE_TITLE, Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "DEFAULT_NOTE_TITLE",
]
