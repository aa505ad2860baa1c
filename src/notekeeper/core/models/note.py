# Note model for user content
import uuid
from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel
from .types import GUID

DEFAULT_NOTE_TITLE = "Untitled note"


class Note(BaseModel):
    """Note owned by a single user.

    ``updated_at`` doubles as the optimistic concurrency version: every
    successful write moves it strictly forward and conditional updates
    compare against it.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_NOTE_TITLE)
    # arbitrary editor payload (usually a rich-text JSON document)
    content: Mapped[Optional[Any]] = mapped_column(JSON(none_as_null=True), nullable=True)

    # owner reference, fixed at creation
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("idx_notes_owner_id", "owner_id"),
        # listing sorts the owner's notes by most recent update
        Index("idx_notes_owner_updated", "owner_id", "updated_at"),
    )

    def __repr__(self) -> str:
        # Truncated title at 30 characters plus an ellipsis
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.owner_id == user_id
