"""Note repository for database operations."""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import DEFAULT_NOTE_TITLE, Note
from ..models.types import next_version
from .errors import StoreError, StoreErrorKind, translate_errors

NoteId = Union[str, UUID]


class UpdateOutcome(str, enum.Enum):
    UPDATED = "updated"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


@dataclass
class UpdateResult:
    """Result of a conditional update; ``note`` is the stored state afterwards."""

    outcome: UpdateOutcome
    note: Optional[Note]


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def parse_id(note_id: NoteId) -> UUID:
        """Coerce an external identifier, raising StoreError(INVALID_ID)."""
        if isinstance(note_id, UUID):
            return note_id
        try:
            return UUID(str(note_id))
        except (ValueError, TypeError, AttributeError) as e:
            raise StoreError(StoreErrorKind.INVALID_ID, repr(note_id)) from e

    async def create_note(self, owner_id: UUID) -> Note:
        """Create an empty note for ``owner_id``."""
        note = Note(owner_id=owner_id, title=DEFAULT_NOTE_TITLE, content=None)
        async with translate_errors(self.session):
            self.session.add(note)
            await self.session.commit()
            await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: NoteId) -> Optional[Note]:
        """Get note by ID, always reading the stored row."""
        stmt = (
            select(Note)
            .where(Note.id == self.parse_id(note_id))
            .execution_options(populate_existing=True)
        )
        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID) -> List[Note]:
        """All notes of ``owner_id``, most recently updated first."""
        stmt = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(desc(Note.updated_at), desc(Note.created_at))
            .execution_options(populate_existing=True)
        )
        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_id(self, note_id: NoteId) -> bool:
        """Delete a note; True if a row was removed."""
        stmt = delete(Note).where(Note.id == self.parse_id(note_id))
        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
            await self.session.commit()
        return result.rowcount > 0

    async def update_conditional(
        self,
        note_id: NoteId,
        expected_updated_at: Optional[datetime],
        changes: Dict[str, Any],
    ) -> UpdateResult:
        """Apply ``changes`` only if the stored version still equals the expected one.

        Compare-and-swap in a single UPDATE statement: the version predicate
        and the write happen atomically in the database, so of two writers
        holding the same version exactly one matches a row. ``updated_at`` is
        always bumped past the expected version.
        """
        nid = self.parse_id(note_id)
        values = {k: v for k, v in changes.items() if k in ("title", "content")}
        values["updated_at"] = next_version(expected_updated_at)

        stmt = update(Note).where(Note.id == nid)
        if expected_updated_at is not None:
            stmt = stmt.where(Note.updated_at == expected_updated_at)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        async with translate_errors(self.session):
            result = await self.session.execute(stmt)
            await self.session.commit()

        current = await self.get_by_id(nid)
        if result.rowcount == 1 and current is not None:
            return UpdateResult(UpdateOutcome.UPDATED, current)
        if current is None:
            return UpdateResult(UpdateOutcome.NOT_FOUND, None)
        return UpdateResult(UpdateOutcome.CONFLICT, current)
