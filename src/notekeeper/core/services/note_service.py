"""Note service implementation."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import Conflict, NotAuthorized, NotFound, ValidationError
from ..models.note import Note
from ..models.types import parse_timestamp
from ..repositories.errors import StoreError, StoreErrorKind
from ..repositories.note_repository import NoteRepository, UpdateOutcome
from ..schemas.notes import NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = logging.getLogger(__name__)

# unconditional updates retry the compare-and-swap against newer versions
MAX_UPDATE_ATTEMPTS = 3


class NoteService(INoteService):
    """Ownership checks and optimistic concurrency around the note store."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def create_note(self, user_id: UUID) -> NoteResponse:
        """Create an empty note owned by the caller."""
        note = await self.note_repo.create_note(user_id)
        logger.info("Created note", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return NoteResponse.from_note(note)

    async def list_notes(self, user_id: UUID) -> List[NoteResponse]:
        """List the caller's notes, most recently updated first."""
        notes = await self.note_repo.list_by_owner(user_id)
        return [NoteResponse.from_note(note) for note in notes]

    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get note by ID.

        Missing or malformed ids give 404; a note owned by someone else gives
        401 Not authorized.
        """
        note = await self._get_owned_note(note_id, user_id)
        return NoteResponse.from_note(note)

    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update a note, rejecting edits based on a stale version.

        Order: existence, ownership, version comparison, title validation,
        then the compare-and-swap write. With ``lastKnownUpdatedAt`` the client's
        version is the CAS predicate, so of two racing writers only one
        succeeds and the other gets Conflict with the stored note. Without it
        the observed version is used and the write is retried on a miss.
        """
        changes = None
        client_version = request.last_known_updated_at
        expected = self._parse_version(client_version) if client_version else None

        result = None
        for _ in range(MAX_UPDATE_ATTEMPTS):
            note = await self._get_owned_note(note_id, user_id)

            if client_version and (expected is None or expected != note.updated_at):
                logger.info(
                    "Rejected stale note update",
                    extra={"note_id": str(note.id), "user_id": str(user_id)},
                )
                raise Conflict(note)

            if changes is None:
                changes = self._clean_changes(request.provided_changes())

            if not changes:
                return NoteResponse.from_note(note)

            result = await self.note_repo.update_conditional(note.id, note.updated_at, changes)
            if result.outcome is UpdateOutcome.UPDATED:
                return NoteResponse.from_note(result.note)
            if result.outcome is UpdateOutcome.NOT_FOUND:
                raise NotFound()
            if client_version:
                logger.info(
                    "Lost concurrent note update",
                    extra={"note_id": str(note.id), "user_id": str(user_id)},
                )
                raise Conflict(result.note)

        raise Conflict(result.note)

    async def delete_note(self, note_id: str, user_id: UUID) -> bool:
        """Delete note."""
        note = await self._get_owned_note(note_id, user_id)
        if not await self.note_repo.delete_by_id(note.id):
            raise NotFound()
        logger.info("Deleted note", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return True

    async def _get_owned_note(self, note_id: str, user_id: UUID) -> Note:
        try:
            note = await self.note_repo.get_by_id(note_id)
        except StoreError as e:
            if e.kind is StoreErrorKind.INVALID_ID:
                raise NotFound() from e
            raise

        if note is None:
            raise NotFound()
        if not note.is_owned_by(user_id):
            raise NotAuthorized()
        return note

    @staticmethod
    def _clean_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
        """Trim the title; a null or blank one is rejected."""
        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise ValidationError("Title is required")
            changes["title"] = title
        return changes

    @staticmethod
    def _parse_version(value: str) -> Optional[datetime]:
        """Client version as a UTC instant; None when it is not a timestamp."""
        try:
            return parse_timestamp(value)
        except ValueError:
            return None
