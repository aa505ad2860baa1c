"""Notes API endpoints. Every route requires the ``x-auth-token`` header."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import ConflictResponse, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import CurrentUser, get_current_user

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={401: {"model": ErrorResponse}},
)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new, empty note."""
    note_service = NoteService(session)
    return await note_service.create_note(current_user.user_id)


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes, most recently updated first."""
    note_service = NoteService(session)
    return await note_service.list_notes(current_user.user_id)


@router.get("/{note_id}", response_model=NoteResponse, responses={404: {"model": ErrorResponse}})
async def get_note(
    note_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    return await note_service.get_note(note_id, current_user.user_id)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ConflictResponse}},
)
async def update_note(
    note_id: str,
    request: Optional[NoteUpdate] = Body(default=None),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note (with conflict detection). Every body field is optional."""
    note_service = NoteService(session)
    return await note_service.update_note(note_id, current_user.user_id, request or NoteUpdate())


@router.delete("/{note_id}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_note(
    note_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user.user_id)
    return MessageResponse(message="Note removed successfully")
