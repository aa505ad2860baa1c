"""
Note schemas.

Field names are camelCase on the wire. Timestamps are rendered in the
normalized millisecond form that clients echo back as ``lastKnownUpdatedAt``.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..models.types import format_timestamp


class NoteUpdate(BaseModel):
    """Note update request schema.

    Only fields present in the body are applied; an explicit ``null`` content
    clears the note, while an absent one leaves it untouched.
    """

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[Any] = Field(default=None, description="Editor payload (any JSON value)")
    last_known_updated_at: Optional[str] = Field(
        default=None, description="updatedAt the client last saw; enables conflict detection"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Shopping",
                "content": {"type": "doc", "content": []},
                "lastKnownUpdatedAt": "2024-01-01T00:00:00.000Z",
            }
        },
    )

    def provided_changes(self) -> dict:
        """The subset of title/content the client actually sent."""
        return {
            name: getattr(self, name)
            for name in ("title", "content")
            if name in self.model_fields_set
        }


class NoteResponse(BaseModel):
    """Note as returned by the API."""

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    content: Optional[Any] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "ownerId": "0c6d7c7e-3f55-4a58-9a4c-0a3a1e6a1d11",
                "title": "Untitled note",
                "content": None,
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-01T00:00:00.000Z",
            }
        },
    )

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_note(cls, note) -> "NoteResponse":
        return cls.model_validate(note)


class ConflictResponse(BaseModel):
    """409 body: the message plus the authoritative stored note."""

    message: str
    latest_note: NoteResponse

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
