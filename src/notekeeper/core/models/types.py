"""Custom SQLAlchemy types for NoteKeeper models with cross-DB support."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import DateTime, String, TypeDecorator


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so values survive an ISO round trip."""
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utcnow() -> datetime:
    """Current UTC time at millisecond precision."""
    return truncate_to_millis(datetime.now(timezone.utc))


def next_version(previous: Optional[datetime]) -> datetime:
    """New ``updated_at`` value, strictly later than ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(milliseconds=1)
    return now


def format_timestamp(value: datetime) -> str:
    """Normalized wire form: ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Raises ValueError for anything that is not a timestamp.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp stored at millisecond precision.

    - PostgreSQL keeps it in a TIMESTAMP WITH TIME ZONE column
    - SQLite has no timezone support, so the naive UTC value is stored and
      the tzinfo is re-attached on load

    The bound value goes through the same normalization as stored values, so
    equality predicates (the note version check) compare like with like.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = truncate_to_millis(value.astimezone(timezone.utc))
        if dialect.name == "postgresql":
            return value
        return value.replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.

    - Uses PostgreSQL UUID type when available
    - Falls back to CHAR(36) storing hex string form on other DBs (e.g., SQLite)
    """

    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID as PG_UUID

            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        # PostgreSQL expects uuid.UUID when as_uuid=True, others expect string
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value
        # Coerce string back to uuid.UUID for SQLite/others
        return uuid.UUID(str(value))
