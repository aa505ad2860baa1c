"""Store-level failure classification."""

import enum
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class StoreErrorKind(str, enum.Enum):
    """What went wrong in the persistence layer."""

    INVALID_ID = "invalid_id"  # identifier is not in the store's id format
    DUPLICATE_KEY = "duplicate_key"  # unique index violation
    UNAVAILABLE = "unavailable"  # any other driver/database failure


class StoreError(Exception):
    """Failure raised by repositories; callers branch on ``kind``."""

    def __init__(self, kind: StoreErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


@asynccontextmanager
async def translate_errors(session: AsyncSession) -> AsyncIterator[None]:
    """Roll back and re-raise SQLAlchemy failures as StoreError."""
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        raise StoreError(StoreErrorKind.DUPLICATE_KEY, str(e.orig)) from e
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(StoreErrorKind.UNAVAILABLE, str(e)) from e
