# Database connection setup
from typing import Any, AsyncIterator, Dict

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings, get_settings
from .core.models.base import BaseModel


def engine_options(database_url: str) -> Dict[str, Any]:
    """Extra create_async_engine arguments for the configured backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    # server databases drop idle connections; check them on checkout
    return {"pool_pre_ping": True}


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """Async engine for ``settings.database_url``."""
    new_engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        **engine_options(settings.database_url),
    )
    if new_engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(get_settings())

# expire_on_commit=False keeps returned notes readable after the write commits
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """One session per request; closed when the request finishes."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables():
    """Create all tables."""
    # register every mapped table on the metadata
    from .core import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
