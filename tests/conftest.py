"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Tell app lifespan to skip real DB init
os.environ.setdefault("NOTEKEEPER_SKIP_LIFESPAN_DB", "1")

from notekeeper.config import Settings, get_settings  # noqa: E402
from notekeeper.core.models import BaseModel, User  # noqa: E402
from notekeeper.database import enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from notekeeper.main import app  # noqa: E402
from notekeeper.security import TokenService, hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture
def test_settings():
    """Override settings for testing using SQLite in-memory DB."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        debug=True,
    )


@pytest.fixture
async def test_engine(test_settings):
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_maker):
    """Database session for direct repository/service tests."""
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(session_maker, test_settings):
    """FastAPI app with DB session and settings overridden."""

    async def _override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async HTTP client bound to the app, sharing the test event loop."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def token_service(test_settings):
    return TokenService(test_settings)


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "username": f"testuser_{uuid4().hex[:8]}",
        "password": "secret123",
    }


async def _create_user(session, username: str, password: str) -> User:
    user = User(username=username, password_hash=hash_password(password))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    # Add the plain password to the user object for testing
    user.plain_password = password
    return user


@pytest.fixture
async def test_user(test_session, test_user_data):
    """Create a test user in the database."""
    return await _create_user(test_session, test_user_data["username"], test_user_data["password"])


@pytest.fixture
async def other_user(test_session):
    """A second user who owns nothing of test_user's."""
    return await _create_user(test_session, f"other_{uuid4().hex[:8]}", "otherpass")


@pytest.fixture
def auth_headers(test_user, token_service):
    """Headers carrying a valid identity token for test_user."""
    return {"x-auth-token": token_service.issue(str(test_user.id), test_user.username)}


@pytest.fixture
def other_auth_headers(other_user, token_service):
    return {"x-auth-token": token_service.issue(str(other_user.id), other_user.username)}
