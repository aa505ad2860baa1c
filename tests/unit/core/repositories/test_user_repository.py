"""Unit tests for UserRepository against SQLite."""

import uuid

import pytest

from notekeeper.core.repositories import StoreError, StoreErrorKind, UserRepository


async def test_create_and_lookup(test_session):
    repo = UserRepository(test_session)
    user = await repo.create_user({"username": "alice", "password_hash": "h"})

    assert (await repo.get_by_id(user.id)).username == "alice"
    assert (await repo.get_by_username("alice")).id == user.id
    assert await repo.get_by_username("bob") is None
    assert await repo.is_username_taken("alice") is True
    assert await repo.is_username_taken("bob") is False


async def test_username_lookup_is_exact(test_session):
    repo = UserRepository(test_session)
    await repo.create_user({"username": "Alice", "password_hash": "h"})
    assert await repo.get_by_username("alice") is None


async def test_duplicate_username_raises_store_error(test_session):
    repo = UserRepository(test_session)
    await repo.create_user({"username": "alice", "password_hash": "h"})

    with pytest.raises(StoreError) as exc:
        await repo.create_user({"username": "alice", "password_hash": "other"})
    assert exc.value.kind is StoreErrorKind.DUPLICATE_KEY

    # session is usable again after the rollback
    assert await repo.is_username_taken("alice") is True


async def test_update_user(test_session, test_user):
    repo = UserRepository(test_session)
    updated = await repo.update_user(test_user.id, {"password_hash": "new-hash"})
    assert updated.password_hash == "new-hash"
    assert await repo.update_user(uuid.uuid4(), {"password_hash": "x"}) is None
