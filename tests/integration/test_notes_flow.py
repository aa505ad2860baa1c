"""Notes API end to end: CRUD, ownership and conflict detection."""

import uuid

import pytest

from notekeeper.core.repositories import StoreError, StoreErrorKind
from notekeeper.core.repositories.note_repository import NoteRepository

CONFLICT_MESSAGE = "Conflict: The note has been updated by another source."


async def _create(client, headers) -> dict:
    resp = await client.post("/api/notes", headers=headers)
    assert resp.status_code == 201
    return resp.json()


async def test_create_note_defaults(async_client, test_user, auth_headers):
    note = await _create(async_client, auth_headers)

    assert note["title"] == "Untitled note"
    assert note["content"] is None
    assert note["ownerId"] == str(test_user.id)
    assert note["updatedAt"].endswith("Z")
    assert set(note) == {"id", "ownerId", "title", "content", "createdAt", "updatedAt"}


async def test_list_only_own_notes(async_client, auth_headers, other_auth_headers):
    mine = await _create(async_client, auth_headers)
    await _create(async_client, other_auth_headers)

    resp = await async_client.get("/api/notes", headers=auth_headers)
    assert resp.status_code == 200
    assert [n["id"] for n in resp.json()] == [mine["id"]]


async def test_get_is_idempotent(async_client, auth_headers):
    note = await _create(async_client, auth_headers)

    first = await async_client.get(f"/api/notes/{note['id']}", headers=auth_headers)
    second = await async_client.get(f"/api/notes/{note['id']}", headers=auth_headers)
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json() == note


async def test_update_with_version(async_client, auth_headers):
    note = await _create(async_client, auth_headers)

    resp = await async_client.put(
        f"/api/notes/{note['id']}",
        json={
            "title": "Plans",
            "content": {"type": "doc", "content": [{"type": "text", "text": "hi"}]},
            "lastKnownUpdatedAt": note["updatedAt"],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "Plans"
    assert updated["content"]["content"][0]["text"] == "hi"
    assert updated["updatedAt"] > note["updatedAt"]
    assert updated["createdAt"] == note["createdAt"]


async def test_stale_update_returns_latest_note(async_client, auth_headers):
    note = await _create(async_client, auth_headers)
    stale = note["updatedAt"]

    first = await async_client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Tab one", "lastKnownUpdatedAt": stale},
        headers=auth_headers,
    )
    assert first.status_code == 200

    second = await async_client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Tab two", "lastKnownUpdatedAt": stale},
        headers=auth_headers,
    )
    assert second.status_code == 409
    body = second.json()
    assert body["message"] == CONFLICT_MESSAGE
    assert body["latestNote"] == first.json()

    # the client rebases on latestNote and retries
    retry = await async_client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Tab two", "lastKnownUpdatedAt": body["latestNote"]["updatedAt"]},
        headers=auth_headers,
    )
    assert retry.status_code == 200
    assert retry.json()["title"] == "Tab two"


async def test_update_without_version_overwrites(async_client, auth_headers):
    note = await _create(async_client, auth_headers)

    for title in ("one", "two"):
        resp = await async_client.put(
            f"/api/notes/{note['id']}", json={"title": title}, headers=auth_headers
        )
        assert resp.status_code == 200
    assert resp.json()["title"] == "two"


async def test_content_null_versus_absent(async_client, auth_headers):
    note = await _create(async_client, auth_headers)
    url = f"/api/notes/{note['id']}"

    await async_client.put(url, json={"content": ["a", "b"]}, headers=auth_headers)
    kept = await async_client.put(url, json={"title": "renamed"}, headers=auth_headers)
    assert kept.json()["content"] == ["a", "b"]

    cleared = await async_client.put(url, json={"content": None}, headers=auth_headers)
    assert cleared.status_code == 200
    assert cleared.json()["content"] is None


@pytest.mark.parametrize("title", [None, "", "   "])
async def test_blank_title_is_rejected(async_client, auth_headers, title):
    note = await _create(async_client, auth_headers)

    resp = await async_client.put(
        f"/api/notes/{note['id']}", json={"title": title}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Title is required"}


async def test_delete(async_client, auth_headers):
    note = await _create(async_client, auth_headers)
    url = f"/api/notes/{note['id']}"

    resp = await async_client.delete(url, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Note removed successfully"}

    assert (await async_client.get(url, headers=auth_headers)).status_code == 404
    assert (await async_client.delete(url, headers=auth_headers)).status_code == 404


@pytest.mark.parametrize("note_id", [str(uuid.uuid4()), "not-an-id"])
async def test_unknown_or_malformed_id(async_client, auth_headers, note_id):
    resp = await async_client.get(f"/api/notes/{note_id}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Note not found"}


async def test_foreign_note(async_client, auth_headers, other_auth_headers):
    note = await _create(async_client, other_auth_headers)
    url = f"/api/notes/{note['id']}"

    for method, kwargs in (
        ("GET", {}),
        ("PUT", {"json": {"title": "hijack"}}),
        ("DELETE", {}),
    ):
        resp = await async_client.request(method, url, headers=auth_headers, **kwargs)
        assert resp.status_code == 401
        assert resp.json() == {"message": "Not authorized"}

    owner_view = await async_client.get(url, headers=other_auth_headers)
    assert owner_view.json() == note


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/notes"),
        ("POST", "/api/notes"),
        ("GET", f"/api/notes/{uuid.uuid4()}"),
        ("PUT", f"/api/notes/{uuid.uuid4()}"),
        ("DELETE", f"/api/notes/{uuid.uuid4()}"),
    ],
)
async def test_notes_require_token(async_client, method, path):
    resp = await async_client.request(method, path, json={"title": "x"} if method == "PUT" else None)
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token, authorization denied"}


async def test_invalid_token(async_client):
    resp = await async_client.get("/api/notes", headers={"x-auth-token": "garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Token is not valid"}


async def test_store_failure_is_server_error(async_client, auth_headers, monkeypatch):
    async def _down(self, owner_id):
        raise StoreError(StoreErrorKind.UNAVAILABLE, "connection refused")

    monkeypatch.setattr(NoteRepository, "list_by_owner", _down)

    resp = await async_client.get("/api/notes", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error"}


async def test_update_without_body_returns_current_note(async_client, auth_headers):
    note = await _create(async_client, auth_headers)

    resp = await async_client.put(f"/api/notes/{note['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == note


async def test_update_without_body_still_checks_existence(async_client, auth_headers):
    resp = await async_client.put(f"/api/notes/{uuid.uuid4()}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Note not found"}


@pytest.mark.parametrize("title", [None, "   "])
async def test_ownership_is_checked_before_title(async_client, auth_headers, other_auth_headers, title):
    note = await _create(async_client, other_auth_headers)

    resp = await async_client.put(
        f"/api/notes/{note['id']}", json={"title": title}, headers=auth_headers
    )
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authorized"}
