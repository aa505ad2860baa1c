# Basic tests
from fastapi.testclient import TestClient

from notekeeper.main import app

client = TestClient(app)


def test_root_endpoint():
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "NoteKeeper API"}


def test_unknown_route_uses_message_body():
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_models_import():
    """Test that models can be imported."""
    from notekeeper.core.models.note import Note
    from notekeeper.core.models.user import User

    assert User.__tablename__ == "users"
    assert Note.__tablename__ == "notes"
