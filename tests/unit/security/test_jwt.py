"""Unit tests for security/jwt.py"""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from notekeeper.config import Settings
from notekeeper.core.exceptions import InvalidToken
from notekeeper.security.jwt import TokenService


@pytest.fixture
def service():
    return TokenService(Settings(secret_key="test-secret", algorithm="HS256", token_expire_days=7))


def test_issue_and_verify_token(service):
    sub = str(uuid.uuid4())
    token = service.issue(sub, "alice")
    assert isinstance(token, str)

    claims = service.verify(token)
    assert claims.subject == sub
    assert claims.username == "alice"


def test_default_lifetime_is_seven_days(service):
    claims = service.verify(service.issue(str(uuid.uuid4()), "alice"))
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_expired_token_is_rejected(service):
    token = service.issue(str(uuid.uuid4()), "alice", ttl=timedelta(seconds=-1))
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_invalid_signature_is_rejected(service):
    other = TokenService(Settings(secret_key="wrong-secret"))
    token = other.issue(str(uuid.uuid4()), "alice")
    with pytest.raises(InvalidToken):
        service.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_malformed_token_is_rejected(service, token):
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_token_without_username_is_rejected(service):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "iat": 1_700_000_000, "exp": 4_000_000_000},
        "test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_token_without_expiry_is_rejected(service):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "username": "alice", "iat": 1_700_000_000},
        "test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        service.verify(token)
