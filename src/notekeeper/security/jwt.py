"""JWT identity token utilities."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..config import Settings
from ..core.exceptions import InvalidToken


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by a token."""

    subject: str
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies signed, time-limited identity tokens.

    The signing key comes from the settings object handed in at construction;
    the service keeps no other state, so verification is a pure function of
    the token and the current time.
    """

    def __init__(self, settings: Settings):
        self._secret_key = settings.secret_key
        self._algorithm = settings.algorithm
        self.default_ttl = timedelta(days=settings.token_expire_days)

    def issue(self, subject: str, username: str, ttl: Optional[timedelta] = None) -> str:
        """Create a signed token for ``subject`` valid for ``ttl`` (default: configured days)."""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (ttl if ttl is not None else self.default_ttl)

        to_encode = {
            "sub": str(subject),
            "username": username,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token`` or raise InvalidToken.

        Fails on a bad signature, a malformed token, missing claims or an
        expiry in the past (no leeway).
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        subject = payload.get("sub")
        username = payload.get("username")
        if not subject or not isinstance(username, str):
            raise InvalidToken("token is missing identity claims")

        return TokenClaims(
            subject=subject,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
