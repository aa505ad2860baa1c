"""Authentication middleware: validates the identity token on inbound requests."""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from ..config import Settings, get_settings
from ..core.exceptions import InvalidToken, Unauthenticated
from ..security import TokenService

TOKEN_HEADER = "x-auth-token"


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity established from a verified token."""

    user_id: UUID
    username: str


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    """Token service bound to the application settings."""
    return TokenService(settings)


class TokenHeaderAuth(APIKeyHeader):
    """Identity token read from the ``x-auth-token`` header."""

    def __init__(self, header_name: str = TOKEN_HEADER):
        super().__init__(name=header_name, auto_error=False)
        self.header_name = header_name

    async def __call__(
        self,
        request: Request,
        token_service: TokenService = Depends(get_token_service),
    ) -> CurrentUser:
        token = request.headers.get(self.header_name)
        if not token:
            raise Unauthenticated("No token, authorization denied")

        try:
            claims = token_service.verify(token)
            user_id = UUID(claims.subject)
        except (InvalidToken, ValueError):
            raise Unauthenticated("Token is not valid")

        current_user = CurrentUser(user_id=user_id, username=claims.username)
        # downstream handlers read the caller from here
        request.state.user = current_user
        return current_user


token_auth = TokenHeaderAuth()


async def get_current_user(user: CurrentUser = Depends(token_auth)) -> CurrentUser:
    """Get current authenticated user."""
    return user
