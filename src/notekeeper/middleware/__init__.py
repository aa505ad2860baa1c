"""Middleware for authentication and other cross-cutting concerns."""

from .auth import CurrentUser, TokenHeaderAuth, get_current_user, get_token_service

__all__ = ["CurrentUser", "TokenHeaderAuth", "get_current_user", "get_token_service"]
