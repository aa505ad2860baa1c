"""
User model for authentication.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """User account model with username/password auth."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # authoritative guard against duplicate registrations
    __table_args__ = (Index("idx_users_username", "username", unique=True),)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
