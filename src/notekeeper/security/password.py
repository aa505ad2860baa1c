"""Password hashing utilities."""

from passlib.context import CryptContext

from ..config import get_settings

# Password hashing context
# Use bcrypt_sha256 to avoid bcrypt's 72-byte truncation issue on long passwords
# This pre-hashes with SHA-256 before applying bcrypt.
pwd_context = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__default_rounds=get_settings().password_hash_rounds,
)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # unrecognized or corrupted hash
        return False


def needs_update(hashed_password: str) -> bool:
    """Check if password hash needs updating."""
    return pwd_context.needs_update(hashed_password)
