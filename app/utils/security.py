"""
Security utilities: password hashing and bearer token helpers.
"""

import hashlib
import secrets
import logging
from typing import Optional

import bcrypt

from app.core.exceptions import ValidationError
from app.models.user import BCRYPT_MAX_BYTES

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain-text password

    Returns:
        bcrypt hash as a string

    Raises:
        ValidationError: password longer than bcrypt's 72-byte limit
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        raise ValidationError.for_field("password", f"must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    """
    Check a plain-text password against a stored bcrypt hash.
    Malformed hashes count as a mismatch.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Stored password hash is malformed: {e}")
        return False


def generate_token() -> str:
    """Opaque bearer token (256 bits)."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """
    Tokens are stored as SHA-256 digests only, so a leaked database
    does not leak usable sessions.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
