"""
Password hashing and access token helpers.

Passwords are hashed with bcrypt. Access tokens are random URL-safe strings
handed to the client once; only their sha256 digest is persisted.
"""

from __future__ import annotations

import hashlib
import secrets

import bcrypt

from .config import settings

TOKEN_BYTES = 40


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plaintext password

    Returns:
        The bcrypt hash as text
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a stored bcrypt hash. Malformed hashes never match."""
    try:
        return bool(bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8")))
    except (ValueError, AttributeError):
        return False


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
