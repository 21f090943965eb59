"""
Password hashing.

PBKDF2-SHA256 with a random per-password salt, stored as "salt:hash".
"""

from __future__ import annotations

import hashlib
import secrets

ITERATIONS = 100_000


def _derive(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations=ITERATIONS,
    ).hex()


def hash_password(password: str) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: salt:hash format string
    """
    salt = secrets.token_hex(32)
    return f"{salt}:{_derive(password, salt)}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        salt, stored_hash = password_hash.split(":")
    except (ValueError, AttributeError):
        return False
    return secrets.compare_digest(_derive(password, salt), stored_hash)
