"""Password hashing helpers using passlib.

Provides two simple functions used by the signup and login flows:
- hash_password(plain: str) -> str
- verify_password(plain: str, hashed: str) -> bool

Uses bcrypt via passlib's CryptContext with a fixed cost factor, read once
from `BCRYPT_ROUNDS` (default 10).
"""
from __future__ import annotations

import warnings

from passlib.context import CryptContext

from notes_app import config

rounds = config.bcrypt_rounds()

try:
    pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
    pwd_context.hash("test")
except Exception as exc:
    warnings.warn(
        "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
        f"Original error: {exc}",
        RuntimeWarning,
    )
    pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash.

    Returns True if the password matches, False otherwise.
    """
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False
