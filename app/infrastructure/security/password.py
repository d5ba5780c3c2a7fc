"""Password hashing for office credentials (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long office passwords are not silently truncated.
"""

import base64
import hashlib
from functools import lru_cache

import bcrypt


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


@lru_cache
def _dummy_hash() -> str:
    return get_password_hash("docflow-dummy-password")


class BcryptPasswordHasher:
    """IPasswordHasher backed by bcrypt."""

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, password: str, hashed: str | None) -> bool:
        if hashed is None:
            verify_password(password, _dummy_hash())
            return False
        return verify_password(password, hashed)
