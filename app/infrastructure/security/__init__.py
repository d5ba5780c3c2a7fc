"""Security: JWT bearer tokens and password hashing."""

from app.infrastructure.security.jwt import (
    create_access_token,
    create_user_token,
    verify_token,
)
from app.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "create_access_token",
    "create_user_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
