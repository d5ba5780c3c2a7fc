"""JWT bearer tokens for user authentication.

Tokens carry sub (the user id) plus optional identity-provider claims
(email, first_name, last_name) that are synced into the user row.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings

PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub and optional profile claims).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(UTC) + ttl
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def create_user_token(user_id: str, **profile: str | None) -> str:
    """Token for user_id carrying any non-empty profile claims."""
    claims: dict[str, Any] = {"sub": user_id}
    claims.update({k: v for k, v in profile.items() if k in PROFILE_CLAIMS and v})
    return create_access_token(claims)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If token is invalid, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
