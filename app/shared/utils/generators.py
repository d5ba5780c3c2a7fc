"""ID and token generators."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

SESSION_TOKEN_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2) for primary keys."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_session_token() -> str:
    """URL-safe random bearer token for office sessions (returned once, never stored)."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
