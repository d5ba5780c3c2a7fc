"""Shared utilities: request audit context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    ensure_utc,
    epoch_ms,
    generate_cuid,
    generate_session_token,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_session_token",
    "utc_now",
    "ensure_utc",
    "epoch_ms",
]
