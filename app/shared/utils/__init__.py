"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import ensure_utc, epoch_ms, utc_now
from app.shared.utils.generators import generate_cuid, generate_session_token

__all__ = [
    "generate_cuid",
    "generate_session_token",
    "utc_now",
    "ensure_utc",
    "epoch_ms",
]
