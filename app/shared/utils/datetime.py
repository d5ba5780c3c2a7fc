"""UTC datetime helpers.

Every datetime the application stores or compares is timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize dt to aware UTC.

    Naive values are taken to already be UTC (some drivers drop tzinfo);
    aware values are converted. None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def epoch_ms(dt: datetime | None = None) -> int:
    """Milliseconds since the Unix epoch for dt (default: now)."""
    return int((dt or utc_now()).timestamp() * 1000)
