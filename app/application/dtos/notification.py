"""DTOs for user notifications."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class NotificationCreate:
    to_uid: str
    type: str
    payload: dict[str, Any]


@dataclass(frozen=True)
class NotificationResult:
    id: str
    to_uid: str
    type: str
    payload: dict[str, Any]
    read: bool
    created_at: datetime
