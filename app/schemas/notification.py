"""Notification API schemas."""

from datetime import datetime
from typing import Any

from app.schemas.common import ApiModel


class NotificationResponse(ApiModel):
    id: str
    to_uid: str
    type: str
    payload: dict[str, Any]
    read: bool
    created_at: datetime
