"""Notification delivery: persist in-app notifications through the entity store."""

from __future__ import annotations

from typing import Any

from app.application.dtos.notification import NotificationCreate
from app.application.interfaces.store import IEntityStore
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class StoreNotificationService:
    """INotificationService that writes one Notification row per recipient.

    Rows are written in the caller's unit of work, so a rolled-back
    transition leaves no notifications behind.
    """

    def __init__(self, store: IEntityStore) -> None:
        self.store = store

    async def notify(
        self,
        to_uids: list[str],
        notification_type: str,
        payload: dict[str, Any],
    ) -> None:
        recipients = list(dict.fromkeys(uid for uid in to_uids if uid))
        if not recipients:
            logger.info("Notify %s: no recipients, skipping", notification_type)
            return
        for uid in recipients:
            await self.store.notifications.create(
                NotificationCreate(to_uid=uid, type=notification_type, payload=dict(payload))
            )
        logger.info(
            "Notify %s: %d recipient(s) (%s)",
            notification_type,
            len(recipients),
            payload.get("docId", "-"),
        )
