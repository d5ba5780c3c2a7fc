"""Notification repository. Implements INotificationRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.repositories.base import BaseRepository, paginate


def _to_result(n: Notification) -> NotificationResult:
    return NotificationResult(
        id=n.id,
        to_uid=n.to_uid,
        type=n.type,
        payload=dict(n.payload or {}),
        read=n.read,
        created_at=n.created_at,
    )


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create(self, data: NotificationCreate) -> NotificationResult:
        row = Notification(to_uid=data.to_uid, type=data.type, payload=dict(data.payload))
        return _to_result(await self._add(row))

    async def get_by_id(self, notification_id: str) -> NotificationResult | None:
        row = await self._get_row(notification_id)
        return _to_result(row) if row else None

    async def list_for_user(
        self, user_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        stmt = select(Notification).where(Notification.to_uid == user_id)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))
        stmt = paginate(stmt.order_by(Notification.created_at.desc()), 0, limit)
        return [_to_result(row) for row in await self._scalars(stmt)]

    async def mark_read(self, notification_id: str) -> NotificationResult | None:
        row = await self._get_row(notification_id, for_update=True)
        if row is None:
            return None
        row.read = True
        return _to_result(await self._save(row))
