"""Notification inbox: list and mark read (recipient only)."""

from __future__ import annotations

from app.application.dtos.notification import NotificationResult
from app.application.dtos.user import UserResult
from app.application.interfaces.store import IEntityStore
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException


class NotificationInboxService:
    def __init__(self, store: IEntityStore) -> None:
        self.store = store

    async def list_notifications(
        self, actor: UserResult, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        return await self.store.notifications.list_for_user(
            actor.id, unread_only=unread_only, limit=limit
        )

    async def mark_read(self, actor: UserResult, notification_id: str) -> NotificationResult:
        async with self.store.transaction():
            notification = await self.store.notifications.get_by_id(notification_id)
            if not notification:
                raise ResourceNotFoundException("notification", notification_id)
            if notification.to_uid != actor.id:
                raise AuthorizationException(resource="notification", action="mark_read")
            updated = await self.store.notifications.mark_read(notification_id)
        if updated is None:
            raise ResourceNotFoundException("notification", notification_id)
        return updated
