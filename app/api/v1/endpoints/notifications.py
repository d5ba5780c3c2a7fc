"""Notification API: the caller's inbox."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import CurrentUser, get_notification_inbox_service
from app.application.use_cases import NotificationInboxService
from app.schemas.notification import NotificationResponse

router = APIRouter()


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUser,
    inbox: Annotated[NotificationInboxService, Depends(get_notification_inbox_service)],
    unread: bool = False,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    """Newest first; ?unread=true for unread only."""
    notifications = await inbox.list_notifications(
        current_user, unread_only=unread, limit=limit
    )
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    current_user: CurrentUser,
    inbox: Annotated[NotificationInboxService, Depends(get_notification_inbox_service)],
):
    notification = await inbox.mark_read(current_user, notification_id)
    return NotificationResponse.model_validate(notification)
