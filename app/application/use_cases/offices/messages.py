"""Office messages and general memos: admin broadcast and per-reader read state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.office import MessageCreate, MessageResult
from app.application.dtos.user import UserResult, UserSummary
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import require_admin
from app.application.services.audit_service import AuditRecorder
from app.application.use_cases.offices.office_operations import office_reader_key
from app.domain.enums import AuditAction, AuditTargetType, MessagePriority, MessageType
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageListItem:
    message: MessageResult
    sender: UserSummary | None


class MessageService:
    """Admins post messages; offices (by session) and users mark them read."""

    def __init__(self, store: IEntityStore) -> None:
        self.store = store
        self.audit = AuditRecorder(store.audit_logs)

    async def list_messages(
        self,
        actor: UserResult,
        target_office_id: str | None = None,
        message_type: MessageType | None = None,
        limit: int = 100,
    ) -> list[MessageListItem]:
        require_admin(actor, "message", "list")
        messages = await self.store.messages.list_messages(
            target_office_id=target_office_id,
            message_type=message_type,
            include_general=target_office_id is not None and message_type is None,
            limit=limit,
        )
        senders = await self.store.users.get_by_ids({m.sender_user_id for m in messages})
        return [
            MessageListItem(
                message=m,
                sender=UserSummary.from_user(senders[m.sender_user_id])
                if m.sender_user_id in senders
                else None,
            )
            for m in messages
        ]

    async def create_message(
        self,
        actor: UserResult,
        title: str | None,
        content: str | None,
        message_type: MessageType = MessageType.GENERAL_MEMO,
        target_office_id: str | None = None,
        priority: MessagePriority = MessagePriority.NORMAL,
        context: AuditContext | None = None,
    ) -> MessageResult:
        """Post an office-specific message (needs target_office_id) or a general memo."""
        if not title or not title.strip():
            raise ValidationException("Title is required", field="title")
        if not content or not content.strip():
            raise ValidationException("Content is required", field="content")
        if message_type == MessageType.OFFICE_SPECIFIC and not target_office_id:
            raise ValidationException(
                "target_office_id is required for office-specific messages",
                field="target_office_id",
            )
        if message_type == MessageType.GENERAL_MEMO:
            target_office_id = None
        require_admin(actor, "message", "create")
        async with self.store.transaction():
            if target_office_id and not await self.store.offices.get_by_office_id(
                target_office_id
            ):
                raise ResourceNotFoundException("office", target_office_id)
            message = await self.store.messages.create(
                MessageCreate(
                    title=title.strip(),
                    content=content,
                    sender_user_id=actor.id,
                    message_type=message_type,
                    target_office_id=target_office_id,
                    priority=priority,
                )
            )
            await self.audit.record(
                actor.id,
                AuditAction.MESSAGE_CREATED.value,
                AuditTargetType.MESSAGE.value,
                message.id,
                context=context,
                metadata={"messageType": message_type.value, "targetOfficeId": target_office_id},
            )
        logger.info("Message %s (%s) posted by %s", message.id, message_type.value, actor.id)
        return message

    async def mark_read(self, message_id: str, reader_key: str) -> MessageResult:
        """Set is_read[reader_key]; idempotent."""
        async with self.store.transaction():
            message = await self.store.messages.mark_read(message_id, reader_key)
        if message is None:
            raise ResourceNotFoundException("message", message_id)
        return message

    async def mark_read_by_office(self, office_id: str, message_id: str) -> MessageResult:
        return await self.mark_read(message_id, office_reader_key(office_id))
