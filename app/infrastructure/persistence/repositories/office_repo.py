"""Office, message and office session repositories.

Implement IOfficeRepository, IMessageRepository and IOfficeSessionRepository.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.office import (
    MessageCreate,
    MessageResult,
    OfficeCreate,
    OfficeResult,
    OfficeSessionCreate,
    OfficeSessionResult,
    OfficeUpdate,
)
from app.domain.enums import MessagePriority, MessageType
from app.infrastructure.persistence.models.office import (
    Office,
    OfficeMessage,
    OfficeSession,
)
from app.infrastructure.persistence.repositories.base import BaseRepository, paginate


def _to_result(o: Office) -> OfficeResult:
    """Map Office ORM to OfficeResult DTO."""
    return OfficeResult(
        id=o.id,
        office_id=o.office_id,
        name=o.name,
        description=o.description,
        office_code=o.office_code,
        office_password_hash=o.office_password_hash,
        head_user_id=o.head_user_id,
        admin_users=list(o.admin_users or []),
        members=list(o.members or []),
        department_id=o.department_id,
        created_at=o.created_at,
        updated_at=o.updated_at,
    )


class OfficeRepository(BaseRepository[Office]):
    """Office repository. Implements IOfficeRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Office)

    async def get_by_id(self, id: str) -> OfficeResult | None:
        row = await self._get_row(id)
        return _to_result(row) if row else None

    async def get_by_office_id(self, office_id: str) -> OfficeResult | None:
        rows = await self._scalars(select(Office).where(Office.office_id == office_id))
        return _to_result(rows[0]) if rows else None

    async def get_by_code(self, office_code: str) -> OfficeResult | None:
        rows = await self._scalars(select(Office).where(Office.office_code == office_code))
        return _to_result(rows[0]) if rows else None

    async def list_all(self) -> list[OfficeResult]:
        rows = await self._scalars(select(Office).order_by(func.lower(Office.name)))
        return [_to_result(row) for row in rows]

    async def create(self, data: OfficeCreate) -> OfficeResult:
        row = Office(**asdict(data))
        return _to_result(await self._add(row))

    async def update(self, id: str, data: OfficeUpdate) -> OfficeResult | None:
        row = await self._get_row(id, for_update=True)
        if row is None:
            return None
        for key, value in asdict(data).items():
            if value is not None:
                setattr(row, key, value)
        return _to_result(await self._save(row))

    async def delete(self, id: str) -> bool:
        result = await self.db.execute(
            delete(Office).where(Office.id == id).execution_options(synchronize_session="fetch")
        )
        return (result.rowcount or 0) > 0


def _message_to_result(m: OfficeMessage) -> MessageResult:
    return MessageResult(
        id=m.id,
        title=m.title,
        content=m.content,
        sender_user_id=m.sender_user_id,
        message_type=MessageType(m.message_type),
        target_office_id=m.target_office_id,
        is_read=dict(m.is_read or {}),
        priority=MessagePriority(m.priority),
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


class MessageRepository(BaseRepository[OfficeMessage]):
    """Office message repository. Implements IMessageRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OfficeMessage)

    async def get_by_id(self, message_id: str) -> MessageResult | None:
        row = await self._get_row(message_id)
        return _message_to_result(row) if row else None

    async def create(self, data: MessageCreate) -> MessageResult:
        row = OfficeMessage(
            title=data.title,
            content=data.content,
            sender_user_id=data.sender_user_id,
            message_type=data.message_type.value,
            target_office_id=data.target_office_id,
            is_read={},
            priority=data.priority.value,
        )
        return _message_to_result(await self._add(row))

    async def list_messages(
        self,
        target_office_id: str | None = None,
        message_type: MessageType | None = None,
        include_general: bool = False,
        limit: int = 100,
    ) -> list[MessageResult]:
        stmt = select(OfficeMessage)
        if message_type is not None:
            stmt = stmt.where(OfficeMessage.message_type == message_type.value)
        if target_office_id is not None:
            targeted = OfficeMessage.target_office_id == target_office_id
            if include_general:
                targeted = or_(
                    targeted,
                    OfficeMessage.message_type == MessageType.GENERAL_MEMO.value,
                )
            stmt = stmt.where(targeted)
        stmt = paginate(stmt.order_by(OfficeMessage.created_at.desc()), 0, limit)
        return [_message_to_result(row) for row in await self._scalars(stmt)]

    async def mark_read(self, message_id: str, reader_key: str) -> MessageResult | None:
        row = await self._get_row(message_id, for_update=True)
        if row is None:
            return None
        row.is_read = {**(row.is_read or {}), reader_key: True}
        return _message_to_result(await self._save(row))


def _session_to_result(s: OfficeSession) -> OfficeSessionResult:
    return OfficeSessionResult(
        id=s.id,
        office_id=s.office_id,
        user_id=s.user_id,
        login_time=s.login_time,
        ip_address=s.ip_address,
        token_hash=s.token_hash,
        is_active=s.is_active,
        expires_at=s.expires_at,
    )


class OfficeSessionRepository(BaseRepository[OfficeSession]):
    """Office session repository. Implements IOfficeSessionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OfficeSession)

    async def create(self, data: OfficeSessionCreate) -> OfficeSessionResult:
        row = OfficeSession(
            office_id=data.office_id,
            user_id=data.user_id,
            ip_address=data.ip_address,
            token_hash=data.token_hash,
            is_active=True,
            expires_at=data.expires_at,
        )
        return _session_to_result(await self._add(row))

    async def get_by_token_hash(self, token_hash: str) -> OfficeSessionResult | None:
        rows = await self._scalars(
            select(OfficeSession).where(OfficeSession.token_hash == token_hash)
        )
        return _session_to_result(rows[0]) if rows else None

    async def deactivate(self, token_hash: str) -> bool:
        result = await self.db.execute(
            update(OfficeSession)
            .where(OfficeSession.token_hash == token_hash)
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        return (result.rowcount or 0) > 0

    async def delete_stale(self, cutoff: datetime) -> int:
        """Same predicate as OfficeSessionEntity.is_stale, evaluated in SQL."""
        result = await self.db.execute(
            delete(OfficeSession)
            .where(
                or_(
                    OfficeSession.expires_at <= cutoff,
                    and_(
                        OfficeSession.is_active.is_(False),
                        OfficeSession.login_time <= cutoff,
                    ),
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
