"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.repositories.base import paginate


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        actor_uid=row.actor_uid,
        action=row.action,
        target_type=row.target_type,
        target_id=row.target_id,
        timestamp=row.timestamp,
        ip=row.ip,
        user_agent=row.user_agent,
        diff=row.diff,
        metadata=row.meta,
    )


class AuditLogRepository:
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""
        row = AuditLog(
            actor_uid=entry.actor_uid,
            action=entry.action,
            target_type=entry.target_type,
            target_id=entry.target_id,
            ip=entry.ip,
            user_agent=entry.user_agent,
            diff=entry.diff,
            meta=entry.metadata,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list_for_target(
        self, target_type: str, target_id: str, skip: int = 0, limit: int = 100
    ) -> list[AuditLogResult]:
        """List entries for one target (newest first)."""
        stmt = (
            select(AuditLog)
            .where(AuditLog.target_type == target_type, AuditLog.target_id == target_id)
            .order_by(AuditLog.timestamp.desc())
        )
        result = await self.db.execute(paginate(stmt, skip, limit))
        return [_orm_to_result(row) for row in result.scalars().all()]
