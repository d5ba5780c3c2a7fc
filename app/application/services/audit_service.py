"""Audit trail recorder: appends one entry per successful state-changing operation."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.audit_log import (
    AuditContext,
    AuditLogEntryCreate,
    AuditLogResult,
)
from app.application.interfaces.repositories import IAuditLogRepository

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Writes audit entries through the store's audit repository.

    Callers invoke record() after the mutation succeeded and inside the same
    store transaction, so a failed operation leaves no entry behind.
    """

    def __init__(self, audit_repo: IAuditLogRepository) -> None:
        self.audit_repo = audit_repo

    async def record(
        self,
        actor_uid: str,
        action: str,
        target_type: str,
        target_id: str,
        context: AuditContext | None = None,
        diff: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditLogResult:
        ctx = context or AuditContext()
        meta = dict(metadata or {})
        if ctx.request_id:
            meta.setdefault("requestId", ctx.request_id)
        entry = await self.audit_repo.create(
            AuditLogEntryCreate(
                actor_uid=actor_uid,
                action=action,
                target_type=target_type,
                target_id=target_id,
                ip=ctx.ip,
                user_agent=ctx.user_agent,
                diff=diff,
                metadata=meta or None,
            )
        )
        logger.debug(
            "Audit %s by %s on %s/%s", action, actor_uid, target_type, target_id
        )
        return entry


def changed_fields(before: dict[str, Any], after: dict[str, Any]) -> dict[str, Any]:
    """Return {field: {"from": old, "to": new}} for keys whose value differs."""
    return {
        key: {"from": before.get(key), "to": value}
        for key, value in after.items()
        if before.get(key) != value
    }
