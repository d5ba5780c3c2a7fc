"""Audit log ORM model. Append-only action log; rows are never updated or deleted."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, JsonType
from app.shared.utils.datetime import utc_now


class AuditLog(CuidMixin, Base):
    """Who did what, when, to which target. Table: audit_log."""

    __tablename__ = "audit_log"

    actor_uid: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    target_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_id: Mapped[str] = mapped_column(String, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    diff: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    # "metadata" is reserved on declarative classes.
    meta: Mapped[dict[str, Any] | None] = mapped_column("metadata", JsonType, nullable=True)

    __table_args__ = (
        Index("ix_audit_log_target", "target_type", "target_id", "timestamp"),
    )


@event.listens_for(AuditLog, "before_update")
def _prevent_audit_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Audit log entries are append-only; updates are forbidden."""
    raise ValueError("Audit log entries are immutable and cannot be updated.")


@event.listens_for(AuditLog, "before_delete")
def _prevent_audit_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Audit log entries cannot be deleted."""
    raise ValueError("Audit log entries cannot be deleted.")
