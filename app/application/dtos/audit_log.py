"""DTOs for the audit trail (append-only action log)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    actor_uid: str
    action: str
    target_type: str
    target_id: str
    ip: str | None = None
    user_agent: str | None = None
    diff: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry (read-model for list)."""

    id: str
    actor_uid: str
    action: str
    target_type: str
    target_id: str
    timestamp: datetime
    ip: str | None
    user_agent: str | None
    diff: dict[str, Any] | None
    metadata: dict[str, Any] | None


@dataclass(frozen=True)
class AuditContext:
    """Request facts copied onto every audit entry written during the request."""

    ip: str | None = None
    user_agent: str | None = None
    request_id: str | None = None
