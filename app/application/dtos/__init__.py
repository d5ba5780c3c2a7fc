"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit_log import (
    AuditContext,
    AuditLogEntryCreate,
    AuditLogResult,
)
from app.application.dtos.document import (
    CommentCreate,
    CommentResult,
    DocumentCreate,
    DocumentFilter,
    DocumentListItem,
    DocumentResult,
    VersionCreate,
    VersionResult,
)
from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.application.dtos.office import (
    MessageCreate,
    MessageResult,
    OfficeCreate,
    OfficeLoginResult,
    OfficeResult,
    OfficeSessionCreate,
    OfficeSessionResult,
    OfficeSummary,
    OfficeUpdate,
)
from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult
from app.application.dtos.user import (
    DepartmentCreate,
    DepartmentResult,
    UserResult,
    UserSummary,
    UserUpsert,
)
from app.application.dtos.workflow import WorkflowResult

__all__ = [
    "AuditContext",
    "AuditLogEntryCreate",
    "AuditLogResult",
    "CommentCreate",
    "CommentResult",
    "DepartmentCreate",
    "DepartmentResult",
    "DocumentCreate",
    "DocumentFilter",
    "DocumentListItem",
    "DocumentResult",
    "MessageCreate",
    "MessageResult",
    "NotificationCreate",
    "NotificationResult",
    "OfficeCreate",
    "OfficeLoginResult",
    "OfficeResult",
    "OfficeSessionCreate",
    "OfficeSessionResult",
    "OfficeSummary",
    "OfficeUpdate",
    "TaskCreate",
    "TaskFilter",
    "TaskResult",
    "UserResult",
    "UserSummary",
    "UserUpsert",
    "VersionCreate",
    "VersionResult",
    "WorkflowResult",
]
