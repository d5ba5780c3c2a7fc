"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.document_repo import (
    CommentRepository,
    DocumentRepository,
    DocumentVersionRepository,
)
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.office_repo import (
    MessageRepository,
    OfficeRepository,
    OfficeSessionRepository,
)
from app.infrastructure.persistence.repositories.user_repo import (
    DepartmentRepository,
    UserRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import (
    TaskRepository,
    WorkflowRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "CommentRepository",
    "DepartmentRepository",
    "DocumentRepository",
    "DocumentVersionRepository",
    "MessageRepository",
    "NotificationRepository",
    "OfficeRepository",
    "OfficeSessionRepository",
    "TaskRepository",
    "UserRepository",
    "WorkflowRepository",
]
