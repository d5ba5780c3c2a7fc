"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.document import (
    Comment,
    Document,
    DocumentVersion,
)
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    JsonType,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.office import (
    Office,
    OfficeMessage,
    OfficeSession,
)
from app.infrastructure.persistence.models.user import Department, User
from app.infrastructure.persistence.models.workflow import Task, Workflow

__all__ = [
    "AuditLog",
    "Comment",
    "CreatedAtMixin",
    "CuidMixin",
    "Department",
    "Document",
    "DocumentVersion",
    "JsonType",
    "Notification",
    "Office",
    "OfficeMessage",
    "OfficeSession",
    "Task",
    "TimestampMixin",
    "User",
    "Workflow",
]
