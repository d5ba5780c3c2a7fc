"""Application use cases: one service per area, each over the entity store."""

from app.application.use_cases.directory import DirectoryService
from app.application.use_cases.documents import (
    CommentService,
    DocumentService,
    VersionService,
)
from app.application.use_cases.notifications import NotificationInboxService
from app.application.use_cases.offices import (
    MessageService,
    OfficeService,
    OfficeSessionManager,
)
from app.application.use_cases.workflows import TaskService, WorkflowService

__all__ = [
    "CommentService",
    "DirectoryService",
    "DocumentService",
    "MessageService",
    "NotificationInboxService",
    "OfficeService",
    "OfficeSessionManager",
    "TaskService",
    "VersionService",
    "WorkflowService",
]
