"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (entity store, storage, notifications).
"""

from app.application.interfaces import (
    IEntityStore,
    INotificationService,
    IPasswordHasher,
    IStorageService,
)
from app.application.services import AuditRecorder
from app.application.use_cases import (
    CommentService,
    DirectoryService,
    DocumentService,
    MessageService,
    NotificationInboxService,
    OfficeService,
    OfficeSessionManager,
    TaskService,
    VersionService,
    WorkflowService,
)

__all__ = [
    "AuditRecorder",
    "CommentService",
    "DirectoryService",
    "DocumentService",
    "IEntityStore",
    "INotificationService",
    "IPasswordHasher",
    "IStorageService",
    "MessageService",
    "NotificationInboxService",
    "OfficeService",
    "OfficeSessionManager",
    "TaskService",
    "VersionService",
    "WorkflowService",
]
