"""Application interfaces (ports): repository, store and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAuditLogRepository,
    ICommentRepository,
    IDepartmentRepository,
    IDocumentRepository,
    IDocumentVersionRepository,
    IMessageRepository,
    INotificationRepository,
    IOfficeRepository,
    IOfficeSessionRepository,
    ITaskRepository,
    IUserRepository,
    IWorkflowRepository,
)
from app.application.interfaces.services import (
    INotificationService,
    IPasswordHasher,
    IStorageService,
)
from app.application.interfaces.store import IEntityStore

__all__ = [
    "IAuditLogRepository",
    "ICommentRepository",
    "IDepartmentRepository",
    "IDocumentRepository",
    "IDocumentVersionRepository",
    "IEntityStore",
    "IMessageRepository",
    "INotificationRepository",
    "INotificationService",
    "IOfficeRepository",
    "IOfficeSessionRepository",
    "IPasswordHasher",
    "IStorageService",
    "ITaskRepository",
    "IUserRepository",
    "IWorkflowRepository",
]
