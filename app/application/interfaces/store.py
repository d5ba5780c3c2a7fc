"""Entity store port: one object exposing every repository plus a transaction scope."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
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


class IEntityStore(Protocol):
    """Typed access to all entity repositories.

    transaction() scopes a unit of work: every write inside it commits
    together, or none does if the block raises.
    """

    users: IUserRepository
    departments: IDepartmentRepository
    documents: IDocumentRepository
    versions: IDocumentVersionRepository
    comments: ICommentRepository
    workflows: IWorkflowRepository
    tasks: ITaskRepository
    audit_logs: IAuditLogRepository
    notifications: INotificationRepository
    offices: IOfficeRepository
    messages: IMessageRepository
    office_sessions: IOfficeSessionRepository

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Return an async context manager for an all-or-nothing unit of work."""
        ...
