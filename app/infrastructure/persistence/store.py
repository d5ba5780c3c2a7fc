"""SQLAlchemy entity store: every repository over one AsyncSession.

transaction() opens a SAVEPOINT when the session already has a transaction
(request scope from session_scope), otherwise a real transaction.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    CommentRepository,
    DepartmentRepository,
    DocumentRepository,
    DocumentVersionRepository,
    MessageRepository,
    NotificationRepository,
    OfficeRepository,
    OfficeSessionRepository,
    TaskRepository,
    UserRepository,
    WorkflowRepository,
)


class SqlEntityStore:
    """IEntityStore backed by PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.departments = DepartmentRepository(session)
        self.documents = DocumentRepository(session)
        self.versions = DocumentVersionRepository(session)
        self.comments = CommentRepository(session)
        self.workflows = WorkflowRepository(session)
        self.tasks = TaskRepository(session)
        self.audit_logs = AuditLogRepository(session)
        self.notifications = NotificationRepository(session)
        self.offices = OfficeRepository(session)
        self.messages = MessageRepository(session)
        self.office_sessions = OfficeSessionRepository(session)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self.session.in_transaction():
            async with self.session.begin_nested():
                yield
        else:
            async with self.session.begin():
                yield
