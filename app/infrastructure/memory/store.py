"""In-memory entity store for development and tests.

transaction() serializes units of work on an asyncio.Lock and restores a
snapshot of every table if the block raises. Nested transaction() calls in
the same task join the outer unit of work.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.infrastructure.memory.repositories import (
    MemoryAuditLogRepository,
    MemoryCommentRepository,
    MemoryDepartmentRepository,
    MemoryDocumentRepository,
    MemoryDocumentVersionRepository,
    MemoryMessageRepository,
    MemoryNotificationRepository,
    MemoryOfficeRepository,
    MemoryOfficeSessionRepository,
    MemoryState,
    MemoryTaskRepository,
    MemoryUserRepository,
    MemoryWorkflowRepository,
)

logger = logging.getLogger(__name__)


class MemoryEntityStore:
    """IEntityStore backed by process-local dicts."""

    def __init__(self, state: MemoryState | None = None) -> None:
        self.state = state or MemoryState()
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None
        self.users = MemoryUserRepository(self.state)
        self.departments = MemoryDepartmentRepository(self.state)
        self.documents = MemoryDocumentRepository(self.state)
        self.versions = MemoryDocumentVersionRepository(self.state)
        self.comments = MemoryCommentRepository(self.state)
        self.workflows = MemoryWorkflowRepository(self.state)
        self.tasks = MemoryTaskRepository(self.state)
        self.audit_logs = MemoryAuditLogRepository(self.state)
        self.notifications = MemoryNotificationRepository(self.state)
        self.offices = MemoryOfficeRepository(self.state)
        self.messages = MemoryMessageRepository(self.state)
        self.office_sessions = MemoryOfficeSessionRepository(self.state)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        current = asyncio.current_task()
        if self._owner is not None and self._owner is current:
            yield
            return
        async with self._lock:
            self._owner = current
            snapshot = self.state.snapshot()
            try:
                yield
            except BaseException:
                self.state.restore(snapshot)
                logger.debug("Memory store transaction rolled back")
                raise
            finally:
                self._owner = None

    def reset(self) -> None:
        """Drop every row (tests)."""
        self.state.restore(MemoryState().snapshot())
        self._lock = asyncio.Lock()
        self._owner = None
