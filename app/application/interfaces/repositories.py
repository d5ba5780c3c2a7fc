"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Every implementation exists twice: in-memory (dev/tests) and SQLAlchemy.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
    from app.application.dtos.document import (
        CommentCreate,
        CommentResult,
        DocumentCreate,
        DocumentFilter,
        DocumentResult,
        VersionCreate,
        VersionResult,
    )
    from app.application.dtos.notification import (
        NotificationCreate,
        NotificationResult,
    )
    from app.application.dtos.office import (
        MessageCreate,
        MessageResult,
        OfficeCreate,
        OfficeResult,
        OfficeSessionCreate,
        OfficeSessionResult,
        OfficeUpdate,
    )
    from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult
    from app.application.dtos.user import (
        DepartmentCreate,
        DepartmentResult,
        UserResult,
        UserUpsert,
    )
    from app.application.dtos.workflow import WorkflowResult
    from app.domain.enums import DocumentStatus, MessageType, WorkflowState
    from app.domain.value_objects import HistoryEntry, WorkflowAssignees


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_by_ids(self, user_ids: set[str]) -> dict[str, UserResult]:
        """Return users keyed by id (missing ids omitted)."""

    async def upsert(self, data: UserUpsert) -> UserResult:
        """Insert the user or refresh profile claims; roles and office are preserved."""

    async def list_users(
        self,
        role: str | None = None,
        office_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        """Return users filtered by role and/or office business key; limit 0 returns all."""

    async def update_roles(self, user_id: str, roles: list[str]) -> UserResult | None:
        """Replace the user's role set. Returns None if user not found."""

    async def assign_office(self, user_id: str, office_id: str | None) -> UserResult | None:
        """Set the user's office business key. Returns None if user not found."""


class IDepartmentRepository(Protocol):
    """Protocol for department repository (DIP)."""

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        """Return department by ID."""

    async def list_all(self) -> list[DepartmentResult]:
        """Return all departments ordered by name."""

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        """Create department."""


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for document repository (DIP).

    No method writes Document.status; see IWorkflowRepository.record_transition.
    """

    async def create(self, data: DocumentCreate) -> DocumentResult:
        """Insert a DRAFT document with version_counter 0."""

    async def get_by_id(
        self, document_id: str, for_update: bool = False
    ) -> DocumentResult | None:
        """Return document by ID. for_update locks the row until the transaction ends."""

    async def list_documents(self, filters: DocumentFilter) -> list[DocumentResult]:
        """Return documents matching filters, newest updated_at first."""

    async def count_by_owners(self, owner_uids: set[str]) -> int:
        """Return how many documents are owned by any of owner_uids."""

    async def update_content(
        self,
        document_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> DocumentResult | None:
        """Update title/content and refresh updated_at. Returns None if not found."""

    async def next_version_sequence(self, document_id: str) -> int:
        """Atomically increment and return the document's version counter."""

    async def set_current_version(
        self, document_id: str, version_id: str
    ) -> DocumentResult | None:
        """Point the document at its newest version and refresh updated_at."""

    async def delete(self, document_id: str) -> bool:
        """Delete document with its versions, comments, workflow and tasks. True if deleted."""


class IDocumentVersionRepository(Protocol):
    """Protocol for immutable document versions (DIP)."""

    async def create(self, data: VersionCreate) -> VersionResult:
        """Insert version."""

    async def get_by_id(self, version_id: str) -> VersionResult | None:
        """Return version by ID."""

    async def list_by_document(self, document_id: str) -> list[VersionResult]:
        """Return versions newest first (created_at desc, then sequence desc)."""

    async def get_latest(self, document_id: str) -> VersionResult | None:
        """Return the first version of list_by_document ordering, or None."""


class ICommentRepository(Protocol):
    """Protocol for document comments (DIP)."""

    async def create(self, data: CommentCreate) -> CommentResult:
        """Insert comment (resolved=False)."""

    async def get_by_id(self, comment_id: str) -> CommentResult | None:
        """Return comment by ID."""

    async def list_by_document(self, document_id: str) -> list[CommentResult]:
        """Return comments oldest first."""

    async def count_by_documents(self, document_ids: list[str]) -> dict[str, int]:
        """Return comment counts keyed by document id (0 for none)."""

    async def set_resolved(self, comment_id: str, resolved: bool) -> CommentResult | None:
        """Set resolved flag. Returns None if not found."""


# Workflow repository interface
class IWorkflowRepository(Protocol):
    """Protocol for per-document workflows (DIP)."""

    async def create(self, document_id: str, assignees: WorkflowAssignees) -> WorkflowResult:
        """Insert DRAFT workflow with empty history."""

    async def get_by_document(self, document_id: str) -> WorkflowResult | None:
        """Return the workflow for a document (1:1)."""

    async def record_transition(
        self,
        document_id: str,
        status: DocumentStatus,
        state: WorkflowState,
        entry: HistoryEntry,
    ) -> WorkflowResult:
        """Write Document.status, Workflow.state and append entry in one step.

        The only write path for either field.
        """


class ITaskRepository(Protocol):
    """Protocol for workflow tasks (DIP)."""

    async def create(self, data: TaskCreate) -> TaskResult:
        """Insert OPEN task."""

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        """Return task by ID."""

    async def list_tasks(self, filters: TaskFilter) -> list[TaskResult]:
        """Return tasks matching filters, newest first."""

    async def mark_done(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        """Set state DONE with done_at and notes."""

    async def mark_cancelled(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        """Set state CANCELLED with done_at and notes."""


# Audit log repository interface
class IAuditLogRepository(Protocol):
    """Protocol for the append-only audit log (DIP)."""

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one entry."""

    async def list_for_target(
        self, target_type: str, target_id: str, skip: int = 0, limit: int = 100
    ) -> list[AuditLogResult]:
        """Return entries for a target, newest first."""


class INotificationRepository(Protocol):
    """Protocol for user notifications (DIP)."""

    async def create(self, data: NotificationCreate) -> NotificationResult:
        """Insert unread notification."""

    async def get_by_id(self, notification_id: str) -> NotificationResult | None:
        """Return notification by ID."""

    async def list_for_user(
        self, user_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        """Return the user's notifications, newest first."""

    async def mark_read(self, notification_id: str) -> NotificationResult | None:
        """Set read=True."""


# Office repository interface
class IOfficeRepository(Protocol):
    """Protocol for offices (DIP). office_id and office_code are unique."""

    async def get_by_id(self, id: str) -> OfficeResult | None:
        """Return office by primary key."""

    async def get_by_office_id(self, office_id: str) -> OfficeResult | None:
        """Return office by business key."""

    async def get_by_code(self, office_code: str) -> OfficeResult | None:
        """Return office by login code."""

    async def list_all(self) -> list[OfficeResult]:
        """Return all offices ordered by name."""

    async def create(self, data: OfficeCreate) -> OfficeResult:
        """Insert office."""

    async def update(self, id: str, data: OfficeUpdate) -> OfficeResult | None:
        """Apply non-None fields. Returns None if not found."""

    async def delete(self, id: str) -> bool:
        """Delete office. True if deleted."""


class IMessageRepository(Protocol):
    """Protocol for office messages and memos (DIP)."""

    async def get_by_id(self, message_id: str) -> MessageResult | None:
        """Return message by ID."""

    async def create(self, data: MessageCreate) -> MessageResult:
        """Insert message with empty read map."""

    async def list_messages(
        self,
        target_office_id: str | None = None,
        message_type: MessageType | None = None,
        include_general: bool = False,
        limit: int = 100,
    ) -> list[MessageResult]:
        """Return messages newest first.

        With target_office_id and include_general, returns that office's
        messages plus every general memo.
        """

    async def mark_read(self, message_id: str, reader_key: str) -> MessageResult | None:
        """Set is_read[reader_key] = True. Returns None if not found."""


class IOfficeSessionRepository(Protocol):
    """Protocol for office sessions (DIP). Only token hashes are stored."""

    async def create(self, data: OfficeSessionCreate) -> OfficeSessionResult:
        """Insert active session."""

    async def get_by_token_hash(self, token_hash: str) -> OfficeSessionResult | None:
        """Return session by token hash."""

    async def deactivate(self, token_hash: str) -> bool:
        """Set is_active False. True if a session was found."""

    async def delete_stale(self, cutoff: datetime) -> int:
        """Delete sessions expired before cutoff or inactive since before cutoff. Returns count."""
