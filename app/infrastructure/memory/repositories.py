"""In-memory repositories over a shared MemoryState (dev and tests).

Rows are frozen DTOs. Writes always replace a row with dataclasses.replace,
never mutate it, so a shallow copy of each table is a full snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TypeVar

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
from app.application.dtos.notification import NotificationCreate, NotificationResult
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
from app.domain.entities.office_session import OfficeSessionEntity
from app.domain.enums import (
    DocumentStatus,
    MessageType,
    TaskState,
    WorkflowState,
)
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects import HistoryEntry, WorkflowAssignees
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

TABLES = (
    "users",
    "departments",
    "documents",
    "versions",
    "comments",
    "workflows",
    "tasks",
    "audit_logs",
    "notifications",
    "offices",
    "messages",
    "office_sessions",
)


@dataclass
class MemoryState:
    """All tables, keyed by primary key, in insertion order."""

    users: dict[str, UserResult] = field(default_factory=dict)
    departments: dict[str, DepartmentResult] = field(default_factory=dict)
    documents: dict[str, DocumentResult] = field(default_factory=dict)
    versions: dict[str, VersionResult] = field(default_factory=dict)
    comments: dict[str, CommentResult] = field(default_factory=dict)
    workflows: dict[str, WorkflowResult] = field(default_factory=dict)
    tasks: dict[str, TaskResult] = field(default_factory=dict)
    audit_logs: dict[str, AuditLogResult] = field(default_factory=dict)
    notifications: dict[str, NotificationResult] = field(default_factory=dict)
    offices: dict[str, OfficeResult] = field(default_factory=dict)
    messages: dict[str, MessageResult] = field(default_factory=dict)
    office_sessions: dict[str, OfficeSessionResult] = field(default_factory=dict)

    def snapshot(self) -> dict[str, dict]:
        return {name: dict(getattr(self, name)) for name in TABLES}

    def restore(self, snap: dict[str, dict]) -> None:
        for name in TABLES:
            setattr(self, name, snap[name])


T = TypeVar("T")


def _newest_first(rows: list[T], key) -> list[T]:
    """Sort newest first; ties keep the most recently inserted row first."""
    return sorted(reversed(rows), key=key, reverse=True)


def _page(rows: list[T], offset: int, limit: int) -> list[T]:
    if limit <= 0:
        return rows[offset:]
    return rows[offset : offset + limit]


class MemoryUserRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def get_by_id(self, user_id: str) -> UserResult | None:
        return self.state.users.get(user_id)

    async def get_by_ids(self, user_ids: set[str]) -> dict[str, UserResult]:
        return {uid: self.state.users[uid] for uid in user_ids if uid in self.state.users}

    async def upsert(self, data: UserUpsert) -> UserResult:
        now = utc_now()
        existing = self.state.users.get(data.id)
        if existing is None:
            user = UserResult(
                id=data.id,
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                profile_image_url=data.profile_image_url,
                roles=[],
                departments=[],
                office_id=None,
                created_at=now,
                updated_at=now,
            )
        else:
            user = replace(
                existing,
                email=data.email if data.email is not None else existing.email,
                first_name=data.first_name if data.first_name is not None else existing.first_name,
                last_name=data.last_name if data.last_name is not None else existing.last_name,
                profile_image_url=data.profile_image_url
                if data.profile_image_url is not None
                else existing.profile_image_url,
                updated_at=now,
            )
        self.state.users[user.id] = user
        return user

    async def list_users(
        self,
        role: str | None = None,
        office_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        rows = [
            u
            for u in self.state.users.values()
            if (role is None or role in u.roles)
            and (office_id is None or u.office_id == office_id)
        ]
        rows.sort(key=lambda u: u.created_at)
        return _page(rows, skip, limit)

    async def update_roles(self, user_id: str, roles: list[str]) -> UserResult | None:
        user = self.state.users.get(user_id)
        if user is None:
            return None
        user = replace(user, roles=list(roles), updated_at=utc_now())
        self.state.users[user_id] = user
        return user

    async def assign_office(self, user_id: str, office_id: str | None) -> UserResult | None:
        user = self.state.users.get(user_id)
        if user is None:
            return None
        user = replace(user, office_id=office_id, updated_at=utc_now())
        self.state.users[user_id] = user
        return user


class MemoryDepartmentRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        return self.state.departments.get(department_id)

    async def list_all(self) -> list[DepartmentResult]:
        return sorted(self.state.departments.values(), key=lambda d: d.name.lower())

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        department = DepartmentResult(
            id=generate_cuid(),
            name=data.name,
            members=list(data.members),
            created_at=utc_now(),
        )
        self.state.departments[department.id] = department
        return department


class MemoryDocumentRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: DocumentCreate) -> DocumentResult:
        now = utc_now()
        document = DocumentResult(
            id=generate_cuid(),
            title=data.title,
            content=data.content,
            owner_uid=data.owner_uid,
            department_id=data.department_id,
            status=DocumentStatus.DRAFT,
            current_version_id=None,
            tags=list(data.tags),
            due_at=data.due_at,
            participants=data.participants,
            acl=data.acl,
            version_counter=0,
            created_at=now,
            updated_at=now,
        )
        self.state.documents[document.id] = document
        return document

    async def get_by_id(
        self, document_id: str, for_update: bool = False
    ) -> DocumentResult | None:
        return self.state.documents.get(document_id)

    async def list_documents(self, filters: DocumentFilter) -> list[DocumentResult]:
        needle = filters.search.lower() if filters.search else None
        rows = [
            d
            for d in self.state.documents.values()
            if (filters.status is None or d.status == filters.status)
            and (filters.department_id is None or d.department_id == filters.department_id)
            and (filters.owner_uid is None or d.owner_uid == filters.owner_uid)
            and (needle is None or needle in d.title.lower())
        ]
        rows = _newest_first(rows, key=lambda d: d.updated_at)
        return _page(rows, filters.offset, filters.limit)

    async def count_by_owners(self, owner_uids: set[str]) -> int:
        return sum(1 for d in self.state.documents.values() if d.owner_uid in owner_uids)

    async def update_content(
        self,
        document_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> DocumentResult | None:
        document = self.state.documents.get(document_id)
        if document is None:
            return None
        document = replace(
            document,
            title=title if title is not None else document.title,
            content=content if content is not None else document.content,
            updated_at=utc_now(),
        )
        self.state.documents[document_id] = document
        return document

    async def next_version_sequence(self, document_id: str) -> int:
        document = self.state.documents.get(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        document = replace(document, version_counter=document.version_counter + 1)
        self.state.documents[document_id] = document
        return document.version_counter

    async def set_current_version(
        self, document_id: str, version_id: str
    ) -> DocumentResult | None:
        document = self.state.documents.get(document_id)
        if document is None:
            return None
        document = replace(document, current_version_id=version_id, updated_at=utc_now())
        self.state.documents[document_id] = document
        return document

    async def delete(self, document_id: str) -> bool:
        if self.state.documents.pop(document_id, None) is None:
            return False
        for table in ("versions", "comments", "workflows", "tasks"):
            rows: dict = getattr(self.state, table)
            for key in [k for k, row in rows.items() if row.doc_id == document_id]:
                del rows[key]
        return True


class MemoryDocumentVersionRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: VersionCreate) -> VersionResult:
        version = VersionResult(
            id=generate_cuid(),
            doc_id=data.doc_id,
            sequence=data.sequence,
            version_number=data.version_number,
            storage_path=data.storage_path,
            sha256=data.sha256,
            created_by=data.created_by,
            file_name=data.file_name,
            file_size=data.file_size,
            mime_type=data.mime_type,
            change_summary=data.change_summary,
            created_at=utc_now(),
        )
        self.state.versions[version.id] = version
        return version

    async def get_by_id(self, version_id: str) -> VersionResult | None:
        return self.state.versions.get(version_id)

    async def list_by_document(self, document_id: str) -> list[VersionResult]:
        rows = [v for v in self.state.versions.values() if v.doc_id == document_id]
        return sorted(rows, key=lambda v: (v.created_at, v.sequence), reverse=True)

    async def get_latest(self, document_id: str) -> VersionResult | None:
        rows = await self.list_by_document(document_id)
        return rows[0] if rows else None


class MemoryCommentRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: CommentCreate) -> CommentResult:
        comment = CommentResult(
            id=generate_cuid(),
            doc_id=data.doc_id,
            author_uid=data.author_uid,
            body=data.body,
            resolved=False,
            created_at=utc_now(),
        )
        self.state.comments[comment.id] = comment
        return comment

    async def get_by_id(self, comment_id: str) -> CommentResult | None:
        return self.state.comments.get(comment_id)

    async def list_by_document(self, document_id: str) -> list[CommentResult]:
        rows = [c for c in self.state.comments.values() if c.doc_id == document_id]
        return sorted(rows, key=lambda c: c.created_at)

    async def count_by_documents(self, document_ids: list[str]) -> dict[str, int]:
        counts = dict.fromkeys(document_ids, 0)
        for comment in self.state.comments.values():
            if comment.doc_id in counts:
                counts[comment.doc_id] += 1
        return counts

    async def set_resolved(self, comment_id: str, resolved: bool) -> CommentResult | None:
        comment = self.state.comments.get(comment_id)
        if comment is None:
            return None
        comment = replace(comment, resolved=resolved)
        self.state.comments[comment_id] = comment
        return comment


class MemoryWorkflowRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, document_id: str, assignees: WorkflowAssignees) -> WorkflowResult:
        now = utc_now()
        workflow = WorkflowResult(
            id=generate_cuid(),
            doc_id=document_id,
            state=WorkflowState.DRAFT,
            assignees=assignees,
            history=[],
            created_at=now,
            updated_at=now,
        )
        self.state.workflows[workflow.id] = workflow
        return workflow

    async def get_by_document(self, document_id: str) -> WorkflowResult | None:
        for workflow in self.state.workflows.values():
            if workflow.doc_id == document_id:
                return workflow
        return None

    async def record_transition(
        self,
        document_id: str,
        status: DocumentStatus,
        state: WorkflowState,
        entry: HistoryEntry,
    ) -> WorkflowResult:
        document = self.state.documents.get(document_id)
        workflow = await self.get_by_document(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", document_id)
        now = utc_now()
        self.state.documents[document_id] = replace(document, status=status, updated_at=now)
        workflow = replace(
            workflow, state=state, history=[*workflow.history, entry], updated_at=now
        )
        self.state.workflows[workflow.id] = workflow
        return workflow


class MemoryTaskRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: TaskCreate) -> TaskResult:
        task = TaskResult(
            id=generate_cuid(),
            type=data.type,
            doc_id=data.doc_id,
            workflow_id=data.workflow_id,
            state=TaskState.OPEN,
            assigned_to=list(data.assigned_to),
            created_at=utc_now(),
            done_at=None,
            notes=None,
        )
        self.state.tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        return self.state.tasks.get(task_id)

    async def list_tasks(self, filters: TaskFilter) -> list[TaskResult]:
        rows = [
            t
            for t in self.state.tasks.values()
            if (filters.assigned_to is None or filters.assigned_to in t.assigned_to)
            and (filters.doc_id is None or t.doc_id == filters.doc_id)
            and (filters.state is None or t.state == filters.state)
            and (filters.type is None or t.type == filters.type)
        ]
        rows = _newest_first(rows, key=lambda t: t.created_at)
        return _page(rows, filters.offset, filters.limit)

    async def _close(
        self, task_id: str, state: TaskState, done_at: datetime, notes: str | None
    ) -> TaskResult | None:
        task = self.state.tasks.get(task_id)
        if task is None:
            return None
        task = replace(task, state=state, done_at=done_at, notes=notes)
        self.state.tasks[task_id] = task
        return task

    async def mark_done(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        return await self._close(task_id, TaskState.DONE, done_at, notes)

    async def mark_cancelled(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        return await self._close(task_id, TaskState.CANCELLED, done_at, notes)


class MemoryAuditLogRepository:
    """Append-only: exposes no update or delete."""

    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        row = AuditLogResult(
            id=generate_cuid(),
            actor_uid=entry.actor_uid,
            action=entry.action,
            target_type=entry.target_type,
            target_id=entry.target_id,
            timestamp=utc_now(),
            ip=entry.ip,
            user_agent=entry.user_agent,
            diff=entry.diff,
            metadata=entry.metadata,
        )
        self.state.audit_logs[row.id] = row
        return row

    async def list_for_target(
        self, target_type: str, target_id: str, skip: int = 0, limit: int = 100
    ) -> list[AuditLogResult]:
        rows = [
            a
            for a in self.state.audit_logs.values()
            if a.target_type == target_type and a.target_id == target_id
        ]
        rows = _newest_first(rows, key=lambda a: a.timestamp)
        return _page(rows, skip, limit)


class MemoryNotificationRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: NotificationCreate) -> NotificationResult:
        row = NotificationResult(
            id=generate_cuid(),
            to_uid=data.to_uid,
            type=data.type,
            payload=dict(data.payload),
            read=False,
            created_at=utc_now(),
        )
        self.state.notifications[row.id] = row
        return row

    async def get_by_id(self, notification_id: str) -> NotificationResult | None:
        return self.state.notifications.get(notification_id)

    async def list_for_user(
        self, user_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        rows = [
            n
            for n in self.state.notifications.values()
            if n.to_uid == user_id and not (unread_only and n.read)
        ]
        return _page(_newest_first(rows, key=lambda n: n.created_at), 0, limit)

    async def mark_read(self, notification_id: str) -> NotificationResult | None:
        row = self.state.notifications.get(notification_id)
        if row is None:
            return None
        row = replace(row, read=True)
        self.state.notifications[notification_id] = row
        return row


class MemoryOfficeRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def get_by_id(self, id: str) -> OfficeResult | None:
        return self.state.offices.get(id)

    async def get_by_office_id(self, office_id: str) -> OfficeResult | None:
        return next(
            (o for o in self.state.offices.values() if o.office_id == office_id), None
        )

    async def get_by_code(self, office_code: str) -> OfficeResult | None:
        return next(
            (o for o in self.state.offices.values() if o.office_code == office_code), None
        )

    async def list_all(self) -> list[OfficeResult]:
        return sorted(self.state.offices.values(), key=lambda o: o.name.lower())

    async def create(self, data: OfficeCreate) -> OfficeResult:
        now = utc_now()
        office = OfficeResult(
            id=generate_cuid(),
            office_id=data.office_id,
            name=data.name,
            description=data.description,
            office_code=data.office_code,
            office_password_hash=data.office_password_hash,
            head_user_id=data.head_user_id,
            admin_users=list(data.admin_users),
            members=list(data.members),
            department_id=data.department_id,
            created_at=now,
            updated_at=now,
        )
        self.state.offices[office.id] = office
        return office

    async def update(self, id: str, data: OfficeUpdate) -> OfficeResult | None:
        office = self.state.offices.get(id)
        if office is None:
            return None
        changes = {k: v for k, v in vars(data).items() if v is not None}
        office = replace(office, **changes, updated_at=utc_now())
        self.state.offices[id] = office
        return office

    async def delete(self, id: str) -> bool:
        return self.state.offices.pop(id, None) is not None


class MemoryMessageRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def get_by_id(self, message_id: str) -> MessageResult | None:
        return self.state.messages.get(message_id)

    async def create(self, data: MessageCreate) -> MessageResult:
        now = utc_now()
        message = MessageResult(
            id=generate_cuid(),
            title=data.title,
            content=data.content,
            sender_user_id=data.sender_user_id,
            message_type=data.message_type,
            target_office_id=data.target_office_id,
            is_read={},
            priority=data.priority,
            created_at=now,
            updated_at=now,
        )
        self.state.messages[message.id] = message
        return message

    async def list_messages(
        self,
        target_office_id: str | None = None,
        message_type: MessageType | None = None,
        include_general: bool = False,
        limit: int = 100,
    ) -> list[MessageResult]:
        def matches(m: MessageResult) -> bool:
            if message_type is not None and m.message_type != message_type:
                return False
            if target_office_id is None:
                return True
            if m.target_office_id == target_office_id:
                return True
            return include_general and m.message_type == MessageType.GENERAL_MEMO

        rows = [m for m in self.state.messages.values() if matches(m)]
        return _page(_newest_first(rows, key=lambda m: m.created_at), 0, limit)

    async def mark_read(self, message_id: str, reader_key: str) -> MessageResult | None:
        message = self.state.messages.get(message_id)
        if message is None:
            return None
        message = replace(
            message, is_read={**message.is_read, reader_key: True}, updated_at=utc_now()
        )
        self.state.messages[message_id] = message
        return message


class MemoryOfficeSessionRepository:
    def __init__(self, state: MemoryState) -> None:
        self.state = state

    async def create(self, data: OfficeSessionCreate) -> OfficeSessionResult:
        session = OfficeSessionResult(
            id=generate_cuid(),
            office_id=data.office_id,
            user_id=data.user_id,
            login_time=utc_now(),
            ip_address=data.ip_address,
            token_hash=data.token_hash,
            is_active=True,
            expires_at=data.expires_at,
        )
        self.state.office_sessions[session.id] = session
        return session

    async def get_by_token_hash(self, token_hash: str) -> OfficeSessionResult | None:
        return next(
            (s for s in self.state.office_sessions.values() if s.token_hash == token_hash),
            None,
        )

    async def deactivate(self, token_hash: str) -> bool:
        session = await self.get_by_token_hash(token_hash)
        if session is None:
            return False
        self.state.office_sessions[session.id] = replace(session, is_active=False)
        return True

    async def delete_stale(self, cutoff: datetime) -> int:
        stale = [
            s.id
            for s in self.state.office_sessions.values()
            if OfficeSessionEntity(
                id=s.id,
                office_id=s.office_id,
                is_active=s.is_active,
                login_time=s.login_time,
                expires_at=s.expires_at,
            ).is_stale(cutoff)
        ]
        for session_id in stale:
            del self.state.office_sessions[session_id]
        return len(stale)
