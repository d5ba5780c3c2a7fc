"""Task operations: list the actor's tasks, complete and cancel tasks directly."""

from __future__ import annotations

from dataclasses import dataclass

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.document import DocumentResult
from app.application.dtos.task import TaskFilter, TaskResult
from app.application.dtos.user import UserResult
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import is_admin, require
from app.application.services.audit_service import AuditRecorder
from app.domain.enums import AuditAction, AuditTargetType, TaskState, TaskType
from app.domain.exceptions import ResourceNotFoundException, StateConflictException
from app.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class TaskListItem:
    """Task enriched with its document (None if the document was deleted meanwhile)."""

    task: TaskResult
    document: DocumentResult | None


class TaskService:
    """Direct task handling outside the approve/reject transitions."""

    def __init__(self, store: IEntityStore) -> None:
        self.store = store
        self.audit = AuditRecorder(store.audit_logs)

    async def list_tasks(
        self,
        actor: UserResult,
        state: TaskState | None = TaskState.OPEN,
        task_type: TaskType | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[TaskListItem]:
        """Return tasks assigned to actor, newest first."""
        tasks = await self.store.tasks.list_tasks(
            TaskFilter(
                assigned_to=actor.id,
                state=state,
                type=task_type,
                limit=limit,
                offset=offset,
            )
        )
        documents: dict[str, DocumentResult | None] = {}
        for task in tasks:
            if task.doc_id not in documents:
                documents[task.doc_id] = await self.store.documents.get_by_id(task.doc_id)
        return [TaskListItem(task=t, document=documents[t.doc_id]) for t in tasks]

    async def _load(self, task_id: str) -> TaskResult:
        task = await self.store.tasks.get_by_id(task_id)
        if not task:
            raise ResourceNotFoundException("task", task_id)
        return task

    @staticmethod
    def _ensure_open(task: TaskResult, event: str) -> None:
        if task.state != TaskState.OPEN:
            raise StateConflictException(
                f"Task is {task.state.value}, not OPEN",
                current_state=task.state.value,
                event=event,
            )

    async def complete_task(
        self,
        actor: UserResult,
        task_id: str,
        notes: str | None = None,
        context: AuditContext | None = None,
    ) -> TaskResult:
        """OPEN -> DONE by an assignee or ADMIN."""
        async with self.store.transaction():
            task = await self._load(task_id)
            require(is_admin(actor) or actor.id in task.assigned_to, "task", "complete")
            self._ensure_open(task, "complete")
            updated = await self.store.tasks.mark_done(task.id, done_at=utc_now(), notes=notes)
            if updated is None:
                raise ResourceNotFoundException("task", task_id)
            await self.audit.record(
                actor.id,
                AuditAction.TASK_COMPLETED.value,
                AuditTargetType.TASK.value,
                task.id,
                context=context,
                metadata={"docId": task.doc_id, "notes": notes},
            )
            return updated

    async def cancel_task(
        self,
        actor: UserResult,
        task_id: str,
        notes: str | None = None,
        context: AuditContext | None = None,
    ) -> TaskResult:
        """OPEN -> CANCELLED by ADMIN or the document owner."""
        async with self.store.transaction():
            task = await self._load(task_id)
            document = await self.store.documents.get_by_id(task.doc_id)
            is_owner = document is not None and document.owner_uid == actor.id
            require(is_admin(actor) or is_owner, "task", "cancel")
            self._ensure_open(task, "cancel")
            updated = await self.store.tasks.mark_cancelled(
                task.id, done_at=utc_now(), notes=notes
            )
            if updated is None:
                raise ResourceNotFoundException("task", task_id)
            await self.audit.record(
                actor.id,
                AuditAction.TASK_CANCELLED.value,
                AuditTargetType.TASK.value,
                task.id,
                context=context,
                metadata={"docId": task.doc_id},
            )
            return updated
