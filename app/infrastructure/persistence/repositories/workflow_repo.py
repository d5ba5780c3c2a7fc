"""Workflow and task repositories. Implement IWorkflowRepository and ITaskRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import cast, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskCreate, TaskFilter, TaskResult
from app.application.dtos.workflow import WorkflowResult
from app.domain.enums import DocumentStatus, TaskState, TaskType, WorkflowState
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects import HistoryEntry, WorkflowAssignees
from app.infrastructure.persistence.models.document import Document
from app.infrastructure.persistence.models.workflow import Task, Workflow
from app.infrastructure.persistence.repositories.base import BaseRepository, paginate
from app.shared.utils.datetime import utc_now


def _to_result(w: Workflow) -> WorkflowResult:
    """Map Workflow ORM to WorkflowResult DTO."""
    return WorkflowResult(
        id=w.id,
        doc_id=w.doc_id,
        state=WorkflowState(w.state),
        assignees=WorkflowAssignees.from_dict(w.assignees),
        history=[HistoryEntry.from_dict(item) for item in (w.history or [])],
        created_at=w.created_at,
        updated_at=w.updated_at,
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Implements IWorkflowRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def create(self, document_id: str, assignees: WorkflowAssignees) -> WorkflowResult:
        row = Workflow(
            doc_id=document_id,
            state=WorkflowState.DRAFT.value,
            assignees=assignees.to_dict(),
            history=[],
        )
        return _to_result(await self._add(row))

    async def _row_for_document(
        self, document_id: str, for_update: bool = False
    ) -> Workflow | None:
        stmt = select(Workflow).where(Workflow.doc_id == document_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_document(self, document_id: str) -> WorkflowResult | None:
        row = await self._row_for_document(document_id)
        return _to_result(row) if row else None

    async def record_transition(
        self,
        document_id: str,
        status: DocumentStatus,
        state: WorkflowState,
        entry: HistoryEntry,
    ) -> WorkflowResult:
        """Lock document then workflow (fixed order) and write both plus history."""
        document = (
            await self.db.execute(
                select(Document)
                .where(Document.id == document_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        row = await self._row_for_document(document_id, for_update=True)
        if row is None:
            raise ResourceNotFoundException("workflow", document_id)
        now = utc_now()
        document.status = status.value
        document.updated_at = now
        row.state = state.value
        # Reassign so the JSON column change is detected.
        row.history = [*(row.history or []), entry.to_dict()]
        row.updated_at = now
        await self.db.flush()
        await self.db.refresh(row)
        return _to_result(row)


def _task_to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        type=TaskType(t.type),
        doc_id=t.doc_id,
        workflow_id=t.workflow_id,
        state=TaskState(t.state),
        assigned_to=list(t.assigned_to or []),
        created_at=t.created_at,
        done_at=t.done_at,
        notes=t.notes,
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def create(self, data: TaskCreate) -> TaskResult:
        """Create an OPEN task and return the result DTO."""
        row = Task(
            type=data.type.value,
            doc_id=data.doc_id,
            workflow_id=data.workflow_id,
            state=TaskState.OPEN.value,
            assigned_to=list(data.assigned_to),
        )
        return _task_to_result(await self._add(row))

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        row = await self._get_row(task_id)
        return _task_to_result(row) if row else None

    async def list_tasks(self, filters: TaskFilter) -> list[TaskResult]:
        stmt = select(Task)
        if filters.assigned_to is not None:
            stmt = stmt.where(cast(Task.assigned_to, JSONB).contains([filters.assigned_to]))
        if filters.doc_id is not None:
            stmt = stmt.where(Task.doc_id == filters.doc_id)
        if filters.state is not None:
            stmt = stmt.where(Task.state == filters.state.value)
        if filters.type is not None:
            stmt = stmt.where(Task.type == filters.type.value)
        stmt = paginate(stmt.order_by(Task.created_at.desc()), filters.offset, filters.limit)
        return [_task_to_result(row) for row in await self._scalars(stmt)]

    async def _close(
        self, task_id: str, state: TaskState, done_at: datetime, notes: str | None
    ) -> TaskResult | None:
        row = await self._get_row(task_id, for_update=True)
        if row is None:
            return None
        row.state = state.value
        row.done_at = done_at
        row.notes = notes
        return _task_to_result(await self._save(row))

    async def mark_done(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        return await self._close(task_id, TaskState.DONE, done_at, notes)

    async def mark_cancelled(
        self, task_id: str, done_at: datetime, notes: str | None = None
    ) -> TaskResult | None:
        return await self._close(task_id, TaskState.CANCELLED, done_at, notes)
