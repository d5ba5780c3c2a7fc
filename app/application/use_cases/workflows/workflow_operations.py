"""Workflow engine: submit, approve and reject documents; read workflow and audit trail."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.audit_log import AuditContext, AuditLogResult
from app.application.dtos.document import DocumentResult
from app.application.dtos.task import TaskCreate, TaskFilter
from app.application.dtos.user import UserResult
from app.application.dtos.workflow import WorkflowResult
from app.application.interfaces.services import INotificationService
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import (
    can_access,
    can_approve,
    can_edit,
    can_review,
    require,
)
from app.application.services.audit_service import AuditRecorder
from app.application.use_cases.workflows.transitions import apply_transition
from app.domain.enums import (
    AuditAction,
    AuditTargetType,
    NotificationType,
    TaskState,
    TaskType,
    WorkflowAction,
)
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects import WorkflowAssignees
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_APPROVE_NOTES = "Approved"


class WorkflowService:
    """Document lifecycle transitions with their task, audit and notification side effects.

    Each operation runs inside one store transaction: the status change,
    history entry, task writes and audit entry commit together.
    Guard order is validation, then not-found, then authorization, then state.
    """

    def __init__(self, store: IEntityStore, notifier: INotificationService) -> None:
        self.store = store
        self.notifier = notifier
        self.audit = AuditRecorder(store.audit_logs)

    async def _load_document(self, document_id: str) -> DocumentResult:
        document = await self.store.documents.get_by_id(document_id, for_update=True)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def _load_workflow(self, document: DocumentResult) -> WorkflowResult:
        workflow = await self.store.workflows.get_by_document(document.id)
        if workflow is None:
            workflow = await self.store.workflows.create(
                document.id, WorkflowAssignees.from_participants(document.participants)
            )
        return workflow

    async def _reload(self, document_id: str) -> DocumentResult:
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def submit(
        self,
        actor: UserResult,
        document_id: str,
        context: AuditContext | None = None,
    ) -> DocumentResult:
        """DRAFT -> IN_REVIEW. Creates one OPEN REVIEW task per reviewer."""
        async with self.store.transaction():
            document = await self._load_document(document_id)
            require(can_edit(document, actor), "document", "submit")
            workflow = await self._load_workflow(document)
            outcome = await apply_transition(
                self.store, document, workflow, WorkflowAction.SUBMIT_FOR_REVIEW, actor
            )
            reviewers = document.participants.reviewers
            task_ids: list[str] = []
            for reviewer in reviewers:
                task = await self.store.tasks.create(
                    TaskCreate(
                        type=TaskType.REVIEW,
                        doc_id=document.id,
                        workflow_id=outcome.workflow.id,
                        assigned_to=[reviewer],
                    )
                )
                task_ids.append(task.id)
            await self.audit.record(
                actor.id,
                AuditAction.SUBMIT_FOR_REVIEW.value,
                AuditTargetType.DOCUMENT.value,
                document.id,
                context=context,
                metadata={"taskIds": task_ids},
            )
            if reviewers:
                await self.notifier.notify(
                    list(reviewers),
                    NotificationType.TASK_ASSIGNED.value,
                    {"docId": document.id, "title": document.title, "taskType": TaskType.REVIEW.value},
                )
            return await self._reload(document.id)

    async def approve(
        self,
        actor: UserResult,
        document_id: str,
        notes: str | None = None,
        meta: dict[str, Any] | None = None,
        context: AuditContext | None = None,
    ) -> DocumentResult:
        """IN_REVIEW or PENDING_SIGNATURE -> APPROVED. Closes the actor's OPEN tasks on the document."""
        request_meta = dict(meta or {})
        if notes is not None:
            request_meta["notes"] = notes
        async with self.store.transaction():
            document = await self._load_document(document_id)
            require(can_approve(document, actor), "document", "approve")
            workflow = await self._load_workflow(document)
            await apply_transition(
                self.store,
                document,
                workflow,
                WorkflowAction.APPROVE,
                actor,
                meta=request_meta or None,
            )
            now = utc_now()
            open_tasks = await self.store.tasks.list_tasks(
                TaskFilter(
                    doc_id=document.id,
                    assigned_to=actor.id,
                    state=TaskState.OPEN,
                    limit=0,
                )
            )
            for task in open_tasks:
                await self.store.tasks.mark_done(
                    task.id, done_at=now, notes=notes or DEFAULT_APPROVE_NOTES
                )
            await self.audit.record(
                actor.id,
                AuditAction.APPROVE_DOCUMENT.value,
                AuditTargetType.DOCUMENT.value,
                document.id,
                context=context,
                metadata={"notes": notes, "completedTaskIds": [t.id for t in open_tasks]},
            )
            await self.notifier.notify(
                [document.owner_uid],
                NotificationType.DOCUMENT_APPROVED.value,
                {"docId": document.id, "title": document.title, "by": actor.id},
            )
            return await self._reload(document.id)

    async def reject(
        self,
        actor: UserResult,
        document_id: str,
        reason: str | None,
        context: AuditContext | None = None,
    ) -> DocumentResult:
        """Any non-terminal status -> REJECTED. Cancels every OPEN task on the document."""
        if reason is None or not reason.strip():
            raise ValidationException("Rejection reason is required", field="reason")
        reason = reason.strip()
        async with self.store.transaction():
            document = await self._load_document(document_id)
            require(
                can_approve(document, actor) or can_review(document, actor),
                "document",
                "reject",
            )
            workflow = await self._load_workflow(document)
            await apply_transition(
                self.store,
                document,
                workflow,
                WorkflowAction.REJECT,
                actor,
                meta={"reason": reason},
            )
            now = utc_now()
            open_tasks = await self.store.tasks.list_tasks(
                TaskFilter(doc_id=document.id, state=TaskState.OPEN, limit=0)
            )
            for task in open_tasks:
                await self.store.tasks.mark_cancelled(task.id, done_at=now, notes=reason)
            await self.audit.record(
                actor.id,
                AuditAction.REJECT_DOCUMENT.value,
                AuditTargetType.DOCUMENT.value,
                document.id,
                context=context,
                metadata={"reason": reason, "cancelledTaskIds": [t.id for t in open_tasks]},
            )
            await self.notifier.notify(
                [document.owner_uid],
                NotificationType.DOCUMENT_REJECTED.value,
                {"docId": document.id, "title": document.title, "by": actor.id, "reason": reason},
            )
            return await self._reload(document.id)

    async def get_workflow(self, actor: UserResult, document_id: str) -> WorkflowResult:
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        require(can_access(document, actor), "document", "read")
        workflow = await self.store.workflows.get_by_document(document_id)
        if not workflow:
            raise ResourceNotFoundException("workflow", document_id)
        return workflow

    async def list_audit_logs(
        self,
        actor: UserResult,
        document_id: str,
        skip: int = 0,
        limit: int = 100,
    ) -> list[AuditLogResult]:
        """Audit entries for the document, newest first."""
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        require(can_access(document, actor), "document", "read")
        return await self.store.audit_logs.list_for_target(
            AuditTargetType.DOCUMENT.value, document_id, skip=skip, limit=limit
        )
