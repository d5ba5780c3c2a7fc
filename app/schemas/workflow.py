"""Workflow, transition, task and audit trail API schemas."""

from datetime import datetime
from typing import Any, Self

from pydantic import Field

from app.application.use_cases.workflows.task_operations import TaskListItem
from app.domain.enums import DocumentStatus, TaskState, TaskType, WorkflowState
from app.schemas.common import ApiModel


class HistoryEntrySchema(ApiModel):
    at: datetime
    by_uid: str
    action: str
    meta: dict[str, Any] | None = None


class WorkflowAssigneesSchema(ApiModel):
    review: list[str] = Field(default_factory=list)
    sign: list[str] = Field(default_factory=list)
    approve: list[str] = Field(default_factory=list)


class WorkflowResponse(ApiModel):
    id: str
    doc_id: str
    state: WorkflowState
    assignees: WorkflowAssigneesSchema
    history: list[HistoryEntrySchema]
    created_at: datetime
    updated_at: datetime


class ApproveRequest(ApiModel):
    """notes closes the approver's open tasks; metadata is copied into the history entry."""

    notes: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class RejectRequest(ApiModel):
    """reason is required; a missing reason is a 400 from the use case."""

    reason: str | None = None


class TaskDocumentSummary(ApiModel):
    id: str
    title: str
    status: DocumentStatus


class TaskResponse(ApiModel):
    id: str
    type: TaskType
    doc_id: str
    workflow_id: str
    state: TaskState
    assigned_to: list[str]
    created_at: datetime
    done_at: datetime | None = None
    notes: str | None = None


class TaskListItemResponse(TaskResponse):
    document: TaskDocumentSummary | None = None

    @classmethod
    def from_item(cls, item: TaskListItem) -> Self:
        base = TaskResponse.model_validate(item.task)
        return cls(
            **dict(base),
            document=TaskDocumentSummary.model_validate(item.document)
            if item.document
            else None,
        )


class TaskActionRequest(ApiModel):
    notes: str | None = Field(default=None, max_length=2000)


class AuditLogResponse(ApiModel):
    id: str
    actor_uid: str
    action: str
    target_type: str
    target_id: str
    timestamp: datetime
    ip: str | None = None
    user_agent: str | None = None
    diff: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
