"""DTOs for workflow tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import TaskState, TaskType


@dataclass(frozen=True)
class TaskCreate:
    """Input for materializing an OPEN task."""

    type: TaskType
    doc_id: str
    workflow_id: str
    assigned_to: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

    id: str
    type: TaskType
    doc_id: str
    workflow_id: str
    state: TaskState
    assigned_to: list[str]
    created_at: datetime
    done_at: datetime | None
    notes: str | None


@dataclass(frozen=True)
class TaskFilter:
    """Task list filters. assigned_to matches membership in Task.assigned_to; limit 0 returns all."""

    assigned_to: str | None = None
    doc_id: str | None = None
    state: TaskState | None = None
    type: TaskType | None = None
    limit: int = 20
    offset: int = 0
