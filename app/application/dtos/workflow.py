"""DTOs for workflow reads and writes (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import WorkflowState
from app.domain.value_objects import HistoryEntry, WorkflowAssignees


@dataclass(frozen=True)
class WorkflowResult:
    """Per-document workflow: state, stage assignees and the append-only history."""

    id: str
    doc_id: str
    state: WorkflowState
    assignees: WorkflowAssignees
    history: list[HistoryEntry]
    created_at: datetime
    updated_at: datetime
