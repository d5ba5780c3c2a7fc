"""Workflow and task ORM models."""

from datetime import datetime
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import TaskState, TaskType, WorkflowState
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    JsonType,
    TimestampMixin,
)


def _in(column: str, values: list[str]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Workflow(CuidMixin, TimestampMixin, Base):
    """Per-document workflow (1:1). Table: workflow. history is append-only JSON."""

    __tablename__ = "workflow"

    doc_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("document.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    state: Mapped[str] = mapped_column(
        String(32), nullable=False, default=WorkflowState.DRAFT.value
    )
    assignees: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False, default=dict)
    history: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint(_in("state", WorkflowState.values()), name="ck_workflow_state"),
    )


class Task(CuidMixin, CreatedAtMixin, Base):
    """Unit of work materialized by a workflow transition. Table: task."""

    __tablename__ = "task"

    type: Mapped[str] = mapped_column(String(32), nullable=False)
    doc_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False, index=True
    )
    state: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaskState.OPEN.value, index=True
    )
    assigned_to: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    done_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(_in("type", TaskType.values()), name="ck_task_type"),
        CheckConstraint(_in("state", TaskState.values()), name="ck_task_state"),
    )
