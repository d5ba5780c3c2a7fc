"""Workflow use cases: lifecycle transitions and task handling."""

from app.application.use_cases.workflows.task_operations import TaskListItem, TaskService
from app.application.use_cases.workflows.transitions import (
    TransitionOutcome,
    apply_transition,
)
from app.application.use_cases.workflows.workflow_operations import WorkflowService

__all__ = [
    "TaskListItem",
    "TaskService",
    "TransitionOutcome",
    "WorkflowService",
    "apply_transition",
]
