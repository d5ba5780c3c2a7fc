"""Domain value objects (immutable, self-validating)."""

from app.domain.value_objects.core import (
    Acl,
    HistoryEntry,
    Participants,
    VersionNumber,
    WorkflowAssignees,
)

__all__ = [
    "Acl",
    "HistoryEntry",
    "Participants",
    "VersionNumber",
    "WorkflowAssignees",
]
