"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.document import DocumentEntity
from app.domain.entities.office_session import OfficeSessionEntity
from app.domain.entities.workflow import (
    STATUS_TO_WORKFLOW_STATE,
    PlannedTransition,
    plan_transition,
)

__all__ = [
    "DocumentEntity",
    "OfficeSessionEntity",
    "PlannedTransition",
    "STATUS_TO_WORKFLOW_STATE",
    "plan_transition",
]
