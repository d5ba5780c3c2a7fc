"""Single write path for Document.status and Workflow.state.

apply_transition plans the move with the domain state machine and writes
both fields plus the history entry through IWorkflowRepository.record_transition.
Callers must hold an open store transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.entities.workflow import PlannedTransition, plan_transition
from app.domain.enums import WorkflowAction
from app.domain.value_objects import HistoryEntry
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.telemetry import get_tracer
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.document import DocumentResult
    from app.application.dtos.user import UserResult
    from app.application.dtos.workflow import WorkflowResult
    from app.application.interfaces.store import IEntityStore

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class TransitionOutcome:
    transition: PlannedTransition
    workflow: WorkflowResult


async def apply_transition(
    store: IEntityStore,
    document: DocumentResult,
    workflow: WorkflowResult,
    event: WorkflowAction,
    actor: UserResult,
    meta: dict[str, Any] | None = None,
) -> TransitionOutcome:
    """Move document and workflow together for event.

    Raises:
        StateConflictException: If event is not allowed from the document's status.
    """
    with tracer.start_as_current_span("workflow.transition") as span:
        span.set_attribute("docflow.document_id", document.id)
        span.set_attribute("docflow.event", event.value)
        planned = plan_transition(document.status, event)
        entry = HistoryEntry(at=utc_now(), by_uid=actor.id, action=event.value, meta=meta)
        updated = await store.workflows.record_transition(
            document_id=document.id,
            status=planned.status,
            state=planned.state,
            entry=entry,
        )
        span.set_attribute("docflow.status", planned.status.value)
    logger.info(
        "Document %s: %s -> %s (%s by %s, workflow %s -> %s)",
        document.id,
        planned.from_status.value,
        planned.status.value,
        event.value,
        actor.id,
        workflow.state.value,
        planned.state.value,
    )
    return TransitionOutcome(transition=planned, workflow=updated)
