"""Document lifecycle state machine.

Document.status and Workflow.state move together; the pairing below is the
only mapping between them. Transition rules name the statuses an event may
fire from and the status it lands in.
"""

from dataclasses import dataclass

from app.domain.enums import DocumentStatus, WorkflowAction, WorkflowState
from app.domain.exceptions import StateConflictException

STATUS_TO_WORKFLOW_STATE: dict[DocumentStatus, WorkflowState] = {
    DocumentStatus.DRAFT: WorkflowState.DRAFT,
    DocumentStatus.IN_REVIEW: WorkflowState.REVIEW,
    DocumentStatus.PENDING_SIGNATURE: WorkflowState.SIGN,
    DocumentStatus.APPROVED: WorkflowState.DONE,
    DocumentStatus.REJECTED: WorkflowState.REJECTED,
    DocumentStatus.ARCHIVED: WorkflowState.DONE,
}


@dataclass(frozen=True)
class TransitionRule:
    """Statuses an event may fire from, and the status it produces."""

    allowed_from: frozenset[DocumentStatus]
    target: DocumentStatus


TRANSITION_RULES: dict[WorkflowAction, TransitionRule] = {
    WorkflowAction.SUBMIT_FOR_REVIEW: TransitionRule(
        allowed_from=frozenset({DocumentStatus.DRAFT}),
        target=DocumentStatus.IN_REVIEW,
    ),
    WorkflowAction.APPROVE: TransitionRule(
        allowed_from=frozenset(
            {DocumentStatus.IN_REVIEW, DocumentStatus.PENDING_SIGNATURE}
        ),
        target=DocumentStatus.APPROVED,
    ),
    WorkflowAction.REJECT: TransitionRule(
        allowed_from=frozenset(
            set(DocumentStatus) - {DocumentStatus.APPROVED, DocumentStatus.REJECTED}
        ),
        target=DocumentStatus.REJECTED,
    ),
}


@dataclass(frozen=True)
class PlannedTransition:
    """Both targets of a transition; applied atomically by the store."""

    event: WorkflowAction
    from_status: DocumentStatus
    status: DocumentStatus
    state: WorkflowState


def plan_transition(current: DocumentStatus, event: WorkflowAction) -> PlannedTransition:
    """Return the (status, state) pair for event fired from current.

    Raises:
        StateConflictException: If the event is not allowed from current.
    """
    rule = TRANSITION_RULES[event]
    if current not in rule.allowed_from:
        raise StateConflictException(
            f"Cannot {event.value.lower().replace('_', ' ')} a document in status {current.value}",
            current_state=current.value,
            event=event.value,
        )
    return PlannedTransition(
        event=event,
        from_status=current,
        status=rule.target,
        state=STATUS_TO_WORKFLOW_STATE[rule.target],
    )
