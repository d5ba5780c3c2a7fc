"""Lifecycle state machine: transition planning and the status/state pairing."""

import pytest

from app.domain.entities.workflow import STATUS_TO_WORKFLOW_STATE, plan_transition
from app.domain.enums import DocumentStatus, WorkflowAction, WorkflowState
from app.domain.exceptions import StateConflictException

PAIRS = {
    (DocumentStatus.DRAFT, WorkflowState.DRAFT),
    (DocumentStatus.IN_REVIEW, WorkflowState.REVIEW),
    (DocumentStatus.PENDING_SIGNATURE, WorkflowState.SIGN),
    (DocumentStatus.APPROVED, WorkflowState.DONE),
    (DocumentStatus.REJECTED, WorkflowState.REJECTED),
    (DocumentStatus.ARCHIVED, WorkflowState.DONE),
}


def test_pairing_table_covers_every_status() -> None:
    assert set(STATUS_TO_WORKFLOW_STATE) == set(DocumentStatus)
    assert set(STATUS_TO_WORKFLOW_STATE.items()) == PAIRS


@pytest.mark.parametrize("status", list(DocumentStatus))
@pytest.mark.parametrize("event", list(WorkflowAction))
def test_every_successful_transition_lands_on_a_valid_pair(
    status: DocumentStatus, event: WorkflowAction
) -> None:
    try:
        planned = plan_transition(status, event)
    except StateConflictException:
        return
    assert (planned.status, planned.state) in PAIRS
    assert planned.from_status == status


def test_submit_only_from_draft() -> None:
    planned = plan_transition(DocumentStatus.DRAFT, WorkflowAction.SUBMIT_FOR_REVIEW)
    assert planned.status == DocumentStatus.IN_REVIEW
    assert planned.state == WorkflowState.REVIEW
    for status in set(DocumentStatus) - {DocumentStatus.DRAFT}:
        with pytest.raises(StateConflictException):
            plan_transition(status, WorkflowAction.SUBMIT_FOR_REVIEW)


@pytest.mark.parametrize(
    "status", [DocumentStatus.IN_REVIEW, DocumentStatus.PENDING_SIGNATURE]
)
def test_approve_from_review_or_signature(status: DocumentStatus) -> None:
    planned = plan_transition(status, WorkflowAction.APPROVE)
    assert (planned.status, planned.state) == (DocumentStatus.APPROVED, WorkflowState.DONE)


@pytest.mark.parametrize(
    "status",
    [DocumentStatus.DRAFT, DocumentStatus.APPROVED, DocumentStatus.REJECTED],
)
def test_approve_elsewhere_conflicts(status: DocumentStatus) -> None:
    with pytest.raises(StateConflictException) as exc_info:
        plan_transition(status, WorkflowAction.APPROVE)
    assert exc_info.value.details["current_state"] == status.value


@pytest.mark.parametrize("status", [DocumentStatus.APPROVED, DocumentStatus.REJECTED])
def test_reject_terminal_statuses_conflict(status: DocumentStatus) -> None:
    with pytest.raises(StateConflictException):
        plan_transition(status, WorkflowAction.REJECT)


def test_reject_from_draft_is_allowed() -> None:
    planned = plan_transition(DocumentStatus.DRAFT, WorkflowAction.REJECT)
    assert planned.state == WorkflowState.REJECTED
