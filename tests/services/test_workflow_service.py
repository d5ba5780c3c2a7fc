"""Workflow engine over the memory store: submit, approve, reject and their side effects."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.task import TaskFilter
from app.application.use_cases.workflows import WorkflowService
from app.domain.enums import (
    DocumentStatus,
    NotificationType,
    TaskState,
    TaskType,
    WorkflowState,
)
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    StateConflictException,
    ValidationException,
)
from app.domain.value_objects import Participants, WorkflowAssignees


async def _tasks_for(store, doc_id: str, state: TaskState | None = None):
    return await store.tasks.list_tasks(TaskFilter(doc_id=doc_id, state=state, limit=0))


class TestSubmit:
    async def test_moves_document_and_workflow_together(self, store, workflows, cast, draft):
        document = await workflows.submit(cast["owner"], draft.id)

        assert document.status == DocumentStatus.IN_REVIEW
        workflow = await store.workflows.get_by_document(draft.id)
        assert workflow.state == WorkflowState.REVIEW
        assert [h.action for h in workflow.history] == ["SUBMIT_FOR_REVIEW"]
        assert workflow.history[0].by_uid == "owner"

    async def test_creates_one_review_task_per_reviewer(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)

        tasks = await _tasks_for(store, draft.id)
        assert sorted(t.assigned_to[0] for t in tasks) == ["rev1", "rev2"]
        assert {t.type for t in tasks} == {TaskType.REVIEW}
        assert {t.state for t in tasks} == {TaskState.OPEN}

    async def test_notifies_reviewers(self, workflows, notifier, cast, draft):
        await workflows.submit(cast["owner"], draft.id)

        notifier.notify.assert_awaited_once()
        to_uids, kind, payload = notifier.notify.await_args.args
        assert sorted(to_uids) == ["rev1", "rev2"]
        assert kind == NotificationType.TASK_ASSIGNED.value
        assert payload == {"docId": draft.id, "title": "Quarterly budget", "taskType": "REVIEW"}

    async def test_writes_audit_entry_with_task_ids(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)

        logs = await store.audit_logs.list_for_target("document", draft.id)
        assert logs[0].action == "SUBMIT_FOR_REVIEW"
        assert len(logs[0].metadata["taskIds"]) == 2

    async def test_twice_conflicts_without_side_effects(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        with pytest.raises(StateConflictException):
            await workflows.submit(cast["owner"], draft.id)
        assert len(await _tasks_for(store, draft.id)) == 2

    async def test_reviewer_cannot_submit(self, workflows, cast, draft):
        with pytest.raises(AuthorizationException):
            await workflows.submit(cast["rev1"], draft.id)

    async def test_unknown_document(self, workflows, cast):
        with pytest.raises(ResourceNotFoundException):
            await workflows.submit(cast["owner"], "missing")

    async def test_review_tasks_follow_participants_not_assignees(
        self, store, documents, workflows, notifier, cast
    ):
        document = await documents.create_document(
            cast["owner"],
            "Travel policy",
            participants=Participants(reviewers=["rev1"]),
            assignees=WorkflowAssignees(review=["outsider"]),
        )

        await workflows.submit(cast["owner"], document.id)

        tasks = await _tasks_for(store, document.id)
        assert [t.assigned_to for t in tasks] == [["rev1"]]
        to_uids, _, _ = notifier.notify.await_args.args
        assert to_uids == ["rev1"]

    async def test_no_reviewers_means_no_tasks_and_no_notification(
        self, store, documents, workflows, notifier, cast
    ):
        document = await documents.create_document(cast["owner"], "Solo")
        await workflows.submit(cast["owner"], document.id)
        assert await _tasks_for(store, document.id) == []
        notifier.notify.assert_not_awaited()


class TestApprove:
    async def test_closes_only_the_approvers_open_tasks(self, store, workflows, make_user, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        # rev1 also holds approver rights through the global role
        rev1 = await make_user("rev1", "REVIEWER", "APPROVER")

        document = await workflows.approve(rev1, draft.id, notes="Looks good")

        assert document.status == DocumentStatus.APPROVED
        tasks = {t.assigned_to[0]: t for t in await _tasks_for(store, draft.id)}
        assert tasks["rev1"].state == TaskState.DONE
        assert tasks["rev1"].notes == "Looks good"
        assert tasks["rev1"].done_at is not None
        assert tasks["rev2"].state == TaskState.OPEN

    async def test_default_notes_on_completed_tasks(self, store, workflows, make_user, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        rev1 = await make_user("rev1", "APPROVER")
        await workflows.approve(rev1, draft.id)
        done = await _tasks_for(store, draft.id, TaskState.DONE)
        assert [t.notes for t in done] == ["Approved"]

    async def test_history_meta_and_owner_notified(self, store, workflows, notifier, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        notifier.notify.reset_mock()

        await workflows.approve(cast["appr"], draft.id, notes="ok", meta={"ip": "10.0.0.1"})

        workflow = await store.workflows.get_by_document(draft.id)
        assert workflow.state == WorkflowState.DONE
        assert workflow.history[-1].action == "APPROVE"
        assert workflow.history[-1].meta == {"ip": "10.0.0.1", "notes": "ok"}
        to_uids, kind, payload = notifier.notify.await_args.args
        assert to_uids == ["owner"]
        assert kind == NotificationType.DOCUMENT_APPROVED.value
        assert payload["docId"] == draft.id

    async def test_approving_twice_conflicts_and_keeps_history(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        await workflows.approve(cast["appr"], draft.id)
        before = await store.workflows.get_by_document(draft.id)

        with pytest.raises(StateConflictException):
            await workflows.approve(cast["admin"], draft.id)

        after = await store.workflows.get_by_document(draft.id)
        assert after.history == before.history
        assert after.state == WorkflowState.DONE

    async def test_concurrent_approvals_record_one_approve(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)

        results = await asyncio.gather(
            workflows.approve(cast["appr"], draft.id),
            workflows.approve(cast["admin"], draft.id),
            return_exceptions=True,
        )

        conflicts = [r for r in results if isinstance(r, StateConflictException)]
        assert len(conflicts) == 1
        workflow = await store.workflows.get_by_document(draft.id)
        assert [h.action for h in workflow.history].count("APPROVE") == 1

    async def test_draft_cannot_be_approved(self, workflows, cast, draft):
        with pytest.raises(StateConflictException):
            await workflows.approve(cast["appr"], draft.id)

    async def test_authorization_checked_before_state(self, workflows, cast, draft):
        with pytest.raises(AuthorizationException):
            await workflows.approve(cast["outsider"], draft.id)

    async def test_reviewer_without_approver_rights_is_denied(self, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        with pytest.raises(AuthorizationException):
            await workflows.approve(cast["rev2"], draft.id)


class TestReject:
    async def test_cancels_every_open_task(self, store, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)

        document = await workflows.reject(cast["rev1"], draft.id, "  Missing totals  ")

        assert document.status == DocumentStatus.REJECTED
        tasks = await _tasks_for(store, draft.id)
        assert {t.state for t in tasks} == {TaskState.CANCELLED}
        assert {t.notes for t in tasks} == {"Missing totals"}
        workflow = await store.workflows.get_by_document(draft.id)
        assert workflow.state == WorkflowState.REJECTED
        assert workflow.history[-1].meta == {"reason": "Missing totals"}

    @pytest.mark.parametrize("reason", [None, "", "   "])
    async def test_reason_is_required_before_anything_else(self, workflows, cast, reason):
        with pytest.raises(ValidationException) as exc_info:
            await workflows.reject(cast["outsider"], "missing", reason)
        assert exc_info.value.details == {"field": "reason"}

    async def test_rejected_document_cannot_be_rejected_again(self, workflows, cast, draft):
        await workflows.reject(cast["appr"], draft.id, "No")
        with pytest.raises(StateConflictException):
            await workflows.reject(cast["appr"], draft.id, "Still no")

    async def test_approved_document_cannot_be_rejected(self, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        await workflows.approve(cast["appr"], draft.id)
        with pytest.raises(StateConflictException):
            await workflows.reject(cast["admin"], draft.id, "Too late")

    async def test_owner_notified_with_reason(self, workflows, notifier, cast, draft):
        await workflows.reject(cast["admin"], draft.id, "Wrong template")
        to_uids, kind, payload = notifier.notify.await_args.args
        assert to_uids == ["owner"]
        assert kind == NotificationType.DOCUMENT_REJECTED.value
        assert payload["reason"] == "Wrong template"

    async def test_rejected_document_is_editable_but_not_resubmittable(
        self, documents, workflows, cast, draft
    ):
        await workflows.reject(cast["appr"], draft.id, "Rework")
        edited = await documents.edit_document(cast["owner"], draft.id, content="Reworked")
        assert edited.content == "Reworked"
        with pytest.raises(StateConflictException):
            await workflows.submit(cast["owner"], draft.id)


async def test_failed_notification_rolls_back_transition(store, cast, draft):
    failing = AsyncMock()
    failing.notify.side_effect = RuntimeError("delivery failed")
    service = WorkflowService(store, failing)

    with pytest.raises(RuntimeError):
        await service.submit(cast["owner"], draft.id)

    document = await store.documents.get_by_id(draft.id)
    assert document.status == DocumentStatus.DRAFT
    assert await _tasks_for(store, draft.id) == []


async def test_audit_logs_newest_first_and_require_access(workflows, cast, draft):
    await workflows.submit(cast["owner"], draft.id)
    logs = await workflows.list_audit_logs(cast["owner"], draft.id)
    assert [entry.action for entry in logs] == ["SUBMIT_FOR_REVIEW", "DOCUMENT_CREATED"]
    with pytest.raises(AuthorizationException):
        await workflows.list_audit_logs(cast["outsider"], draft.id)
