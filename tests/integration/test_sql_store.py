"""SqlEntityStore against PostgreSQL: repositories and the workflow engine."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from app.application.dtos.office import OfficeCreate, OfficeSessionCreate
from app.application.dtos.task import TaskFilter
from app.application.dtos.user import UserUpsert
from app.application.use_cases import DocumentService, WorkflowService
from app.domain.enums import DocumentStatus, TaskState, WorkflowState
from app.domain.exceptions import StateConflictException
from app.domain.value_objects import Participants
from app.infrastructure.persistence.models import AuditLog
from app.shared.utils.datetime import utc_now

pytestmark = pytest.mark.requires_db


async def _user(store, uid: str, *roles: str):
    async with store.transaction():
        user = await store.users.upsert(UserUpsert(id=uid, email=f"{uid}@example.com"))
        if roles:
            user = await store.users.update_roles(uid, list(roles))
    return user


async def _open_tasks(store, doc_id: str):
    return await store.tasks.list_tasks(
        TaskFilter(doc_id=doc_id, state=TaskState.OPEN, limit=0)
    )


async def test_user_upsert_keeps_roles(sql_store):
    await _user(sql_store, "u1", "REVIEWER")
    async with sql_store.transaction():
        user = await sql_store.users.upsert(UserUpsert(id="u1", first_name="Ada"))
    assert user.roles == ["REVIEWER"]
    assert user.email == "u1@example.com"
    assert user.first_name == "Ada"


async def test_submit_and_approve(sql_store):
    owner = await _user(sql_store, "owner")
    approver = await _user(sql_store, "appr", "APPROVER")
    await _user(sql_store, "rev")
    document = await DocumentService(sql_store).create_document(
        owner, "Contract", participants=Participants(reviewers=["rev"])
    )
    workflows = WorkflowService(sql_store, AsyncMock())

    submitted = await workflows.submit(owner, document.id)
    assert submitted.status == DocumentStatus.IN_REVIEW
    [task] = await _open_tasks(sql_store, document.id)
    assert task.assigned_to == ["rev"]

    approved = await workflows.approve(approver, document.id)
    assert approved.status == DocumentStatus.APPROVED
    workflow = await sql_store.workflows.get_by_document(document.id)
    assert workflow.state == WorkflowState.DONE
    assert [h.action for h in workflow.history] == ["SUBMIT_FOR_REVIEW", "APPROVE"]

    with pytest.raises(StateConflictException):
        await workflows.submit(owner, document.id)


async def test_failed_transition_rolls_back(sql_store):
    owner = await _user(sql_store, "owner")
    await _user(sql_store, "rev")
    document = await DocumentService(sql_store).create_document(
        owner, "Reviewed", participants=Participants(reviewers=["rev"])
    )
    failing = AsyncMock()
    failing.notify.side_effect = RuntimeError("delivery failed")

    with pytest.raises(RuntimeError):
        await WorkflowService(sql_store, failing).submit(owner, document.id)

    reloaded = await sql_store.documents.get_by_id(document.id)
    assert reloaded.status == DocumentStatus.DRAFT
    assert await _open_tasks(sql_store, document.id) == []


async def test_version_sequence_is_monotonic(sql_store):
    owner = await _user(sql_store, "owner")
    document = await DocumentService(sql_store).create_document(owner, "Numbers")
    async with sql_store.transaction():
        first = await sql_store.documents.next_version_sequence(document.id)
        second = await sql_store.documents.next_version_sequence(document.id)
    assert (first, second) == (1, 2)


async def test_audit_log_rows_are_immutable(sql_store, db_session):
    owner = await _user(sql_store, "owner")
    await DocumentService(sql_store).create_document(owner, "Audited")
    row = (await db_session.execute(select(AuditLog).limit(1))).scalar_one()
    row.action = "TAMPERED"
    with pytest.raises(ValueError):
        await db_session.flush()


async def test_office_session_sweep(sql_store):
    async with sql_store.transaction():
        await sql_store.offices.create(
            OfficeCreate(
                office_id="OFF-1",
                name="Registry",
                office_code="R1",
                office_password_hash="x",
            )
        )
        await sql_store.office_sessions.create(
            OfficeSessionCreate(
                office_id="OFF-1",
                token_hash="a" * 64,
                expires_at=utc_now() - timedelta(days=3),
            )
        )
        await sql_store.office_sessions.create(
            OfficeSessionCreate(
                office_id="OFF-1",
                token_hash="b" * 64,
                expires_at=utc_now() + timedelta(hours=1),
            )
        )
    async with sql_store.transaction():
        removed = await sql_store.office_sessions.delete_stale(utc_now() - timedelta(days=1))
    assert removed == 1
    assert await sql_store.office_sessions.get_by_token_hash("b" * 64) is not None
