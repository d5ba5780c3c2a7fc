"""Direct task handling: listing the actor's tasks, complete and cancel."""

import pytest

from app.domain.enums import TaskState, TaskType
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    StateConflictException,
)


@pytest.fixture
async def submitted(workflows, cast, draft):
    await workflows.submit(cast["owner"], draft.id)
    return draft


async def test_list_tasks_returns_open_tasks_with_document(tasks, cast, submitted):
    items = await tasks.list_tasks(cast["rev1"])
    assert len(items) == 1
    assert items[0].task.type == TaskType.REVIEW
    assert items[0].document.id == submitted.id
    assert await tasks.list_tasks(cast["outsider"]) == []


async def test_list_tasks_filters_by_state_and_type(tasks, cast, submitted):
    items = await tasks.list_tasks(cast["rev1"])
    await tasks.complete_task(cast["rev1"], items[0].task.id)
    assert await tasks.list_tasks(cast["rev1"]) == []
    done = await tasks.list_tasks(cast["rev1"], state=TaskState.DONE)
    assert len(done) == 1
    assert await tasks.list_tasks(cast["rev1"], state=None, task_type=TaskType.SIGN) == []


async def test_assignee_completes_task(store, tasks, cast, submitted):
    task = (await tasks.list_tasks(cast["rev2"]))[0].task
    done = await tasks.complete_task(cast["rev2"], task.id, notes="Read it")
    assert done.state == TaskState.DONE
    assert done.notes == "Read it"
    logs = await store.audit_logs.list_for_target("task", task.id)
    assert logs[0].action == "TASK_COMPLETED"


async def test_non_assignee_cannot_complete(tasks, cast, submitted):
    task = (await tasks.list_tasks(cast["rev2"]))[0].task
    with pytest.raises(AuthorizationException):
        await tasks.complete_task(cast["rev1"], task.id)


async def test_completing_twice_conflicts(tasks, cast, submitted):
    task = (await tasks.list_tasks(cast["rev2"]))[0].task
    await tasks.complete_task(cast["admin"], task.id)
    with pytest.raises(StateConflictException):
        await tasks.complete_task(cast["rev2"], task.id)


async def test_owner_cancels_task(tasks, cast, submitted):
    task = (await tasks.list_tasks(cast["rev1"]))[0].task
    cancelled = await tasks.cancel_task(cast["owner"], task.id)
    assert cancelled.state == TaskState.CANCELLED
    assert cancelled.done_at is not None


async def test_assignee_cannot_cancel(tasks, cast, submitted):
    task = (await tasks.list_tasks(cast["rev1"]))[0].task
    with pytest.raises(AuthorizationException):
        await tasks.cancel_task(cast["rev1"], task.id)


async def test_unknown_task(tasks, cast):
    with pytest.raises(ResourceNotFoundException):
        await tasks.complete_task(cast["admin"], "nope")
