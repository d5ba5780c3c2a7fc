"""Task API: the caller's task inbox and direct complete/cancel."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import AuditContextDep, CurrentUser, get_task_service
from app.application.use_cases import TaskService
from app.core.limiter import limit_writes
from app.domain.enums import TaskState, TaskType
from app.schemas.workflow import TaskActionRequest, TaskListItemResponse, TaskResponse

router = APIRouter()


@router.get("", response_model=list[TaskListItemResponse])
async def list_tasks(
    current_user: CurrentUser,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
    state: TaskState = TaskState.OPEN,
    task_type: Annotated[TaskType | None, Query(alias="type")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Tasks assigned to the caller, newest first (OPEN by default)."""
    items = await task_svc.list_tasks(
        current_user, state=state, task_type=task_type, limit=limit, offset=offset
    )
    return [TaskListItemResponse.from_item(i) for i in items]


@router.post("/{task_id}/complete", response_model=TaskResponse)
@limit_writes
async def complete_task(
    request: Request,
    task_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
    body: TaskActionRequest | None = None,
):
    task = await task_svc.complete_task(
        current_user, task_id, notes=body.notes if body else None, context=context
    )
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/cancel", response_model=TaskResponse)
@limit_writes
async def cancel_task(
    request: Request,
    task_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    task_svc: Annotated[TaskService, Depends(get_task_service)],
    body: TaskActionRequest | None = None,
):
    task = await task_svc.cancel_task(
        current_user, task_id, notes=body.notes if body else None, context=context
    )
    return TaskResponse.model_validate(task)
