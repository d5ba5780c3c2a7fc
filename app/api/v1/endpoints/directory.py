"""Directory API: users (admin) and departments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    AuditContextDep,
    CurrentUser,
    get_directory_service,
    get_office_service,
)
from app.application.use_cases import DirectoryService, OfficeService
from app.core.limiter import limit_writes
from app.domain.enums import UserRole
from app.schemas.user import (
    AssignOfficeRequest,
    DepartmentCreateRequest,
    DepartmentResponse,
    UserResponse,
    UserRolesUpdateRequest,
)

users_router = APIRouter()
departments_router = APIRouter()


@users_router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: CurrentUser,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
    role: UserRole | None = None,
    office_id: Annotated[str | None, Query(alias="officeId")] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List users, optionally by role or office (ADMIN only)."""
    users = await directory.list_users(
        current_user, role=role, office_id=office_id, skip=skip, limit=limit
    )
    return [UserResponse.model_validate(u) for u in users]


@users_router.patch("/{user_id}/roles", response_model=UserResponse)
@limit_writes
async def update_user_roles(
    request: Request,
    user_id: str,
    body: UserRolesUpdateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    user = await directory.update_roles(
        current_user, user_id, [r.value for r in body.roles], context=context
    )
    return UserResponse.model_validate(user)


@users_router.post("/{user_id}/assign-office", response_model=UserResponse)
@limit_writes
async def assign_user_office(
    request: Request,
    user_id: str,
    body: AssignOfficeRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    """Move the user into the office with business key officeId (ADMIN only)."""
    user = await office_svc.assign_user(
        current_user, user_id, body.office_id, context=context
    )
    return UserResponse.model_validate(user)


@departments_router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    current_user: CurrentUser,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    departments = await directory.list_departments()
    return [DepartmentResponse.model_validate(d) for d in departments]


@departments_router.post("", response_model=DepartmentResponse, status_code=201)
@limit_writes
async def create_department(
    request: Request,
    body: DepartmentCreateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
):
    department = await directory.create_department(
        current_user, body.name, members=body.members, context=context
    )
    return DepartmentResponse.model_validate(department)
