"""Office administration and messaging API (ADMIN), plus the member dashboard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    AuditContextDep,
    CurrentUser,
    get_message_service,
    get_office_service,
)
from app.application.use_cases import MessageService, OfficeService
from app.core.limiter import limit_writes
from app.domain.enums import MessageType
from app.schemas.office import (
    MessageCreateRequest,
    MessageListItemResponse,
    MessageResponse,
    OfficeCreateRequest,
    OfficeDashboardResponse,
    OfficeResponse,
    OfficeUpdateRequest,
)

offices_router = APIRouter()
messages_router = APIRouter()


@offices_router.get("", response_model=list[OfficeResponse])
async def list_offices(
    current_user: CurrentUser,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    offices = await office_svc.list_offices(current_user)
    return [OfficeResponse.model_validate(o) for o in offices]


@offices_router.post("", response_model=OfficeResponse, status_code=201)
@limit_writes
async def create_office(
    request: Request,
    body: OfficeCreateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    """Create an office; the password is stored as a bcrypt hash only."""
    office = await office_svc.create_office(
        current_user,
        office_id=body.office_id,
        name=body.name,
        office_code=body.office_code,
        password=body.password,
        description=body.description,
        head_user_id=body.head_user_id,
        admin_users=body.admin_users,
        members=body.members,
        department_id=body.department_id,
        context=context,
    )
    return OfficeResponse.model_validate(office)


@offices_router.patch("/{id}", response_model=OfficeResponse)
@limit_writes
async def update_office(
    request: Request,
    id: str,
    body: OfficeUpdateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    office = await office_svc.update_office(
        current_user,
        id,
        name=body.name,
        description=body.description,
        office_code=body.office_code,
        password=body.password,
        head_user_id=body.head_user_id,
        admin_users=body.admin_users,
        members=body.members,
        department_id=body.department_id,
        context=context,
    )
    return OfficeResponse.model_validate(office)


@offices_router.delete("/{id}", status_code=204)
@limit_writes
async def delete_office(
    request: Request,
    id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
) -> None:
    await office_svc.delete_office(current_user, id, context=context)


@offices_router.get("/{office_id}/dashboard", response_model=OfficeDashboardResponse)
async def office_dashboard(
    office_id: str,
    current_user: CurrentUser,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    """Dashboard for a member of the office (or ADMIN); office_id is the business key."""
    dashboard = await office_svc.user_dashboard(current_user, office_id)
    return OfficeDashboardResponse.from_dashboard(dashboard)


@messages_router.get("", response_model=list[MessageListItemResponse])
async def list_messages(
    current_user: CurrentUser,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
    target_office_id: Annotated[str | None, Query(alias="targetOfficeId")] = None,
    message_type: Annotated[MessageType | None, Query(alias="messageType")] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    items = await message_svc.list_messages(
        current_user,
        target_office_id=target_office_id,
        message_type=message_type,
        limit=limit,
    )
    return [MessageListItemResponse.from_item(i) for i in items]


@messages_router.post("", response_model=MessageResponse, status_code=201)
@limit_writes
async def create_message(
    request: Request,
    body: MessageCreateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """Post an office-specific message or a general memo."""
    message = await message_svc.create_message(
        current_user,
        title=body.title,
        content=body.content,
        message_type=body.message_type,
        target_office_id=body.target_office_id,
        priority=body.priority,
        context=context,
    )
    return MessageResponse.model_validate(message)


@messages_router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: str,
    current_user: CurrentUser,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """Mark read for the signed-in user (reader key = user id)."""
    message = await message_svc.mark_read(message_id, current_user.id)
    return MessageResponse.model_validate(message)
