"""Office session API: password-gated office login and the session dashboard.

No user account involved. The session token travels in X-Office-Session
(or ?session=) on every call after login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentOfficeSession,
    OfficeSessionToken,
    get_message_service,
    get_office_service,
    get_office_session_manager,
)
from app.application.use_cases import MessageService, OfficeService, OfficeSessionManager
from app.core.limiter import limit_auth
from app.schemas.office import (
    MessageResponse,
    OfficeDashboardResponse,
    OfficeLoginRequest,
    OfficeLoginResponse,
)
from app.shared.request_audit import get_client_ip

router = APIRouter()


@router.post("/login", response_model=OfficeLoginResponse)
@limit_auth
async def office_login(
    request: Request,
    body: OfficeLoginRequest,
    manager: Annotated[OfficeSessionManager, Depends(get_office_session_manager)],
):
    """Exchange officeCode + password for a session token (returned once)."""
    result = await manager.login(
        body.office_code, body.password, ip_address=get_client_ip(request)
    )
    return OfficeLoginResponse.model_validate(result)


@router.post("/logout")
async def office_logout(
    session: CurrentOfficeSession,
    token: OfficeSessionToken,
    manager: Annotated[OfficeSessionManager, Depends(get_office_session_manager)],
) -> dict[str, str]:
    await manager.logout(token)
    return {"message": "Logged out"}


@router.get("/dashboard/{office_id}", response_model=OfficeDashboardResponse)
async def office_session_dashboard(
    office_id: str,
    session: CurrentOfficeSession,
    office_svc: Annotated[OfficeService, Depends(get_office_service)],
):
    """Office, members, messages (office-specific plus general memos) and unread count."""
    dashboard = await office_svc.session_dashboard(session.office_id, office_id)
    return OfficeDashboardResponse.from_dashboard(dashboard)


@router.patch("/messages/{message_id}/read", response_model=MessageResponse)
async def office_mark_message_read(
    message_id: str,
    session: CurrentOfficeSession,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    message = await message_svc.mark_read_by_office(session.office_id, message_id)
    return MessageResponse.model_validate(message)
