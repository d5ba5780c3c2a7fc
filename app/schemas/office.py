"""Office, office session and message API schemas.

Office responses never carry office_password_hash.
"""

from datetime import datetime
from typing import Any, Self

from pydantic import Field

from app.application.use_cases.offices.messages import MessageListItem
from app.application.use_cases.offices.office_operations import OfficeDashboard
from app.domain.enums import MessagePriority, MessageType
from app.schemas.common import ApiModel
from app.schemas.user import UserResponse, UserSummaryResponse


class OfficeCreateRequest(ApiModel):
    office_id: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, max_length=255)
    office_code: str | None = Field(default=None, max_length=64)
    password: str | None = None
    description: str | None = None
    head_user_id: str | None = None
    admin_users: list[str] = Field(default_factory=list)
    members: list[str] = Field(default_factory=list)
    department_id: str | None = None


class OfficeUpdateRequest(ApiModel):
    """Partial update; password is re-hashed when present."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    office_code: str | None = Field(default=None, max_length=64)
    password: str | None = None
    head_user_id: str | None = None
    admin_users: list[str] | None = None
    members: list[str] | None = None
    department_id: str | None = None


class OfficeResponse(ApiModel):
    id: str
    office_id: str
    name: str
    description: str | None = None
    office_code: str
    head_user_id: str | None = None
    admin_users: list[str]
    members: list[str]
    department_id: str | None = None
    created_at: datetime
    updated_at: datetime


class OfficeSummaryResponse(ApiModel):
    id: str
    office_id: str
    name: str
    description: str | None = None


class OfficeLoginRequest(ApiModel):
    office_code: str | None = None
    password: str | None = None


class OfficeLoginResponse(ApiModel):
    session_token: str
    expires_at: datetime
    office: OfficeSummaryResponse


class MessageCreateRequest(ApiModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    message_type: MessageType = MessageType.GENERAL_MEMO
    target_office_id: str | None = None
    priority: MessagePriority = MessagePriority.NORMAL


class MessageResponse(ApiModel):
    id: str
    title: str
    content: str
    sender_user_id: str
    message_type: MessageType
    target_office_id: str | None = None
    is_read: dict[str, bool]
    priority: MessagePriority
    created_at: datetime
    updated_at: datetime


class MessageListItemResponse(MessageResponse):
    sender: UserSummaryResponse | None = None

    @classmethod
    def from_item(cls, item: MessageListItem) -> Self:
        base = MessageResponse.model_validate(item.message)
        return cls(
            **dict(base),
            sender=UserSummaryResponse.model_validate(item.sender) if item.sender else None,
        )


class OfficeDashboardResponse(ApiModel):
    office: OfficeSummaryResponse
    members: list[UserResponse]
    messages: list[MessageResponse] = Field(default_factory=list)
    stats: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dashboard(cls, dashboard: OfficeDashboard) -> Self:
        return cls(
            office=OfficeSummaryResponse.model_validate(dashboard.office),
            members=[UserResponse.model_validate(m) for m in dashboard.members],
            messages=[MessageResponse.model_validate(m) for m in dashboard.messages],
            stats=dashboard.stats,
        )
