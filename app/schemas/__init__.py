"""Pydantic request/response schemas for the API."""

from app.schemas.common import ApiModel
from app.schemas.document import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
    DocumentCreateRequest,
    DocumentDetailResponse,
    DocumentListItemResponse,
    DocumentResponse,
    DocumentUpdateRequest,
    VersionResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.notification import NotificationResponse
from app.schemas.office import (
    MessageCreateRequest,
    MessageListItemResponse,
    MessageResponse,
    OfficeCreateRequest,
    OfficeDashboardResponse,
    OfficeLoginRequest,
    OfficeLoginResponse,
    OfficeResponse,
    OfficeUpdateRequest,
)
from app.schemas.user import (
    AssignOfficeRequest,
    DepartmentCreateRequest,
    DepartmentResponse,
    UserResponse,
    UserRolesUpdateRequest,
)
from app.schemas.workflow import (
    ApproveRequest,
    AuditLogResponse,
    RejectRequest,
    TaskActionRequest,
    TaskListItemResponse,
    TaskResponse,
    WorkflowResponse,
)

__all__ = [
    "ApiModel",
    "ApproveRequest",
    "AssignOfficeRequest",
    "AuditLogResponse",
    "CommentCreateRequest",
    "CommentResponse",
    "CommentUpdateRequest",
    "DepartmentCreateRequest",
    "DepartmentResponse",
    "DocumentCreateRequest",
    "DocumentDetailResponse",
    "DocumentListItemResponse",
    "DocumentResponse",
    "DocumentUpdateRequest",
    "HealthResponse",
    "MessageCreateRequest",
    "MessageListItemResponse",
    "MessageResponse",
    "NotificationResponse",
    "OfficeCreateRequest",
    "OfficeDashboardResponse",
    "OfficeLoginRequest",
    "OfficeLoginResponse",
    "OfficeResponse",
    "OfficeUpdateRequest",
    "RejectRequest",
    "TaskActionRequest",
    "TaskListItemResponse",
    "TaskResponse",
    "UserResponse",
    "UserRolesUpdateRequest",
    "WorkflowResponse",
]
