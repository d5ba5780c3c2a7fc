"""User, directory and department API schemas."""

from datetime import datetime

from pydantic import Field

from app.domain.enums import UserRole
from app.schemas.common import ApiModel


class UserSummaryResponse(ApiModel):
    """Compact user reference (owner, sender, members)."""

    id: str
    name: str
    initials: str
    email: str | None = None


class UserResponse(ApiModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    roles: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)
    office_id: str | None = None
    created_at: datetime
    updated_at: datetime


class UserRolesUpdateRequest(ApiModel):
    """Replaces the user's global roles."""

    roles: list[UserRole]


class AssignOfficeRequest(ApiModel):
    office_id: str | None = Field(default=None, max_length=64)


class DepartmentCreateRequest(ApiModel):
    name: str | None = Field(default=None, max_length=255)
    members: list[str] = Field(default_factory=list)


class DepartmentResponse(ApiModel):
    id: str
    name: str
    members: list[str]
    created_at: datetime
