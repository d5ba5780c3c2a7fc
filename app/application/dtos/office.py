"""DTOs for offices, office messages and office sessions (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import MessagePriority, MessageType


@dataclass(frozen=True)
class OfficeCreate:
    """Input for creating an office. The password is already hashed by the use case."""

    office_id: str
    name: str
    office_code: str
    office_password_hash: str
    description: str | None = None
    head_user_id: str | None = None
    admin_users: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    department_id: str | None = None


@dataclass(frozen=True)
class OfficeUpdate:
    """Partial office update; None leaves the field unchanged."""

    name: str | None = None
    description: str | None = None
    office_code: str | None = None
    office_password_hash: str | None = None
    head_user_id: str | None = None
    admin_users: list[str] | None = None
    members: list[str] | None = None
    department_id: str | None = None


@dataclass(frozen=True)
class OfficeResult:
    """Office read-model. Carries the password hash; never serialize it directly."""

    id: str
    office_id: str
    name: str
    description: str | None
    office_code: str
    office_password_hash: str
    head_user_id: str | None
    admin_users: list[str]
    members: list[str]
    department_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OfficeSummary:
    """Public office fields returned by office login."""

    id: str
    office_id: str
    name: str
    description: str | None


@dataclass(frozen=True)
class MessageCreate:
    title: str
    content: str
    sender_user_id: str
    message_type: MessageType
    target_office_id: str | None = None
    priority: MessagePriority = MessagePriority.NORMAL


@dataclass(frozen=True)
class MessageResult:
    """Message read-model. is_read maps reader keys (user id or office_<officeId>) to True."""

    id: str
    title: str
    content: str
    sender_user_id: str
    message_type: MessageType
    target_office_id: str | None
    is_read: dict[str, bool]
    priority: MessagePriority
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OfficeSessionCreate:
    office_id: str
    token_hash: str
    expires_at: datetime
    user_id: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class OfficeSessionResult:
    id: str
    office_id: str
    user_id: str | None
    login_time: datetime
    ip_address: str | None
    token_hash: str
    is_active: bool
    expires_at: datetime


@dataclass(frozen=True)
class OfficeLoginResult:
    """Raw session token (returned once, never stored) and office summary."""

    session_token: str
    expires_at: datetime
    office: OfficeSummary
