"""Office use cases: administration, dashboards, messaging and office sessions."""

from app.application.use_cases.offices.messages import MessageListItem, MessageService
from app.application.use_cases.offices.office_operations import (
    OfficeDashboard,
    OfficeService,
    office_reader_key,
)
from app.application.use_cases.offices.office_session import (
    OfficeSessionManager,
    hash_session_token,
)

__all__ = [
    "MessageListItem",
    "MessageService",
    "OfficeDashboard",
    "OfficeService",
    "OfficeSessionManager",
    "hash_session_token",
    "office_reader_key",
]
