"""Application services: access predicates and the audit trail recorder."""

from app.application.services.access_control import (
    can_access,
    can_approve,
    can_edit,
    can_review,
    is_admin,
)
from app.application.services.audit_service import AuditRecorder

__all__ = [
    "AuditRecorder",
    "can_access",
    "can_approve",
    "can_edit",
    "can_review",
    "is_admin",
]
