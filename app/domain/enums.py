"""Domain enumerations for the docflow application.

Enums represent fixed sets of domain values (roles, document status,
workflow state, task type and state, message kinds).
"""

from enum import Enum


class _ValuesMixin:
    """Adds a values() helper returning all member values as strings."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for validation or CHECK constraints)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class UserRole(_ValuesMixin, str, Enum):
    """Global, additive user roles. ADMIN bypasses every document predicate."""

    ADMIN = "ADMIN"
    OFFICER = "OFFICER"
    REVIEWER = "REVIEWER"
    APPROVER = "APPROVER"
    VIEWER = "VIEWER"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Document lifecycle status.

    Only the workflow transition function changes it; see
    app.application.use_cases.workflows.transitions.
    """

    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    PENDING_SIGNATURE = "PENDING_SIGNATURE"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ARCHIVED = "ARCHIVED"


class WorkflowState(_ValuesMixin, str, Enum):
    """Per-document workflow process state (paired with DocumentStatus)."""

    DRAFT = "DRAFT"
    REVIEW = "REVIEW"
    SIGN = "SIGN"
    APPROVAL = "APPROVAL"
    DONE = "DONE"
    REJECTED = "REJECTED"


class WorkflowAction(_ValuesMixin, str, Enum):
    """Action codes written to Workflow.history."""

    SUBMIT_FOR_REVIEW = "SUBMIT_FOR_REVIEW"
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class TaskType(_ValuesMixin, str, Enum):
    """Kind of action a task asks its assignee to perform."""

    REVIEW = "REVIEW"
    SIGN = "SIGN"
    APPROVE = "APPROVE"


class TaskState(_ValuesMixin, str, Enum):
    """Task lifecycle: OPEN -> DONE or OPEN -> CANCELLED."""

    OPEN = "OPEN"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class AuditTargetType(_ValuesMixin, str, Enum):
    """Entity kinds an audit log entry can point at."""

    DOCUMENT = "document"
    WORKFLOW = "workflow"
    TASK = "task"
    USER = "user"
    OFFICE = "office"
    MESSAGE = "message"
    DEPARTMENT = "department"


class MessageType(_ValuesMixin, str, Enum):
    """Office-targeted message or broadcast memo."""

    OFFICE_SPECIFIC = "office_specific"
    GENERAL_MEMO = "general_memo"


class MessagePriority(_ValuesMixin, str, Enum):
    """Message priority shown on office dashboards."""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class NotificationType(_ValuesMixin, str, Enum):
    """Events emitted to users by the workflow engine."""

    TASK_ASSIGNED = "TASK_ASSIGNED"
    DOCUMENT_APPROVED = "DOCUMENT_APPROVED"
    DOCUMENT_REJECTED = "DOCUMENT_REJECTED"


class AuditAction(_ValuesMixin, str, Enum):
    """Action codes written to the audit trail."""

    DOCUMENT_CREATED = "DOCUMENT_CREATED"
    DOCUMENT_UPDATED = "DOCUMENT_UPDATED"
    DOCUMENT_DELETED = "DOCUMENT_DELETED"
    VERSION_UPLOADED = "VERSION_UPLOADED"
    ADD_COMMENT = "ADD_COMMENT"
    COMMENT_UPDATED = "COMMENT_UPDATED"
    SUBMIT_FOR_REVIEW = "SUBMIT_FOR_REVIEW"
    APPROVE_DOCUMENT = "APPROVE_DOCUMENT"
    REJECT_DOCUMENT = "REJECT_DOCUMENT"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_CANCELLED = "TASK_CANCELLED"
    USER_ROLES_UPDATED = "USER_ROLES_UPDATED"
    USER_OFFICE_ASSIGNED = "USER_OFFICE_ASSIGNED"
    DEPARTMENT_CREATED = "DEPARTMENT_CREATED"
    OFFICE_CREATED = "OFFICE_CREATED"
    OFFICE_UPDATED = "OFFICE_UPDATED"
    OFFICE_DELETED = "OFFICE_DELETED"
    MESSAGE_CREATED = "MESSAGE_CREATED"
