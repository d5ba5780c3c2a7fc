"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import DocumentEntity, OfficeSessionEntity
from app.domain.enums import DocumentStatus, TaskState, UserRole, WorkflowState
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DocflowException,
    InvalidOfficeSessionException,
    ResourceNotFoundException,
    StateConflictException,
    StorageFailureException,
    ValidationException,
)
from app.domain.value_objects import Participants, VersionNumber, WorkflowAssignees

__all__ = [
    # Entities
    "DocumentEntity",
    "OfficeSessionEntity",
    # Enums
    "DocumentStatus",
    "TaskState",
    "UserRole",
    "WorkflowState",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "DocflowException",
    "InvalidOfficeSessionException",
    "ResourceNotFoundException",
    "StateConflictException",
    "StorageFailureException",
    "ValidationException",
    # Value objects
    "Participants",
    "VersionNumber",
    "WorkflowAssignees",
]
