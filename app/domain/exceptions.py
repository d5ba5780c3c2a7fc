"""Domain exceptions for the docflow application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DocflowException(Exception):
    """Base exception for all docflow application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DocflowException):
    """Raised when input validation fails (missing or malformed input). No mutation is attempted."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DocflowException):
    """Raised when authentication fails (e.g. missing/invalid bearer token or office credentials)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DocflowException):
    """Raised when an access predicate is false for the acting user."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'document', 'office').
            action: Optional action that was attempted (e.g. 'edit', 'approve').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Access denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class StateConflictException(DocflowException):
    """Raised when a lifecycle transition guard fails (e.g. submit on a non-DRAFT document)."""

    def __init__(
        self,
        message: str,
        current_state: str | None = None,
        event: str | None = None,
    ) -> None:
        """Initialize with message and transition context.

        Args:
            message: Human-readable description.
            current_state: State the entity was in when the guard failed.
            event: The attempted event (e.g. 'submit', 'approve').
        """
        details: dict[str, Any] = {}
        if current_state is not None:
            details["current_state"] = current_state
        if event is not None:
            details["event"] = event
        super().__init__(message, "STATE_CONFLICT", details)


class ResourceNotFoundException(DocflowException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document', 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(DocflowException):
    """Raised when creating or renaming an entity would violate a unique key (e.g. office code)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "CONFLICT", details)


class InvalidOfficeSessionException(DocflowException):
    """Raised for any office session failure (unknown, inactive, expired or missing token).

    The message is deliberately identical for every cause so callers cannot
    enumerate tokens.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or expired office session", "INVALID_OFFICE_SESSION")


class StorageFailureException(DocflowException):
    """Raised when the entity store is unreachable or not configured. Fatal for the request."""

    def __init__(
        self, message: str = "Entity store is unavailable", reason: str | None = None
    ) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "STORAGE_FAILURE", details)
