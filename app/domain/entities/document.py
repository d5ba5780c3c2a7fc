"""Document domain entity.

Represents the business rules of a document independent of persistence:
title validation and which statuses allow content edits.
"""

from dataclasses import dataclass

from app.domain.enums import DocumentStatus
from app.domain.exceptions import StateConflictException, ValidationException
from app.domain.value_objects import Participants

TITLE_MAX_LENGTH = 255

EDITABLE_STATUSES = frozenset({DocumentStatus.DRAFT, DocumentStatus.REJECTED})


def validate_title(title: str | None) -> str:
    """Return the stripped title. Raises ValidationException if blank or too long."""
    if title is None or not title.strip():
        raise ValidationException("Title is required", field="title")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationException(
            f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
        )
    return title


@dataclass
class DocumentEntity:
    """Domain entity for a document (lifecycle rules only; content lives in the DTO)."""

    id: str
    title: str
    owner_uid: str
    status: DocumentStatus
    participants: Participants

    def __post_init__(self) -> None:
        self.title = validate_title(self.title)

    def is_editable(self) -> bool:
        """Content and title may change only while DRAFT or REJECTED."""
        return self.status in EDITABLE_STATUSES

    def ensure_editable(self) -> None:
        """Raises StateConflictException when the status freezes content."""
        if not self.is_editable():
            raise StateConflictException(
                f"Document cannot be edited in status {self.status.value}",
                current_state=self.status.value,
                event="edit",
            )
