"""DTOs for document, version and comment use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.application.dtos.user import UserSummary
from app.domain.enums import DocumentStatus
from app.domain.value_objects import Acl, Participants


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Status is always DRAFT on insert."""

    title: str
    owner_uid: str
    content: str = ""
    department_id: str | None = None
    participants: Participants = field(default_factory=Participants)
    acl: Acl = field(default_factory=Acl)
    tags: list[str] = field(default_factory=list)
    due_at: datetime | None = None


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, create, update_content)."""

    id: str
    title: str
    content: str
    owner_uid: str
    department_id: str | None
    status: DocumentStatus
    current_version_id: str | None
    tags: list[str]
    due_at: datetime | None
    participants: Participants
    acl: Acl
    version_counter: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class DocumentFilter:
    """List filters; search is a case-insensitive title substring."""

    status: DocumentStatus | None = None
    department_id: str | None = None
    owner_uid: str | None = None
    search: str | None = None
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class DocumentListItem:
    """Document list item enriched with owner, current version label and comment count."""

    document: DocumentResult
    owner: UserSummary | None
    current_version: str
    comments_count: int


@dataclass(frozen=True)
class VersionCreate:
    """Input for inserting an immutable document version."""

    doc_id: str
    sequence: int
    version_number: str
    storage_path: str
    sha256: str
    created_by: str
    file_name: str
    file_size: int
    mime_type: str | None
    change_summary: str


@dataclass(frozen=True)
class VersionResult:
    """Document version read-model."""

    id: str
    doc_id: str
    sequence: int
    version_number: str
    storage_path: str
    sha256: str
    created_by: str
    file_name: str
    file_size: int
    mime_type: str | None
    change_summary: str
    created_at: datetime


@dataclass(frozen=True)
class CommentCreate:
    """Input for adding a comment."""

    doc_id: str
    author_uid: str
    body: str


@dataclass(frozen=True)
class CommentResult:
    """Comment read-model."""

    id: str
    doc_id: str
    author_uid: str
    body: str
    resolved: bool
    created_at: datetime
