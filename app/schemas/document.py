"""Document, version and comment API schemas."""

from datetime import datetime
from typing import Self

from pydantic import Field

from app.application.dtos.document import DocumentListItem
from app.application.use_cases.documents.document_operations import DocumentDetail
from app.domain.enums import DocumentStatus
from app.domain.value_objects import Acl, Participants, WorkflowAssignees
from app.schemas.common import ApiModel
from app.schemas.user import UserSummaryResponse
from app.schemas.workflow import WorkflowResponse


class ParticipantsSchema(ApiModel):
    editors: list[str] = Field(default_factory=list)
    reviewers: list[str] = Field(default_factory=list)
    approvers: list[str] = Field(default_factory=list)
    viewers: list[str] = Field(default_factory=list)

    def to_value(self) -> Participants:
        return Participants.from_dict(self.model_dump())


class AclSchema(ApiModel):
    read: list[str] = Field(default_factory=list)
    write: list[str] = Field(default_factory=list)

    def to_value(self) -> Acl:
        return Acl.from_dict(self.model_dump())


class AssigneesSchema(ApiModel):
    review: list[str] = Field(default_factory=list)
    sign: list[str] = Field(default_factory=list)
    approve: list[str] = Field(default_factory=list)

    def to_value(self) -> WorkflowAssignees:
        return WorkflowAssignees.from_dict(self.model_dump())


class DocumentCreateRequest(ApiModel):
    """Request body for POST /documents. Title is checked by the use case (400, not 422)."""

    title: str | None = None
    content: str | None = None
    department_id: str | None = None
    participants: ParticipantsSchema | None = None
    acl: AclSchema | None = None
    tags: list[str] = Field(default_factory=list)
    due_at: datetime | None = None
    assignees: AssigneesSchema | None = None


class DocumentUpdateRequest(ApiModel):
    """Request body for PATCH /documents/{id} (partial)."""

    title: str | None = None
    content: str | None = None


class DocumentResponse(ApiModel):
    id: str
    title: str
    content: str
    owner_uid: str
    department_id: str | None = None
    status: DocumentStatus
    current_version_id: str | None = None
    tags: list[str]
    due_at: datetime | None = None
    participants: ParticipantsSchema
    acl: AclSchema
    created_at: datetime
    updated_at: datetime


class DocumentListItemResponse(DocumentResponse):
    """List row: document fields plus owner, current version label and comment count."""

    owner: UserSummaryResponse | None = None
    current_version: str
    comments_count: int

    @classmethod
    def from_item(cls, item: DocumentListItem) -> Self:
        base = DocumentResponse.model_validate(item.document)
        return cls(
            **dict(base),
            owner=UserSummaryResponse.model_validate(item.owner) if item.owner else None,
            current_version=item.current_version,
            comments_count=item.comments_count,
        )


class VersionResponse(ApiModel):
    id: str
    doc_id: str
    version_number: str
    sequence: int
    storage_path: str
    sha256: str
    created_by: str
    file_name: str
    file_size: int
    mime_type: str | None = None
    change_summary: str
    created_at: datetime


class CommentCreateRequest(ApiModel):
    body: str | None = None


class CommentUpdateRequest(ApiModel):
    resolved: bool


class CommentResponse(ApiModel):
    id: str
    doc_id: str
    author_uid: str
    body: str
    resolved: bool
    created_at: datetime


class DocumentDetailResponse(DocumentResponse):
    """GET /documents/{id}: document with owner, versions, comments and workflow."""

    owner: UserSummaryResponse | None = None
    versions: list[VersionResponse]
    comments: list[CommentResponse]
    workflow: WorkflowResponse | None = None

    @classmethod
    def from_detail(cls, detail: DocumentDetail) -> Self:
        base = DocumentResponse.model_validate(detail.document)
        return cls(
            **dict(base),
            owner=UserSummaryResponse.model_validate(detail.owner) if detail.owner else None,
            versions=[VersionResponse.model_validate(v) for v in detail.versions],
            comments=[CommentResponse.model_validate(c) for c in detail.comments],
            workflow=WorkflowResponse.model_validate(detail.workflow)
            if detail.workflow
            else None,
        )
