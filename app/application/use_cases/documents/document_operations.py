"""Document operations: create, edit, delete (write) and list, detail (read)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.document import (
    CommentResult,
    DocumentCreate,
    DocumentFilter,
    DocumentListItem,
    DocumentResult,
    VersionResult,
)
from app.application.dtos.user import UserResult, UserSummary
from app.application.dtos.workflow import WorkflowResult
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import (
    can_access,
    can_edit,
    is_admin,
    require,
)
from app.application.services.audit_service import AuditRecorder, changed_fields
from app.domain.entities.document import DocumentEntity, validate_title
from app.domain.enums import AuditAction, AuditTargetType, DocumentStatus
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects import Acl, Participants, WorkflowAssignees

logger = logging.getLogger(__name__)

DEFAULT_VERSION_LABEL = "1.0"


@dataclass(frozen=True)
class DocumentDetail:
    """Document with owner, versions (newest first), comments (oldest first) and workflow."""

    document: DocumentResult
    owner: UserSummary | None
    versions: list[VersionResult]
    comments: list[CommentResult]
    workflow: WorkflowResult | None


def _to_entity(document: DocumentResult) -> DocumentEntity:
    return DocumentEntity(
        id=document.id,
        title=document.title,
        owner_uid=document.owner_uid,
        status=document.status,
        participants=document.participants,
    )


class DocumentService:
    """Document lifecycle manager (everything except status changes)."""

    def __init__(
        self,
        store: IEntityStore,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        self.store = store
        self.audit = AuditRecorder(store.audit_logs)
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def create_document(
        self,
        actor: UserResult,
        title: str | None,
        content: str | None = None,
        department_id: str | None = None,
        participants: Participants | None = None,
        acl: Acl | None = None,
        tags: list[str] | None = None,
        due_at: datetime | None = None,
        assignees: WorkflowAssignees | None = None,
        context: AuditContext | None = None,
    ) -> DocumentResult:
        """Create a DRAFT document owned by actor, with its DRAFT workflow."""
        title = validate_title(title)
        participants = participants or Participants()
        async with self.store.transaction():
            if department_id and not await self.store.departments.get_by_id(department_id):
                raise ResourceNotFoundException("department", department_id)
            document = await self.store.documents.create(
                DocumentCreate(
                    title=title,
                    owner_uid=actor.id,
                    content=content or "",
                    department_id=department_id,
                    participants=participants,
                    acl=acl or Acl(),
                    tags=list(tags or []),
                    due_at=due_at,
                )
            )
            await self.store.workflows.create(
                document.id,
                assignees or WorkflowAssignees.from_participants(participants),
            )
            await self.audit.record(
                actor.id,
                AuditAction.DOCUMENT_CREATED.value,
                AuditTargetType.DOCUMENT.value,
                document.id,
                context=context,
                metadata={"title": document.title},
            )
        logger.info("Document %s created by %s", document.id, actor.id)
        return document

    async def edit_document(
        self,
        actor: UserResult,
        document_id: str,
        title: str | None = None,
        content: str | None = None,
        context: AuditContext | None = None,
    ) -> DocumentResult:
        """Update title and/or content while DRAFT or REJECTED (last write wins)."""
        if title is None and content is None:
            raise ValidationException("At least one of title or content is required")
        if title is not None:
            title = validate_title(title)
        async with self.store.transaction():
            document = await self.store.documents.get_by_id(document_id, for_update=True)
            if not document:
                raise ResourceNotFoundException("document", document_id)
            require(can_edit(document, actor), "document", "edit")
            _to_entity(document).ensure_editable()
            updated = await self.store.documents.update_content(
                document_id, title=title, content=content
            )
            if updated is None:
                raise ResourceNotFoundException("document", document_id)
            diff = changed_fields(
                {"title": document.title, "content": document.content},
                {
                    key: value
                    for key, value in (("title", title), ("content", content))
                    if value is not None
                },
            )
            await self.audit.record(
                actor.id,
                AuditAction.DOCUMENT_UPDATED.value,
                AuditTargetType.DOCUMENT.value,
                document_id,
                context=context,
                diff=diff or None,
            )
            return updated

    async def delete_document(
        self,
        actor: UserResult,
        document_id: str,
        context: AuditContext | None = None,
    ) -> None:
        """Delete document with versions, comments, workflow and tasks (ADMIN or owner)."""
        async with self.store.transaction():
            document = await self.store.documents.get_by_id(document_id, for_update=True)
            if not document:
                raise ResourceNotFoundException("document", document_id)
            require(
                is_admin(actor) or document.owner_uid == actor.id, "document", "delete"
            )
            await self.store.documents.delete(document_id)
            await self.audit.record(
                actor.id,
                AuditAction.DOCUMENT_DELETED.value,
                AuditTargetType.DOCUMENT.value,
                document_id,
                context=context,
                metadata={"title": document.title, "status": document.status.value},
            )
        logger.info("Document %s deleted by %s", document_id, actor.id)

    async def list_documents(
        self,
        actor: UserResult,
        status: DocumentStatus | None = None,
        department_id: str | None = None,
        owner_uid: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[DocumentListItem]:
        """List documents, newest updated first, enriched for display.

        Listing is not filtered by the access predicates; content is only
        returned by get_document, which checks can_access.
        """
        limit = min(limit or self.default_page_size, self.max_page_size)
        if limit < 1 or offset < 0:
            raise ValidationException("limit must be >= 1 and offset >= 0")
        documents = await self.store.documents.list_documents(
            DocumentFilter(
                status=status,
                department_id=department_id,
                owner_uid=owner_uid,
                search=(search or "").strip() or None,
                limit=limit,
                offset=offset,
            )
        )
        owners = await self.store.users.get_by_ids({d.owner_uid for d in documents})
        counts = await self.store.comments.count_by_documents([d.id for d in documents])
        items: list[DocumentListItem] = []
        for document in documents:
            label = DEFAULT_VERSION_LABEL
            if document.current_version_id:
                version = await self.store.versions.get_by_id(document.current_version_id)
                if version:
                    label = version.version_number
            owner = owners.get(document.owner_uid)
            items.append(
                DocumentListItem(
                    document=document,
                    owner=UserSummary.from_user(owner) if owner else None,
                    current_version=label,
                    comments_count=counts.get(document.id, 0),
                )
            )
        return items

    async def get_document(self, actor: UserResult, document_id: str) -> DocumentDetail:
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        require(can_access(document, actor), "document", "read")
        owner = await self.store.users.get_by_id(document.owner_uid)
        return DocumentDetail(
            document=document,
            owner=UserSummary.from_user(owner) if owner else None,
            versions=await self.store.versions.list_by_document(document_id),
            comments=await self.store.comments.list_by_document(document_id),
            workflow=await self.store.workflows.get_by_document(document_id),
        )
