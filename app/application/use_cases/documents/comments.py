"""Document comments: add, list and resolve."""

from __future__ import annotations

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.document import CommentCreate, CommentResult, DocumentResult
from app.application.dtos.user import UserResult
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import can_access, can_edit, require
from app.application.services.audit_service import AuditRecorder
from app.domain.enums import AuditAction, AuditTargetType
from app.domain.exceptions import ResourceNotFoundException, ValidationException

COMMENT_MAX_LENGTH = 10_000


class CommentService:
    """Comments are allowed in every status; anyone with read access may comment."""

    def __init__(self, store: IEntityStore) -> None:
        self.store = store
        self.audit = AuditRecorder(store.audit_logs)

    async def _load_document(self, document_id: str) -> DocumentResult:
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def add_comment(
        self,
        actor: UserResult,
        document_id: str,
        body: str | None,
        context: AuditContext | None = None,
    ) -> CommentResult:
        if body is None or not body.strip():
            raise ValidationException("Comment body is required", field="body")
        if len(body) > COMMENT_MAX_LENGTH:
            raise ValidationException(
                f"Comment must be at most {COMMENT_MAX_LENGTH} characters", field="body"
            )
        async with self.store.transaction():
            document = await self._load_document(document_id)
            require(can_access(document, actor), "document", "comment")
            comment = await self.store.comments.create(
                CommentCreate(doc_id=document_id, author_uid=actor.id, body=body.strip())
            )
            await self.audit.record(
                actor.id,
                AuditAction.ADD_COMMENT.value,
                AuditTargetType.DOCUMENT.value,
                document_id,
                context=context,
                metadata={"commentId": comment.id},
            )
            return comment

    async def list_comments(
        self, actor: UserResult, document_id: str
    ) -> list[CommentResult]:
        """Comments oldest first."""
        document = await self._load_document(document_id)
        require(can_access(document, actor), "document", "read")
        return await self.store.comments.list_by_document(document_id)

    async def set_resolved(
        self,
        actor: UserResult,
        document_id: str,
        comment_id: str,
        resolved: bool,
        context: AuditContext | None = None,
    ) -> CommentResult:
        """Resolve or reopen a comment (its author, or anyone who can edit the document)."""
        async with self.store.transaction():
            document = await self._load_document(document_id)
            comment = await self.store.comments.get_by_id(comment_id)
            if not comment or comment.doc_id != document_id:
                raise ResourceNotFoundException("comment", comment_id)
            require(
                comment.author_uid == actor.id or can_edit(document, actor),
                "comment",
                "update",
            )
            updated = await self.store.comments.set_resolved(comment_id, resolved)
            if updated is None:
                raise ResourceNotFoundException("comment", comment_id)
            await self.audit.record(
                actor.id,
                AuditAction.COMMENT_UPDATED.value,
                AuditTargetType.DOCUMENT.value,
                document_id,
                context=context,
                diff={"resolved": {"from": comment.resolved, "to": resolved}},
                metadata={"commentId": comment_id},
            )
            return updated
