"""Document, version and comment repositories.

Implement IDocumentRepository, IDocumentVersionRepository and ICommentRepository.
"""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.document import (
    CommentCreate,
    CommentResult,
    DocumentCreate,
    DocumentFilter,
    DocumentResult,
    VersionCreate,
    VersionResult,
)
from app.domain.enums import DocumentStatus
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects import Acl, Participants
from app.infrastructure.persistence.models.document import (
    Comment,
    Document,
    DocumentVersion,
)
from app.infrastructure.persistence.repositories.base import BaseRepository, paginate
from app.shared.utils.datetime import utc_now


def _to_result(d: Document) -> DocumentResult:
    """Map Document ORM to DocumentResult DTO."""
    return DocumentResult(
        id=d.id,
        title=d.title,
        content=d.content or "",
        owner_uid=d.owner_uid,
        department_id=d.department_id,
        status=DocumentStatus(d.status),
        current_version_id=d.current_version_id,
        tags=list(d.tags or []),
        due_at=d.due_at,
        participants=Participants.from_dict(d.participants),
        acl=Acl.from_dict(d.acl),
        version_counter=d.version_counter,
        created_at=d.created_at,
        updated_at=d.updated_at,
    )


class DocumentRepository(BaseRepository[Document]):
    """Document repository. Implements IDocumentRepository (no status writer)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def create(self, data: DocumentCreate) -> DocumentResult:
        row = Document(
            title=data.title,
            content=data.content,
            owner_uid=data.owner_uid,
            department_id=data.department_id,
            status=DocumentStatus.DRAFT.value,
            tags=list(data.tags),
            due_at=data.due_at,
            participants=data.participants.to_dict(),
            acl=data.acl.to_dict(),
            version_counter=0,
        )
        return _to_result(await self._add(row))

    async def get_by_id(
        self, document_id: str, for_update: bool = False
    ) -> DocumentResult | None:
        row = await self._get_row(document_id, for_update=for_update)
        return _to_result(row) if row else None

    async def list_documents(self, filters: DocumentFilter) -> list[DocumentResult]:
        stmt = select(Document)
        if filters.status is not None:
            stmt = stmt.where(Document.status == filters.status.value)
        if filters.department_id is not None:
            stmt = stmt.where(Document.department_id == filters.department_id)
        if filters.owner_uid is not None:
            stmt = stmt.where(Document.owner_uid == filters.owner_uid)
        if filters.search:
            stmt = stmt.where(Document.title.icontains(filters.search, autoescape=True))
        stmt = stmt.order_by(Document.updated_at.desc(), Document.created_at.desc())
        stmt = paginate(stmt, filters.offset, filters.limit)
        return [_to_result(row) for row in await self._scalars(stmt)]

    async def count_by_owners(self, owner_uids: set[str]) -> int:
        if not owner_uids:
            return 0
        result = await self.db.execute(
            select(func.count()).select_from(Document).where(Document.owner_uid.in_(owner_uids))
        )
        return int(result.scalar_one())

    async def update_content(
        self,
        document_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> DocumentResult | None:
        row = await self._get_row(document_id, for_update=True)
        if row is None:
            return None
        if title is not None:
            row.title = title
        if content is not None:
            row.content = content
        row.updated_at = utc_now()
        return _to_result(await self._save(row))

    async def next_version_sequence(self, document_id: str) -> int:
        """UPDATE ... RETURNING so concurrent uploads never share a sequence."""
        result = await self.db.execute(
            update(Document)
            .where(Document.id == document_id)
            .values(version_counter=Document.version_counter + 1)
            .returning(Document.version_counter)
        )
        sequence = result.scalar_one_or_none()
        if sequence is None:
            raise ResourceNotFoundException("document", document_id)
        return int(sequence)

    async def set_current_version(
        self, document_id: str, version_id: str
    ) -> DocumentResult | None:
        row = await self._get_row(document_id, for_update=True)
        if row is None:
            return None
        row.current_version_id = version_id
        row.updated_at = utc_now()
        return _to_result(await self._save(row))

    async def delete(self, document_id: str) -> bool:
        """Versions, comments, workflow and tasks go with the row (ON DELETE CASCADE)."""
        result = await self.db.execute(
            delete(Document)
            .where(Document.id == document_id)
            .execution_options(synchronize_session="fetch")
        )
        return (result.rowcount or 0) > 0


def _version_to_result(v: DocumentVersion) -> VersionResult:
    """Map DocumentVersion ORM to VersionResult DTO."""
    return VersionResult(
        id=v.id,
        doc_id=v.doc_id,
        sequence=v.sequence,
        version_number=v.version_number,
        storage_path=v.storage_path,
        sha256=v.sha256,
        created_by=v.created_by,
        file_name=v.file_name,
        file_size=v.file_size,
        mime_type=v.mime_type,
        change_summary=v.change_summary,
        created_at=v.created_at,
    )


class DocumentVersionRepository(BaseRepository[DocumentVersion]):
    """Immutable version rows. Implements IDocumentVersionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DocumentVersion)

    async def create(self, data: VersionCreate) -> VersionResult:
        row = DocumentVersion(
            doc_id=data.doc_id,
            sequence=data.sequence,
            version_number=data.version_number,
            storage_path=data.storage_path,
            sha256=data.sha256,
            created_by=data.created_by,
            file_name=data.file_name,
            file_size=data.file_size,
            mime_type=data.mime_type,
            change_summary=data.change_summary,
        )
        return _version_to_result(await self._add(row))

    async def get_by_id(self, version_id: str) -> VersionResult | None:
        row = await self._get_row(version_id)
        return _version_to_result(row) if row else None

    async def list_by_document(self, document_id: str) -> list[VersionResult]:
        stmt = (
            select(DocumentVersion)
            .where(DocumentVersion.doc_id == document_id)
            .order_by(DocumentVersion.created_at.desc(), DocumentVersion.sequence.desc())
        )
        return [_version_to_result(row) for row in await self._scalars(stmt)]

    async def get_latest(self, document_id: str) -> VersionResult | None:
        stmt = (
            select(DocumentVersion)
            .where(DocumentVersion.doc_id == document_id)
            .order_by(DocumentVersion.created_at.desc(), DocumentVersion.sequence.desc())
            .limit(1)
        )
        rows = await self._scalars(stmt)
        return _version_to_result(rows[0]) if rows else None


def _comment_to_result(c: Comment) -> CommentResult:
    return CommentResult(
        id=c.id,
        doc_id=c.doc_id,
        author_uid=c.author_uid,
        body=c.body,
        resolved=c.resolved,
        created_at=c.created_at,
    )


class CommentRepository(BaseRepository[Comment]):
    """Comment repository. Implements ICommentRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Comment)

    async def create(self, data: CommentCreate) -> CommentResult:
        row = Comment(doc_id=data.doc_id, author_uid=data.author_uid, body=data.body)
        return _comment_to_result(await self._add(row))

    async def get_by_id(self, comment_id: str) -> CommentResult | None:
        row = await self._get_row(comment_id)
        return _comment_to_result(row) if row else None

    async def list_by_document(self, document_id: str) -> list[CommentResult]:
        stmt = (
            select(Comment)
            .where(Comment.doc_id == document_id)
            .order_by(Comment.created_at, Comment.id)
        )
        return [_comment_to_result(row) for row in await self._scalars(stmt)]

    async def count_by_documents(self, document_ids: list[str]) -> dict[str, int]:
        counts = dict.fromkeys(document_ids, 0)
        if not document_ids:
            return counts
        result = await self.db.execute(
            select(Comment.doc_id, func.count())
            .where(Comment.doc_id.in_(document_ids))
            .group_by(Comment.doc_id)
        )
        for doc_id, count in result.all():
            counts[doc_id] = int(count)
        return counts

    async def set_resolved(self, comment_id: str, resolved: bool) -> CommentResult | None:
        row = await self._get_row(comment_id, for_update=True)
        if row is None:
            return None
        row.resolved = resolved
        return _comment_to_result(await self._save(row))
