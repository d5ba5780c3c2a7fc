"""Document, document version and comment ORM models."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import DocumentStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    JsonType,
    TimestampMixin,
)

_STATUS_VALUES = ", ".join(f"'{v}'" for v in DocumentStatus.values())


class Document(CuidMixin, TimestampMixin, Base):
    """Document. Table: document.

    status is written only together with workflow.state (see
    WorkflowRepository.record_transition). version_counter feeds the
    per-document version sequence.
    """

    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_uid: Mapped[str] = mapped_column(String, nullable=False, index=True)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DocumentStatus.DRAFT.value
    )
    current_version_id: Mapped[str | None] = mapped_column(String, nullable=True)
    tags: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    participants: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False, default=dict)
    acl: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False, default=dict)
    version_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_document_status"),
        Index("ix_document_status_updated", "status", "updated_at"),
    )


class DocumentVersion(CuidMixin, CreatedAtMixin, Base):
    """Immutable uploaded file version. Table: document_version."""

    __tablename__ = "document_version"

    doc_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    version_number: Mapped[str] = mapped_column(String(32), nullable=False)
    storage_path: Mapped[str] = mapped_column(String, nullable=False)
    sha256: Mapped[str] = mapped_column(String(64), nullable=False)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    change_summary: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("ux_document_version_sequence", "doc_id", "sequence", unique=True),
    )


class Comment(CuidMixin, CreatedAtMixin, Base):
    """Document comment. Table: comment."""

    __tablename__ = "comment"

    doc_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_uid: Mapped[str] = mapped_column(String, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
