"""Office, office message and office session ORM models."""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import MessagePriority
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    JsonType,
    TimestampMixin,
)
from app.shared.utils.datetime import utc_now


class Office(CuidMixin, TimestampMixin, Base):
    """Office with a shared login code/password. Table: office."""

    __tablename__ = "office"

    office_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    office_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    office_password_hash: Mapped[str] = mapped_column(String, nullable=False)
    head_user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    admin_users: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    members: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    department_id: Mapped[str | None] = mapped_column(String, nullable=True)


class OfficeMessage(CuidMixin, TimestampMixin, Base):
    """Office-targeted message or general memo. Table: office_message."""

    __tablename__ = "office_message"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sender_user_id: Mapped[str] = mapped_column(String, nullable=False)
    message_type: Mapped[str] = mapped_column(String(32), nullable=False)
    target_office_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_read: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False, default=dict)
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=MessagePriority.NORMAL.value
    )

    __table_args__ = (
        Index("ix_office_message_target", "target_office_id", "created_at"),
        Index("ix_office_message_type", "message_type"),
    )


class OfficeSession(CuidMixin, Base):
    """Office login session. Only the SHA-256 of the bearer token is stored."""

    __tablename__ = "office_session"

    office_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    login_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
