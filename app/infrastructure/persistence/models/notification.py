"""Notification ORM model."""

from typing import Any

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin, JsonType


class Notification(CuidMixin, CreatedAtMixin, Base):
    """In-app notification for one user. Table: notification."""

    __tablename__ = "notification"

    to_uid: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False, default=dict)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_notification_to_uid_read", "to_uid", "read"),)
