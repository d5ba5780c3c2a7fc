"""User and department ORM models.

Users are synced from identity-provider claims; the id is the provider's
subject. Roles are global and additive.
"""

from typing import Any

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    JsonType,
    TimestampMixin,
)


class User(TimestampMixin, Base):
    """User model. Table: app_user. office_id is an Office business key, not an FK."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    roles: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    departments: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
    office_id: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (Index("ix_app_user_office_id", "office_id"),)


class Department(CuidMixin, CreatedAtMixin, Base):
    """Department. Table: department."""

    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    members: Mapped[list[Any]] = mapped_column(JsonType, nullable=False, default=list)
