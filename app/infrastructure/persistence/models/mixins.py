"""SQLAlchemy mixins and column types for common model patterns (DRY).

Provides: CuidMixin, CreatedAtMixin, TimestampMixin and JsonType (JSONB on
PostgreSQL, plain JSON elsewhere).
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

JsonType = JSON().with_variant(JSONB(), "postgresql")


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CreatedAtMixin:
    """Mixin for an immutable created_at (set in Python so rows in one transaction still order)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at (timezone-aware)."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
            nullable=False,
        )
