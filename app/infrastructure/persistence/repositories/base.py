"""Base repository: shared session plumbing for the SQL repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


def paginate(stmt: Select[Any], offset: int, limit: int) -> Select[Any]:
    """Apply offset/limit; limit 0 returns every remaining row."""
    if offset:
        stmt = stmt.offset(offset)
    if limit > 0:
        stmt = stmt.limit(limit)
    return stmt


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with row lookup and insert/flush helpers.

    Subclasses map ORM rows to application DTOs; ORM objects never leave
    the repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_row(self, entity_id: str, for_update: bool = False) -> ModelType | None:
        """Return a single record by primary key, or None.

        for_update issues SELECT ... FOR UPDATE and refreshes any copy already
        in the identity map.
        """
        model: Any = self.model
        stmt = select(self.model).where(model.id == entity_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _scalars(self, stmt: Select[Any]) -> list[ModelType]:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
