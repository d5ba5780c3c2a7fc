"""User and department repositories. Implement IUserRepository and IDepartmentRepository."""

from __future__ import annotations

from sqlalchemy import cast, func, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import (
    DepartmentCreate,
    DepartmentResult,
    UserResult,
    UserUpsert,
)
from app.infrastructure.persistence.models.user import Department, User
from app.infrastructure.persistence.repositories.base import BaseRepository, paginate


def _to_result(u: User) -> UserResult:
    """Map User ORM to UserResult DTO."""
    return UserResult(
        id=u.id,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        profile_image_url=u.profile_image_url,
        roles=list(u.roles or []),
        departments=list(u.departments or []),
        office_id=u.office_id,
        created_at=u.created_at,
        updated_at=u.updated_at,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self._get_row(user_id)
        return _to_result(row) if row else None

    async def get_by_ids(self, user_ids: set[str]) -> dict[str, UserResult]:
        if not user_ids:
            return {}
        rows = await self._scalars(select(User).where(User.id.in_(user_ids)))
        return {row.id: _to_result(row) for row in rows}

    async def upsert(self, data: UserUpsert) -> UserResult:
        """Insert on first sight; later calls refresh non-None profile claims only."""
        row = await self._get_row(data.id, for_update=True)
        if row is None:
            row = User(
                id=data.id,
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                profile_image_url=data.profile_image_url,
                roles=[],
                departments=[],
            )
            return _to_result(await self._add(row))
        for attr in ("email", "first_name", "last_name", "profile_image_url"):
            value = getattr(data, attr)
            if value is not None:
                setattr(row, attr, value)
        return _to_result(await self._save(row))

    async def list_users(
        self,
        role: str | None = None,
        office_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        stmt = select(User)
        if role is not None:
            stmt = stmt.where(cast(User.roles, JSONB).contains([role]))
        if office_id is not None:
            stmt = stmt.where(User.office_id == office_id)
        stmt = paginate(stmt.order_by(User.created_at, User.id), skip, limit)
        return [_to_result(row) for row in await self._scalars(stmt)]

    async def update_roles(self, user_id: str, roles: list[str]) -> UserResult | None:
        row = await self._get_row(user_id, for_update=True)
        if row is None:
            return None
        row.roles = list(roles)
        return _to_result(await self._save(row))

    async def assign_office(self, user_id: str, office_id: str | None) -> UserResult | None:
        row = await self._get_row(user_id, for_update=True)
        if row is None:
            return None
        row.office_id = office_id
        return _to_result(await self._save(row))


def _department_to_result(d: Department) -> DepartmentResult:
    return DepartmentResult(
        id=d.id,
        name=d.name,
        members=list(d.members or []),
        created_at=d.created_at,
    )


class DepartmentRepository(BaseRepository[Department]):
    """Department repository. Implements IDepartmentRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def get_by_id(self, department_id: str) -> DepartmentResult | None:
        row = await self._get_row(department_id)
        return _department_to_result(row) if row else None

    async def list_all(self) -> list[DepartmentResult]:
        rows = await self._scalars(select(Department).order_by(func.lower(Department.name)))
        return [_department_to_result(row) for row in rows]

    async def create(self, data: DepartmentCreate) -> DepartmentResult:
        row = Department(name=data.name, members=list(data.members))
        return _department_to_result(await self._add(row))
