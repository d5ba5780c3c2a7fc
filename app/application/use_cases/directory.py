"""Directory: users synced from the identity provider, role management and departments."""

from __future__ import annotations

import logging

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.user import (
    DepartmentCreate,
    DepartmentResult,
    UserResult,
    UserUpsert,
)
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import require_admin
from app.application.services.audit_service import AuditRecorder
from app.domain.enums import AuditAction, AuditTargetType, UserRole
from app.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


class DirectoryService:
    def __init__(self, store: IEntityStore) -> None:
        self.store = store
        self.audit = AuditRecorder(store.audit_logs)

    async def sync_user(self, claims: UserUpsert) -> UserResult:
        """Upsert the authenticated user from token claims. Roles and office are kept."""
        async with self.store.transaction():
            return await self.store.users.upsert(claims)

    async def list_users(
        self,
        actor: UserResult,
        role: UserRole | None = None,
        office_id: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        require_admin(actor, "user", "list")
        return await self.store.users.list_users(
            role=role.value if role else None,
            office_id=office_id,
            skip=skip,
            limit=limit,
        )

    async def update_roles(
        self,
        actor: UserResult,
        user_id: str,
        roles: list[str],
        context: AuditContext | None = None,
    ) -> UserResult:
        """Replace a user's global roles (ADMIN only)."""
        unknown = sorted(set(roles) - set(UserRole.values()))
        if unknown:
            raise ValidationException(f"Unknown roles: {', '.join(unknown)}", field="roles")
        require_admin(actor, "user", "update_roles")
        ordered = [r for r in UserRole.values() if r in roles]
        async with self.store.transaction():
            user = await self.store.users.get_by_id(user_id)
            if not user:
                raise ResourceNotFoundException("user", user_id)
            updated = await self.store.users.update_roles(user_id, ordered)
            if updated is None:
                raise ResourceNotFoundException("user", user_id)
            await self.audit.record(
                actor.id,
                AuditAction.USER_ROLES_UPDATED.value,
                AuditTargetType.USER.value,
                user_id,
                context=context,
                diff={"roles": {"from": user.roles, "to": ordered}},
            )
        logger.info("User %s roles set to %s by %s", user_id, ordered, actor.id)
        return updated

    async def list_departments(self) -> list[DepartmentResult]:
        return await self.store.departments.list_all()

    async def create_department(
        self,
        actor: UserResult,
        name: str | None,
        members: list[str] | None = None,
        context: AuditContext | None = None,
    ) -> DepartmentResult:
        if not name or not name.strip():
            raise ValidationException("Department name is required", field="name")
        require_admin(actor, "department", "create")
        async with self.store.transaction():
            department = await self.store.departments.create(
                DepartmentCreate(name=name.strip(), members=list(members or []))
            )
            await self.audit.record(
                actor.id,
                AuditAction.DEPARTMENT_CREATED.value,
                AuditTargetType.DEPARTMENT.value,
                department.id,
                context=context,
                metadata={"name": department.name},
            )
        return department
