"""Office administration and office dashboards (user path and session path)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.office import (
    MessageResult,
    OfficeCreate,
    OfficeResult,
    OfficeUpdate,
)
from app.application.dtos.user import UserResult
from app.application.interfaces.services import IPasswordHasher
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import is_admin, require, require_admin
from app.application.services.audit_service import AuditRecorder
from app.domain.enums import AuditAction, AuditTargetType
from app.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def office_reader_key(office_id: str) -> str:
    """Reader key under which a session-path office marks messages read."""
    return f"office_{office_id}"


@dataclass(frozen=True)
class OfficeDashboard:
    office: OfficeResult
    members: list[UserResult]
    messages: list[MessageResult] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)


def _required(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ValidationException(f"{name} is required", field=name)
    return value.strip()


class OfficeService:
    """Admin-only office CRUD and member assignment, plus office dashboards."""

    def __init__(self, store: IEntityStore, hasher: IPasswordHasher) -> None:
        self.store = store
        self.hasher = hasher
        self.audit = AuditRecorder(store.audit_logs)

    async def list_offices(self, actor: UserResult) -> list[OfficeResult]:
        require_admin(actor, "office", "list")
        return await self.store.offices.list_all()

    async def create_office(
        self,
        actor: UserResult,
        office_id: str | None,
        name: str | None,
        office_code: str | None,
        password: str | None,
        description: str | None = None,
        head_user_id: str | None = None,
        admin_users: list[str] | None = None,
        members: list[str] | None = None,
        department_id: str | None = None,
        context: AuditContext | None = None,
    ) -> OfficeResult:
        """Create an office; office_id and office_code must be unique."""
        office_id = _required(office_id, "office_id")
        name = _required(name, "name")
        office_code = _required(office_code, "office_code")
        password = _required(password, "password")
        require_admin(actor, "office", "create")
        password_hash = await asyncio.to_thread(self.hasher.hash_password, password)
        async with self.store.transaction():
            if await self.store.offices.get_by_office_id(office_id):
                raise ConflictException(f"Office {office_id} already exists", field="office_id")
            if await self.store.offices.get_by_code(office_code):
                raise ConflictException("Office code already in use", field="office_code")
            office = await self.store.offices.create(
                OfficeCreate(
                    office_id=office_id,
                    name=name,
                    office_code=office_code,
                    office_password_hash=password_hash,
                    description=description,
                    head_user_id=head_user_id,
                    admin_users=list(admin_users or []),
                    members=list(members or []),
                    department_id=department_id,
                )
            )
            await self.audit.record(
                actor.id,
                AuditAction.OFFICE_CREATED.value,
                AuditTargetType.OFFICE.value,
                office.id,
                context=context,
                metadata={"officeId": office.office_id, "name": office.name},
            )
        logger.info("Office %s created by %s", office.office_id, actor.id)
        return office

    async def update_office(
        self,
        actor: UserResult,
        id: str,
        name: str | None = None,
        description: str | None = None,
        office_code: str | None = None,
        password: str | None = None,
        head_user_id: str | None = None,
        admin_users: list[str] | None = None,
        members: list[str] | None = None,
        department_id: str | None = None,
        context: AuditContext | None = None,
    ) -> OfficeResult:
        """Partial update; a new password is re-hashed, the code stays unique."""
        if name is not None:
            name = _required(name, "name")
        if office_code is not None:
            office_code = _required(office_code, "office_code")
        if password is not None:
            password = _required(password, "password")
        require_admin(actor, "office", "update")
        password_hash = None
        if password is not None:
            password_hash = await asyncio.to_thread(self.hasher.hash_password, password)
        async with self.store.transaction():
            existing = await self.store.offices.get_by_id(id)
            if not existing:
                raise ResourceNotFoundException("office", id)
            if office_code is not None and office_code != existing.office_code:
                clash = await self.store.offices.get_by_code(office_code)
                if clash and clash.id != id:
                    raise ConflictException("Office code already in use", field="office_code")
            changes = OfficeUpdate(
                name=name,
                description=description,
                office_code=office_code,
                office_password_hash=password_hash,
                head_user_id=head_user_id,
                admin_users=admin_users,
                members=members,
                department_id=department_id,
            )
            updated = await self.store.offices.update(id, changes)
            if updated is None:
                raise ResourceNotFoundException("office", id)
            changed = sorted(
                key
                for key, value in asdict(changes).items()
                if value is not None and key != "office_password_hash"
            )
            if password_hash is not None:
                changed.append("password")
            await self.audit.record(
                actor.id,
                AuditAction.OFFICE_UPDATED.value,
                AuditTargetType.OFFICE.value,
                id,
                context=context,
                metadata={"fields": changed},
            )
            return updated

    async def delete_office(
        self, actor: UserResult, id: str, context: AuditContext | None = None
    ) -> None:
        """Delete an office and clear it from its members' profiles."""
        require_admin(actor, "office", "delete")
        async with self.store.transaction():
            office = await self.store.offices.get_by_id(id)
            if not office:
                raise ResourceNotFoundException("office", id)
            for member in await self.store.users.list_users(office_id=office.office_id, limit=0):
                await self.store.users.assign_office(member.id, None)
            await self.store.offices.delete(id)
            await self.audit.record(
                actor.id,
                AuditAction.OFFICE_DELETED.value,
                AuditTargetType.OFFICE.value,
                id,
                context=context,
                metadata={"officeId": office.office_id},
            )
        logger.info("Office %s deleted by %s", office.office_id, actor.id)

    async def assign_user(
        self,
        actor: UserResult,
        user_id: str,
        office_id: str | None,
        context: AuditContext | None = None,
    ) -> UserResult:
        """Move a user into the office with business key office_id."""
        office_id = _required(office_id, "office_id")
        require_admin(actor, "user", "assign_office")
        async with self.store.transaction():
            office = await self.store.offices.get_by_office_id(office_id)
            if not office:
                raise ResourceNotFoundException("office", office_id)
            user = await self.store.users.get_by_id(user_id)
            if not user:
                raise ResourceNotFoundException("user", user_id)
            previous = user.office_id
            if previous and previous != office_id:
                old = await self.store.offices.get_by_office_id(previous)
                if old and user_id in old.members:
                    await self.store.offices.update(
                        old.id, OfficeUpdate(members=[m for m in old.members if m != user_id])
                    )
            if user_id not in office.members:
                await self.store.offices.update(
                    office.id, OfficeUpdate(members=[*office.members, user_id])
                )
            updated = await self.store.users.assign_office(user_id, office_id)
            if updated is None:
                raise ResourceNotFoundException("user", user_id)
            await self.audit.record(
                actor.id,
                AuditAction.USER_OFFICE_ASSIGNED.value,
                AuditTargetType.USER.value,
                user_id,
                context=context,
                diff={"office_id": {"from": previous, "to": office_id}},
            )
        logger.info("User %s assigned to office %s by %s", user_id, office_id, actor.id)
        return updated

    async def _load_by_office_id(self, office_id: str) -> OfficeResult:
        office = await self.store.offices.get_by_office_id(office_id)
        if not office:
            raise ResourceNotFoundException("office", office_id)
        return office

    async def user_dashboard(self, actor: UserResult, office_id: str) -> OfficeDashboard:
        """Dashboard for a signed-in member of the office (or ADMIN)."""
        if not is_admin(actor) and actor.office_id != office_id:
            raise AuthorizationException(message="Access denied to this office")
        office = await self._load_by_office_id(office_id)
        members = await self.store.users.list_users(office_id=office_id, limit=0)
        documents = await self.store.documents.count_by_owners({m.id for m in members})
        return OfficeDashboard(
            office=office,
            members=members,
            stats={"totalMembers": len(members), "totalDocuments": documents},
        )

    async def session_dashboard(
        self, session_office_id: str, office_id: str
    ) -> OfficeDashboard:
        """Dashboard for an office session; the session must belong to office_id."""
        if session_office_id != office_id:
            raise AuthorizationException(message="Access denied to this office")
        office = await self._load_by_office_id(office_id)
        members = await self.store.users.list_users(office_id=office_id, limit=0)
        messages = await self.store.messages.list_messages(
            target_office_id=office_id, include_general=True
        )
        reader = office_reader_key(office_id)
        unread = sum(1 for m in messages if not m.is_read.get(reader))
        return OfficeDashboard(
            office=office,
            members=members,
            messages=messages,
            stats={
                "totalMembers": len(members),
                "totalMessages": len(messages),
                "unreadMessages": unread,
            },
        )
