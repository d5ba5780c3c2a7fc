"""Directory (users, roles, departments) and the notification inbox."""

import pytest

from app.application.dtos.user import UserUpsert
from app.application.use_cases import DirectoryService, NotificationInboxService
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.services.notification_service import StoreNotificationService


@pytest.fixture
def directory(store) -> DirectoryService:
    return DirectoryService(store)


async def test_sync_user_keeps_roles(directory, make_user):
    await make_user("u1", UserRole.REVIEWER.value)
    user = await directory.sync_user(UserUpsert(id="u1", email="new@example.com", first_name="Ada"))
    assert user.email == "new@example.com"
    assert user.roles == ["REVIEWER"]
    assert user.display_name == "Ada"


async def test_update_roles_orders_and_audits(store, directory, make_user):
    admin = await make_user("admin", UserRole.ADMIN.value)
    await make_user("u1")
    user = await directory.update_roles(admin, "u1", ["VIEWER", "REVIEWER"])
    assert user.roles == ["REVIEWER", "VIEWER"]
    logs = await store.audit_logs.list_for_target("user", "u1")
    assert logs[0].diff == {"roles": {"from": [], "to": ["REVIEWER", "VIEWER"]}}


async def test_update_roles_rejects_unknown_and_non_admin(directory, make_user):
    admin = await make_user("admin", UserRole.ADMIN.value)
    officer = await make_user("officer", UserRole.OFFICER.value)
    with pytest.raises(ValidationException):
        await directory.update_roles(admin, "officer", ["SUPERUSER"])
    with pytest.raises(AuthorizationException):
        await directory.update_roles(officer, "officer", ["ADMIN"])
    with pytest.raises(ResourceNotFoundException):
        await directory.update_roles(admin, "ghost", ["VIEWER"])


async def test_list_users_by_role(directory, make_user):
    admin = await make_user("admin", UserRole.ADMIN.value)
    await make_user("r1", UserRole.REVIEWER.value)
    await make_user("v1", UserRole.VIEWER.value)
    reviewers = await directory.list_users(admin, role=UserRole.REVIEWER)
    assert [u.id for u in reviewers] == ["r1"]


async def test_departments(directory, make_user):
    admin = await make_user("admin", UserRole.ADMIN.value)
    await directory.create_department(admin, "Finance", members=["admin"])
    await directory.create_department(admin, "audit")
    assert [d.name for d in await directory.list_departments()] == ["audit", "Finance"]
    with pytest.raises(ValidationException):
        await directory.create_department(admin, " ")


async def test_inbox_lists_and_marks_own_notifications(store, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await StoreNotificationService(store).notify(
        ["alice", "bob"], "TASK_ASSIGNED", {"docId": "d1", "title": "T"}
    )
    inbox = NotificationInboxService(store)

    [note] = await inbox.list_notifications(alice)
    assert note.payload == {"docId": "d1", "title": "T"}
    assert note.read is False
    with pytest.raises(AuthorizationException):
        await inbox.mark_read(bob, note.id)
    assert (await inbox.mark_read(alice, note.id)).read is True
    assert await inbox.list_notifications(alice, unread_only=True) == []
