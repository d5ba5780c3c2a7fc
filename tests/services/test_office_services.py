"""Offices, office sessions and messages over the memory store."""

from datetime import timedelta

import pytest

from app.application.use_cases.offices import (
    MessageService,
    OfficeService,
    OfficeSessionManager,
    hash_session_token,
)
from app.domain.enums import MessageType, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidOfficeSessionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import utc_now


class PlainHasher:
    """Reversible stand-in so tests do not pay for bcrypt rounds."""

    def hash_password(self, password: str) -> str:
        return f"plain:{password}"

    def verify_password(self, password: str, hashed: str | None) -> bool:
        return hashed == f"plain:{password}"


@pytest.fixture
def offices(store) -> OfficeService:
    return OfficeService(store, PlainHasher())


@pytest.fixture
def sessions(store) -> OfficeSessionManager:
    return OfficeSessionManager(store, PlainHasher(), ttl_hours=24, retention_hours=24)


@pytest.fixture
async def admin(make_user):
    return await make_user("admin", UserRole.ADMIN.value)


@pytest.fixture
async def registry(offices, admin):
    return await offices.create_office(
        admin, "OFF-REG", "Registry", "REG-01", "s3cret", description="Front desk"
    )


class TestOfficeAdministration:
    async def test_create_stores_hash_not_password(self, registry):
        assert registry.office_password_hash == "plain:s3cret"
        assert registry.office_code == "REG-01"

    async def test_duplicate_code_conflicts(self, offices, admin, registry):
        with pytest.raises(ConflictException) as exc_info:
            await offices.create_office(admin, "OFF-2", "Other", "REG-01", "pw")
        assert exc_info.value.details == {"field": "office_code"}

    async def test_duplicate_office_id_conflicts(self, offices, admin, registry):
        with pytest.raises(ConflictException):
            await offices.create_office(admin, "OFF-REG", "Other", "X-1", "pw")

    @pytest.mark.parametrize("field", ["office_id", "name", "office_code", "password"])
    async def test_required_fields(self, offices, admin, field):
        values = {"office_id": "O", "name": "N", "office_code": "C", "password": "P"}
        values[field] = "  "
        with pytest.raises(ValidationException):
            await offices.create_office(admin, **values)

    async def test_non_admin_cannot_create(self, offices, make_user):
        officer = await make_user("officer", UserRole.OFFICER.value)
        with pytest.raises(AuthorizationException):
            await offices.create_office(officer, "O", "N", "C", "P")

    async def test_update_rehashes_password(self, offices, admin, registry):
        updated = await offices.update_office(admin, registry.id, password="new-pw", name="Reg")
        assert updated.office_password_hash == "plain:new-pw"
        assert updated.name == "Reg"

    async def test_assign_user_moves_membership(self, store, offices, admin, registry, make_user):
        other = await offices.create_office(admin, "OFF-ARC", "Archive", "ARC-01", "pw")
        await make_user("clerk")
        await offices.assign_user(admin, "clerk", "OFF-REG")
        user = await offices.assign_user(admin, "clerk", "OFF-ARC")

        assert user.office_id == "OFF-ARC"
        assert "clerk" not in (await store.offices.get_by_id(registry.id)).members
        assert "clerk" in (await store.offices.get_by_id(other.id)).members

    async def test_delete_clears_member_profiles(self, store, offices, admin, registry, make_user):
        await make_user("clerk")
        await offices.assign_user(admin, "clerk", "OFF-REG")
        await offices.delete_office(admin, registry.id)
        assert (await store.users.get_by_id("clerk")).office_id is None
        with pytest.raises(ResourceNotFoundException):
            await offices.delete_office(admin, registry.id)


class TestOfficeSessions:
    async def test_login_returns_raw_token_and_stores_digest(self, store, sessions, registry):
        result = await sessions.login("REG-01", "s3cret", ip_address="10.1.1.1")

        assert result.office.office_id == "OFF-REG"
        stored = await store.office_sessions.get_by_token_hash(hash_session_token(result.session_token))
        assert stored is not None
        assert stored.token_hash != result.session_token
        assert stored.ip_address == "10.1.1.1"
        assert (await sessions.validate(result.session_token)).office_id == "OFF-REG"

    @pytest.mark.parametrize("code,password", [("REG-01", "wrong"), ("NOPE", "s3cret")])
    async def test_bad_credentials_share_one_message(self, sessions, registry, code, password):
        with pytest.raises(AuthenticationException) as exc_info:
            await sessions.login(code, password)
        assert exc_info.value.message == "Invalid office code or password"

    async def test_missing_credentials(self, sessions):
        with pytest.raises(ValidationException):
            await sessions.login("", None)

    @pytest.mark.parametrize("token", [None, "", "not-a-token"])
    async def test_unknown_tokens_are_invalid(self, sessions, token):
        with pytest.raises(InvalidOfficeSessionException):
            await sessions.validate(token)

    async def test_expired_session_is_invalid(self, store, registry):
        manager = OfficeSessionManager(store, PlainHasher(), ttl_hours=0)
        result = await manager.login("REG-01", "s3cret")
        with pytest.raises(InvalidOfficeSessionException):
            await manager.validate(result.session_token)

    async def test_logout_invalidates(self, sessions, registry):
        result = await sessions.login("REG-01", "s3cret")
        await sessions.logout(result.session_token)
        with pytest.raises(InvalidOfficeSessionException):
            await sessions.validate(result.session_token)
        with pytest.raises(InvalidOfficeSessionException):
            await sessions.logout("unknown")

    async def test_sweep_removes_only_stale_sessions(self, store, sessions, registry):
        old = await sessions.login("REG-01", "s3cret")
        await sessions.logout(old.session_token)
        live = await sessions.login("REG-01", "s3cret")

        assert await sessions.sweep() == 0
        removed = await sessions.sweep(now=utc_now() + timedelta(hours=49))
        assert removed == 2
        assert await store.office_sessions.get_by_token_hash(
            hash_session_token(live.session_token)
        ) is None


class TestMessagesAndDashboards:
    async def test_office_message_requires_target(self, store, admin):
        with pytest.raises(ValidationException):
            await MessageService(store).create_message(
                admin, "Notice", "Body", MessageType.OFFICE_SPECIFIC
            )

    async def test_general_memo_drops_target(self, store, admin, registry):
        memo = await MessageService(store).create_message(
            admin, "All staff", "Body", MessageType.GENERAL_MEMO, target_office_id="OFF-REG"
        )
        assert memo.target_office_id is None

    async def test_session_dashboard_counts_unread(self, store, offices, admin, registry):
        messages = MessageService(store)
        direct = await messages.create_message(
            admin, "Files due", "Friday", MessageType.OFFICE_SPECIFIC, "OFF-REG"
        )
        await messages.create_message(admin, "Holiday", "Monday off")

        dashboard = await offices.session_dashboard("OFF-REG", "OFF-REG")
        assert dashboard.stats == {"totalMembers": 0, "totalMessages": 2, "unreadMessages": 2}

        read = await messages.mark_read_by_office("OFF-REG", direct.id)
        assert read.is_read == {"office_OFF-REG": True}
        dashboard = await offices.session_dashboard("OFF-REG", "OFF-REG")
        assert dashboard.stats["unreadMessages"] == 1

    async def test_session_cannot_read_other_office(self, offices, registry):
        with pytest.raises(AuthorizationException):
            await offices.session_dashboard("OFF-OTHER", "OFF-REG")

    async def test_user_dashboard_for_members_only(self, offices, admin, registry, make_user):
        clerk = await make_user("clerk")
        with pytest.raises(AuthorizationException):
            await offices.user_dashboard(clerk, "OFF-REG")
        clerk = await offices.assign_user(admin, "clerk", "OFF-REG")
        dashboard = await offices.user_dashboard(clerk, "OFF-REG")
        assert [m.id for m in dashboard.members] == ["clerk"]
        assert dashboard.stats == {"totalMembers": 1, "totalDocuments": 0}

    async def test_mark_read_unknown_message(self, store):
        with pytest.raises(ResourceNotFoundException):
            await MessageService(store).mark_read("missing", "u1")
