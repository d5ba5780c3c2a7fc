"""Access predicates over (document, user)."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from app.application.dtos.document import DocumentResult
from app.application.dtos.user import UserResult
from app.application.services.access_control import (
    can_access,
    can_approve,
    can_edit,
    can_review,
    is_admin,
    require,
)
from app.domain.enums import DocumentStatus, UserRole
from app.domain.exceptions import AuthorizationException
from app.domain.value_objects import Acl, Participants

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _user(uid: str, *roles: UserRole) -> UserResult:
    return UserResult(
        id=uid,
        email=None,
        first_name=None,
        last_name=None,
        profile_image_url=None,
        roles=[r.value for r in roles],
        departments=[],
        office_id=None,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def document() -> DocumentResult:
    return DocumentResult(
        id="doc1",
        title="Budget",
        content="",
        owner_uid="owner",
        department_id=None,
        status=DocumentStatus.DRAFT,
        current_version_id=None,
        tags=[],
        due_at=None,
        participants=Participants(
            editors=["ed"], reviewers=["rev"], approvers=["appr"], viewers=["view"]
        ),
        acl=Acl(),
        version_counter=0,
        created_at=NOW,
        updated_at=NOW,
    )


def test_no_user_is_denied_everything(document) -> None:
    assert not can_access(document, None)
    assert not can_edit(document, None)
    assert not can_review(document, None)
    assert not can_approve(document, None)
    assert not is_admin(None)


def test_admin_passes_every_predicate(document) -> None:
    admin = _user("someone", UserRole.ADMIN)
    assert can_access(document, admin)
    assert can_edit(document, admin)
    assert can_review(document, admin)
    assert can_approve(document, admin)


@pytest.mark.parametrize("uid", ["owner", "ed", "rev", "appr", "view"])
def test_owner_and_participants_can_access(document, uid: str) -> None:
    assert can_access(document, _user(uid))


def test_stranger_cannot_access(document) -> None:
    assert not can_access(document, _user("stranger", UserRole.REVIEWER))


def test_edit_is_owner_or_editor_only(document) -> None:
    assert can_edit(document, _user("owner"))
    assert can_edit(document, _user("ed"))
    assert not can_edit(document, _user("rev"))
    assert not can_edit(document, _user("view"))


def test_review_requires_reviewer_list_not_global_role(document) -> None:
    assert can_review(document, _user("rev"))
    assert not can_review(document, _user("owner"))
    assert not can_review(document, _user("other", UserRole.REVIEWER))


def test_approve_honours_global_approver_role(document) -> None:
    assert can_approve(document, _user("appr"))
    assert can_approve(document, _user("other", UserRole.APPROVER))
    assert not can_approve(document, _user("owner"))
    assert not can_approve(document, _user("rev"))


def test_require_raises_permission_denied() -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        require(False, "document", "edit")
    assert exc_info.value.error_code == "PERMISSION_DENIED"
    assert exc_info.value.details == {"resource": "document", "action": "edit"}
    require(True, "document", "edit")


@pytest.mark.parametrize("role_list", ["editors", "reviewers", "approvers", "viewers"])
def test_adding_participants_never_revokes_access(document, role_list: str) -> None:
    users = [_user(uid) for uid in ("owner", "ed", "rev", "appr", "view", "new1", "new2")]
    granted = {u.id for u in users if can_access(document, u)}

    for uid in ("new1", "new2"):
        current = getattr(document.participants, role_list)
        document = replace(
            document,
            participants=replace(document.participants, **{role_list: [*current, uid]}),
        )
        now_granted = {u.id for u in users if can_access(document, u)}
        assert granted <= now_granted
        assert uid in now_granted
        granted = now_granted
