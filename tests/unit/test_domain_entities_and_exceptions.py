"""Document and office session entities; exception error bodies."""

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.entities.document import DocumentEntity, validate_title
from app.domain.entities.office_session import OfficeSessionEntity
from app.domain.enums import DocumentStatus
from app.domain.exceptions import (
    InvalidOfficeSessionException,
    ResourceNotFoundException,
    StateConflictException,
    ValidationException,
)
from app.domain.value_objects import Participants

NOW = datetime(2026, 5, 1, 9, 0, tzinfo=UTC)


class TestValidateTitle:
    def test_strips(self) -> None:
        assert validate_title("  Budget  ") == "Budget"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_blank_is_rejected(self, title) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_title(title)
        assert exc_info.value.details == {"field": "title"}

    def test_too_long(self) -> None:
        validate_title("x" * 255)
        with pytest.raises(ValidationException):
            validate_title("x" * 256)


@pytest.mark.parametrize(
    "status,editable",
    [(s, s in {DocumentStatus.DRAFT, DocumentStatus.REJECTED}) for s in DocumentStatus],
)
def test_document_editable_only_in_draft_or_rejected(
    status: DocumentStatus, editable: bool
) -> None:
    entity = DocumentEntity(
        id="d", title="T", owner_uid="o", status=status, participants=Participants()
    )
    assert entity.is_editable() is editable
    if editable:
        entity.ensure_editable()
    else:
        with pytest.raises(StateConflictException):
            entity.ensure_editable()


class TestOfficeSessionEntity:
    def _session(self, *, active: bool = True, login_hours_ago: int = 1, ttl: int = 24):
        login = NOW - timedelta(hours=login_hours_ago)
        return OfficeSessionEntity(
            id="s",
            office_id="OFF-1",
            is_active=active,
            login_time=login,
            expires_at=login + timedelta(hours=ttl),
        )

    def test_valid_while_active_and_unexpired(self) -> None:
        assert self._session().is_valid(NOW)

    def test_invalid_when_inactive_or_expired(self) -> None:
        assert not self._session(active=False).is_valid(NOW)
        assert not self._session(login_hours_ago=25).is_valid(NOW)

    def test_expiry_boundary_is_exclusive(self) -> None:
        session = self._session(login_hours_ago=24)
        assert not session.is_valid(NOW)

    def test_stale_after_expiry_before_cutoff(self) -> None:
        cutoff = NOW - timedelta(hours=24)
        assert self._session(login_hours_ago=60).is_stale(cutoff)
        assert not self._session(login_hours_ago=30).is_stale(cutoff)

    def test_inactive_sessions_go_stale_by_login_time(self) -> None:
        cutoff = NOW - timedelta(hours=24)
        assert self._session(active=False, login_hours_ago=30, ttl=100).is_stale(cutoff)
        assert not self._session(active=False, login_hours_ago=2).is_stale(cutoff)


def test_exception_bodies_carry_stable_codes() -> None:
    assert ResourceNotFoundException("document", "d1").to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "document not found: d1",
        "details": {"resource_type": "document", "resource_id": "d1"},
    }
    assert InvalidOfficeSessionException().message == "Invalid or expired office session"
