"""Access control evaluator: pure predicates over (document, user).

ADMIN bypasses every document predicate. Per-document participant lists
grant access independently of global roles, except can_approve which also
honours the global APPROVER role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.enums import UserRole
from app.domain.exceptions import AuthorizationException

if TYPE_CHECKING:
    from app.application.dtos.document import DocumentResult
    from app.application.dtos.user import UserResult


def is_admin(user: UserResult | None) -> bool:
    return user is not None and UserRole.ADMIN.value in user.roles


def can_access(document: DocumentResult, user: UserResult | None) -> bool:
    """Read access: admin, owner, or anyone named in a participant list."""
    if user is None:
        return False
    if is_admin(user) or document.owner_uid == user.id:
        return True
    return user.id in document.participants.all_uids()


def can_edit(document: DocumentResult, user: UserResult | None) -> bool:
    """Content edits, versions and submission: admin, owner, or editor."""
    if user is None:
        return False
    if is_admin(user) or document.owner_uid == user.id:
        return True
    return user.id in document.participants.editors


def can_review(document: DocumentResult, user: UserResult | None) -> bool:
    if user is None:
        return False
    return is_admin(user) or user.id in document.participants.reviewers


def can_approve(document: DocumentResult, user: UserResult | None) -> bool:
    if user is None:
        return False
    if is_admin(user) or UserRole.APPROVER.value in user.roles:
        return True
    return user.id in document.participants.approvers


def require(allowed: bool, resource: str, action: str) -> None:
    """Raise AuthorizationException when a predicate result is False."""
    if not allowed:
        raise AuthorizationException(resource=resource, action=action)


def require_admin(user: UserResult | None, resource: str, action: str) -> None:
    require(is_admin(user), resource, action)
