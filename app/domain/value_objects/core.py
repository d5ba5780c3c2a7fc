"""Domain value objects for the docflow application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?$")


def _uid_list(raw: Any) -> list[str]:
    """Normalize a JSON value into a de-duplicated list of non-empty uid strings (order kept)."""
    if not raw:
        return []
    seen: set[str] = set()
    out: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        uid = item.strip()
        if uid and uid not in seen:
            seen.add(uid)
            out.append(uid)
    return out


@dataclass(frozen=True)
class Participants:
    """Per-document role memberships, distinct from global user roles.

    The four lists are disjoint by convention only; nothing prevents a uid
    from appearing in more than one.
    """

    editors: list[str] = field(default_factory=list)
    reviewers: list[str] = field(default_factory=list)
    approvers: list[str] = field(default_factory=list)
    viewers: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Participants:
        """Build from a JSON column / request body; missing lists default to empty."""
        data = data or {}
        return cls(
            editors=_uid_list(data.get("editors")),
            reviewers=_uid_list(data.get("reviewers")),
            approvers=_uid_list(data.get("approvers")),
            viewers=_uid_list(data.get("viewers")),
        )

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "editors": list(self.editors),
            "reviewers": list(self.reviewers),
            "approvers": list(self.approvers),
            "viewers": list(self.viewers),
        }

    def all_uids(self) -> set[str]:
        """Every uid appearing in any participant list."""
        return {*self.editors, *self.reviewers, *self.approvers, *self.viewers}


@dataclass(frozen=True)
class Acl:
    """Explicit read/write uid lists. Stored for forward extension; no transition consults it."""

    read: list[str] = field(default_factory=list)
    write: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Acl:
        data = data or {}
        return cls(read=_uid_list(data.get("read")), write=_uid_list(data.get("write")))

    def to_dict(self) -> dict[str, list[str]]:
        return {"read": list(self.read), "write": list(self.write)}


@dataclass(frozen=True)
class WorkflowAssignees:
    """Who the workflow expects to act at each stage."""

    review: list[str] = field(default_factory=list)
    sign: list[str] = field(default_factory=list)
    approve: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> WorkflowAssignees:
        data = data or {}
        return cls(
            review=_uid_list(data.get("review")),
            sign=_uid_list(data.get("sign")),
            approve=_uid_list(data.get("approve")),
        )

    @classmethod
    def from_participants(cls, participants: Participants) -> WorkflowAssignees:
        """Default assignees: reviewers review, approvers approve, nobody signs."""
        return cls(
            review=list(participants.reviewers),
            approve=list(participants.approvers),
        )

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "review": list(self.review),
            "sign": list(self.sign),
            "approve": list(self.approve),
        }


@dataclass(frozen=True)
class HistoryEntry:
    """One append-only line of a workflow's narrative history."""

    at: datetime
    by_uid: str
    action: str
    meta: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        at = data["at"]
        if isinstance(at, str):
            at = datetime.fromisoformat(at)
        return cls(
            at=at,
            by_uid=data["by_uid"],
            action=data["action"],
            meta=data.get("meta"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "at": self.at.isoformat(),
            "by_uid": self.by_uid,
            "action": self.action,
        }
        if self.meta is not None:
            out["meta"] = self.meta
        return out


@dataclass(frozen=True)
class VersionNumber:
    """Major-integer document version label ("1.0", "2.0", ...).

    The major part is the server-assigned sequence; the minor part is always 0.
    """

    major: int

    def __post_init__(self) -> None:
        if self.major < 1:
            raise ValueError("Version number must be >= 1")

    @classmethod
    def parse(cls, value: str) -> VersionNumber:
        """Parse "N" or "N.M" (minor ignored). Raises ValueError on malformed input."""
        match = _VERSION_RE.match((value or "").strip())
        if not match:
            raise ValueError(f"Invalid version number: {value!r}")
        return cls(int(match.group(1)))

    def next(self) -> VersionNumber:
        return VersionNumber(self.major + 1)

    def __str__(self) -> str:
        return f"{self.major}.0"
