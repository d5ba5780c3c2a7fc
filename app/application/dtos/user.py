"""DTOs for user and department use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class UserUpsert:
    """Identity-provider claims synced into the user row on every authenticated request."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


@dataclass(frozen=True)
class UserResult:
    """User read-model. Roles are global and additive; office_id is an Office business key."""

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    roles: list[str]
    departments: list[str]
    office_id: str | None
    created_at: datetime
    updated_at: datetime

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email or self.id

    @property
    def initials(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return "".join(p[0] for p in parts).upper()
        return (self.email or self.id)[:2].upper()


@dataclass(frozen=True)
class UserSummary:
    """Compact user reference embedded in list items (owner, sender, members)."""

    id: str
    name: str
    initials: str
    email: str | None = None

    @classmethod
    def from_user(cls, user: UserResult) -> "UserSummary":
        return cls(
            id=user.id,
            name=user.display_name,
            initials=user.initials,
            email=user.email,
        )


@dataclass(frozen=True)
class DepartmentCreate:
    """Input for creating a department."""

    name: str
    members: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DepartmentResult:
    """Department read-model."""

    id: str
    name: str
    members: list[str]
    created_at: datetime
