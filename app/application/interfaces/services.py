"""Service interfaces (ports) for the application layer.

Protocols for collaborators the use cases call but do not implement:
notification delivery, file storage and password hashing.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Protocol


# Notification service interface (workflow lifecycle events)
class INotificationService(Protocol):
    """Protocol for emitting lifecycle notifications to users."""

    async def notify(
        self,
        to_uids: list[str],
        notification_type: str,
        payload: dict[str, Any],
    ) -> None:
        """Deliver one notification per recipient. Must not raise for unknown users."""


# File storage interface (document versions)
class IStorageService(Protocol):
    """Protocol for object storage backends."""

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Upload file with checksum verification."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""


# Password hashing interface (office credentials)
class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing with constant-time verification."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify_password(self, password: str, hashed: str | None) -> bool:
        """Return True if password matches hashed.

        When hashed is None a dummy hash is verified so timing does not
        reveal whether the account exists.
        """
