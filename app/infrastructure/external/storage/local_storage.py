"""Local filesystem storage for document version files.

Paths are validated against storage_root. Writes go to a temp file in the
target directory and are renamed into place once the checksum matches.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, BinaryIO

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageChecksumMismatchError,
    StorageDeleteError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection."""

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    async def _compute_checksum(self, file_path: Path) -> str:
        """SHA-256 of file."""
        sha256 = hashlib.sha256()
        async with aiofiles.open(file_path, "rb") as f:
            while chunk := await f.read(self.CHUNK_SIZE):
                sha256.update(chunk)
        return sha256.hexdigest()

    async def upload(
        self,
        file_data: BinaryIO,
        storage_ref: str,
        expected_checksum: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write file_data to storage_ref. Idempotent if the same content is already there."""
        try:
            target_path = self._get_full_path(storage_ref)
            if target_path.exists():
                if await self._compute_checksum(target_path) == expected_checksum:
                    return {
                        "storage_ref": storage_ref,
                        "checksum": expected_checksum,
                        "size": target_path.stat().st_size,
                    }
                raise StorageAlreadyExistsError(storage_ref)

            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            file_content = file_data.read()
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_content)
                os.chmod(temp_path, 0o640)
                computed = await self._compute_checksum(Path(temp_path))
                if computed != expected_checksum:
                    raise StorageChecksumMismatchError(
                        storage_ref, expected_checksum, computed
                    )
                os.replace(temp_path, target_path)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
            logger.debug(
                "Stored %s (%d bytes, %s, meta=%s)",
                storage_ref,
                len(file_content),
                content_type,
                metadata or {},
            )
            return {
                "storage_ref": storage_ref,
                "checksum": computed,
                "size": len(file_content),
                "uploaded_at": utc_now().isoformat(),
            }
        except (
            StorageChecksumMismatchError,
            StorageAlreadyExistsError,
            StoragePermissionError,
        ):
            raise
        except Exception as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and prune empty parent directories. Returns True if deleted."""
        try:
            file_path = self._get_full_path(storage_ref)
            if not file_path.exists():
                return False
            await aiofiles.os.remove(file_path)
            parent = file_path.parent
            while parent != self.storage_root:
                try:
                    if any(parent.iterdir()):
                        break
                    parent.rmdir()
                    parent = parent.parent
                except OSError:
                    break
            return True
        except StoragePermissionError:
            raise
        except Exception as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        return self._get_full_path(storage_ref).is_file()
