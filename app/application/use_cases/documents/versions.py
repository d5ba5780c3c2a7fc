"""Document versions: upload a new file version and read version history."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
from typing import BinaryIO

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.document import VersionCreate, VersionResult
from app.application.dtos.user import UserResult
from app.application.interfaces.services import IStorageService
from app.application.interfaces.store import IEntityStore
from app.application.services.access_control import can_access, can_edit, require
from app.application.services.audit_service import AuditRecorder
from app.domain.enums import AuditAction, AuditTargetType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects import VersionNumber
from app.shared.utils.datetime import epoch_ms

logger = logging.getLogger(__name__)

DEFAULT_CHANGE_SUMMARY = "New version uploaded"
DEFAULT_ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt")
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024


def _rewind_if_seekable(file_data: BinaryIO) -> None:
    """Reset file position to start if stream is seekable."""
    if getattr(file_data, "seekable", lambda: False)():
        file_data.seek(0)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="file")
    return name


def _compute_checksum_and_size_sync(
    file_data: BinaryIO, max_size: int
) -> tuple[str, int]:
    """Blocking: one pass over file_data (run in a thread). Returns (hexdigest, byte_count)."""
    sha256 = hashlib.sha256()
    total = 0
    while chunk := file_data.read(65536):
        total += len(chunk)
        if total > max_size:
            raise ValidationException(
                f"File exceeds maximum upload size of {max_size} bytes", field="file"
            )
        sha256.update(chunk)
    _rewind_if_seekable(file_data)
    return sha256.hexdigest(), total


class VersionService:
    """Upload and list immutable document versions.

    Version numbers come from the document's server-side counter, taken in
    the same store transaction as the version insert and the pointer update.
    """

    def __init__(
        self,
        store: IEntityStore,
        storage: IStorageService,
        allowed_extensions: tuple[str, ...] | list[str] = DEFAULT_ALLOWED_EXTENSIONS,
        max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE,
    ) -> None:
        self.store = store
        self.storage = storage
        self.allowed_extensions = tuple(e.lower() for e in allowed_extensions)
        self.max_upload_size = max_upload_size
        self.audit = AuditRecorder(store.audit_logs)

    def _validate_name(self, filename: str | None) -> str:
        if not filename:
            raise ValidationException("No file uploaded", field="file")
        safe = _sanitize_filename(filename)
        ext = os.path.splitext(safe)[1].lower()
        if ext not in self.allowed_extensions:
            raise ValidationException(
                "Invalid file type. Only "
                + ", ".join(e.lstrip(".").upper() for e in self.allowed_extensions)
                + " files are allowed.",
                field="file",
            )
        return safe

    @staticmethod
    def storage_path_for(document_id: str, filename: str) -> str:
        return f"documents/{document_id}/{epoch_ms()}-{filename}"

    async def add_version(
        self,
        actor: UserResult,
        document_id: str,
        file_data: BinaryIO,
        filename: str | None,
        mime_type: str | None = None,
        change_summary: str | None = None,
        context: AuditContext | None = None,
    ) -> VersionResult:
        """Store the file and record version N+1 as the document's current version."""
        safe_name = self._validate_name(filename)
        checksum, size = await asyncio.to_thread(
            _compute_checksum_and_size_sync, file_data, self.max_upload_size
        )
        summary = (change_summary or "").strip() or DEFAULT_CHANGE_SUMMARY
        async with self.store.transaction():
            document = await self.store.documents.get_by_id(document_id, for_update=True)
            if not document:
                raise ResourceNotFoundException("document", document_id)
            require(can_edit(document, actor), "document", "upload_version")
            sequence = await self.store.documents.next_version_sequence(document_id)
            version_number = str(VersionNumber(sequence))
            storage_path = self.storage_path_for(document_id, safe_name)
            await self.storage.upload(
                file_data,
                storage_path,
                expected_checksum=checksum,
                content_type=mime_type or "application/octet-stream",
                metadata={"document_id": document_id, "version": version_number},
            )
            try:
                version = await self.store.versions.create(
                    VersionCreate(
                        doc_id=document_id,
                        sequence=sequence,
                        version_number=version_number,
                        storage_path=storage_path,
                        sha256=checksum,
                        created_by=actor.id,
                        file_name=safe_name,
                        file_size=size,
                        mime_type=mime_type,
                        change_summary=summary,
                    )
                )
                await self.store.documents.set_current_version(document_id, version.id)
                await self.audit.record(
                    actor.id,
                    AuditAction.VERSION_UPLOADED.value,
                    AuditTargetType.DOCUMENT.value,
                    document_id,
                    context=context,
                    metadata={"versionId": version.id, "versionNumber": version_number},
                )
            except Exception:
                await self.storage.delete(storage_path)
                raise
        logger.info(
            "Document %s version %s uploaded by %s (%d bytes)",
            document_id,
            version_number,
            actor.id,
            size,
        )
        return version

    async def list_versions(
        self, actor: UserResult, document_id: str
    ) -> list[VersionResult]:
        """Versions newest first."""
        document = await self.store.documents.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        require(can_access(document, actor), "document", "read")
        return await self.store.versions.list_by_document(document_id)

    async def latest_version(
        self, actor: UserResult, document_id: str
    ) -> VersionResult | None:
        versions = await self.list_versions(actor, document_id)
        return versions[0] if versions else None
