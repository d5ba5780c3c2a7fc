"""Infrastructure exceptions for file storage.

Storage errors extend DocflowException so presentation can map them
to HTTP responses consistently (STORAGE_* codes are 500).
"""

from app.domain.exceptions import DocflowException


class StorageException(DocflowException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageChecksumMismatchError(StorageException):
    """Checksum validation failed (corrupted or truncated write)."""

    def __init__(self, file_path: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum mismatch for file: {file_path}",
            "STORAGE_CHECKSUM_ERROR",
            {"file_path": file_path, "expected": expected, "actual": actual},
        )


class StorageAlreadyExistsError(StorageException):
    """File already exists with different checksum."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"File already exists: {file_path}",
            "STORAGE_EXISTS_ERROR",
            {"file_path": file_path},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
