"""Storage: local filesystem backend for document version files.

StorageFactory.create_storage_service() builds the backend named by
STORAGE_BACKEND. Implementations satisfy StorageProtocol (upload, delete,
exists).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "LocalStorageService",
    "StorageFactory",
    "StorageProtocol",
]
