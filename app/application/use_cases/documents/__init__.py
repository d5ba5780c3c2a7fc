"""Document use cases: lifecycle (create/edit/delete/list/detail), versions and comments."""

from app.application.use_cases.documents.comments import CommentService
from app.application.use_cases.documents.document_operations import (
    DocumentDetail,
    DocumentService,
)
from app.application.use_cases.documents.versions import VersionService

__all__ = [
    "CommentService",
    "DocumentDetail",
    "DocumentService",
    "VersionService",
]
