"""Shared builders for service tests over an isolated MemoryEntityStore."""

import pytest

from app.application.use_cases.documents import DocumentService
from app.application.use_cases.workflows import TaskService, WorkflowService
from app.domain.enums import UserRole
from app.domain.value_objects import Participants


@pytest.fixture
def documents(store) -> DocumentService:
    return DocumentService(store)


@pytest.fixture
def workflows(store, notifier) -> WorkflowService:
    return WorkflowService(store, notifier)


@pytest.fixture
def tasks(store) -> TaskService:
    return TaskService(store)


@pytest.fixture
async def cast(make_user):
    """Owner, two reviewers, an approver, an admin and an outsider."""
    return {
        "owner": await make_user("owner", UserRole.OFFICER.value),
        "rev1": await make_user("rev1", UserRole.REVIEWER.value),
        "rev2": await make_user("rev2", UserRole.REVIEWER.value),
        "appr": await make_user("appr"),
        "admin": await make_user("admin", UserRole.ADMIN.value),
        "outsider": await make_user("outsider"),
    }


@pytest.fixture
async def draft(documents, cast):
    """A DRAFT document with two reviewers and one approver."""
    return await documents.create_document(
        cast["owner"],
        "Quarterly budget",
        content="Draft numbers",
        participants=Participants(reviewers=["rev1", "rev2"], approvers=["appr"]),
    )
