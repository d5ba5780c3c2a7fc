"""Document lifecycle manager, versions and comments over the memory store."""

import asyncio
import io

import pytest

from app.application.use_cases.documents import (
    CommentService,
    DocumentService,
    VersionService,
)
from app.domain.enums import DocumentStatus, WorkflowState
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    StateConflictException,
    ValidationException,
)
from app.domain.value_objects import Participants
from app.infrastructure.external.storage.local_storage import LocalStorageService


class TestCreateDocument:
    async def test_starts_draft_with_draft_workflow(self, store, documents, cast):
        document = await documents.create_document(
            cast["owner"],
            "  Policy  ",
            participants=Participants(reviewers=["rev1"], approvers=["appr"]),
            tags=["hr"],
        )
        assert document.title == "Policy"
        assert document.status == DocumentStatus.DRAFT
        assert document.owner_uid == "owner"
        assert document.current_version_id is None
        workflow = await store.workflows.get_by_document(document.id)
        assert workflow.state == WorkflowState.DRAFT
        assert workflow.assignees.review == ["rev1"]
        assert workflow.assignees.approve == ["appr"]
        assert workflow.history == []

    @pytest.mark.parametrize("title", [None, "", "  ", "x" * 256])
    async def test_invalid_title(self, documents, cast, title):
        with pytest.raises(ValidationException):
            await documents.create_document(cast["owner"], title)

    async def test_unknown_department(self, documents, cast):
        with pytest.raises(ResourceNotFoundException):
            await documents.create_document(cast["owner"], "T", department_id="nope")


class TestEditDocument:
    async def test_owner_edits_draft_and_diff_is_audited(self, store, documents, cast, draft):
        updated = await documents.edit_document(cast["owner"], draft.id, title="Revised")
        assert updated.title == "Revised"
        assert updated.content == "Draft numbers"
        logs = await store.audit_logs.list_for_target("document", draft.id)
        assert logs[0].action == "DOCUMENT_UPDATED"
        assert logs[0].diff == {"title": {"from": "Quarterly budget", "to": "Revised"}}

    async def test_nothing_to_change(self, documents, cast, draft):
        with pytest.raises(ValidationException):
            await documents.edit_document(cast["owner"], draft.id)

    async def test_reviewer_cannot_edit(self, documents, cast, draft):
        with pytest.raises(AuthorizationException):
            await documents.edit_document(cast["rev1"], draft.id, content="x")

    async def test_frozen_while_in_review(self, documents, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        with pytest.raises(StateConflictException):
            await documents.edit_document(cast["owner"], draft.id, content="late change")


class TestDeleteDocument:
    async def test_cascades(self, store, documents, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        await documents.delete_document(cast["owner"], draft.id)
        assert await store.documents.get_by_id(draft.id) is None
        assert await store.workflows.get_by_document(draft.id) is None
        with pytest.raises(ResourceNotFoundException):
            await documents.get_document(cast["admin"], draft.id)

    async def test_editor_cannot_delete(self, store, documents, cast):
        document = await documents.create_document(
            cast["owner"], "Shared", participants=Participants(editors=["rev1"])
        )
        with pytest.raises(AuthorizationException):
            await documents.delete_document(cast["rev1"], document.id)
        await documents.delete_document(cast["admin"], document.id)


class TestListAndDetail:
    async def test_list_is_enriched_and_filtered(self, documents, workflows, cast, draft):
        other = await documents.create_document(cast["admin"], "Travel memo")
        await workflows.submit(cast["owner"], draft.id)

        items = await documents.list_documents(cast["outsider"])
        assert {i.document.id for i in items} == {draft.id, other.id}
        item = next(i for i in items if i.document.id == draft.id)
        assert item.owner.id == "owner"
        assert item.current_version == "1.0"
        assert item.comments_count == 0

        in_review = await documents.list_documents(
            cast["owner"], status=DocumentStatus.IN_REVIEW
        )
        assert [i.document.id for i in in_review] == [draft.id]
        by_search = await documents.list_documents(cast["owner"], search="TRAVEL")
        assert [i.document.id for i in by_search] == [other.id]

    async def test_list_pagination_is_capped(self, store, cast):
        service = DocumentService(store, default_page_size=2, max_page_size=3)
        for n in range(5):
            await service.create_document(cast["owner"], f"Doc {n}")
        assert len(await service.list_documents(cast["owner"])) == 2
        assert len(await service.list_documents(cast["owner"], limit=50)) == 3
        with pytest.raises(ValidationException):
            await service.list_documents(cast["owner"], offset=-1)

    async def test_detail_requires_access(self, documents, cast, draft):
        detail = await documents.get_document(cast["rev2"], draft.id)
        assert detail.document.id == draft.id
        assert detail.workflow.state == WorkflowState.DRAFT
        with pytest.raises(AuthorizationException):
            await documents.get_document(cast["outsider"], draft.id)


@pytest.fixture
def versions(store, tmp_path) -> VersionService:
    return VersionService(store, LocalStorageService(str(tmp_path)), max_upload_size=64)


class TestVersions:
    async def test_numbers_increase_and_pointer_moves(self, store, versions, cast, draft, tmp_path):
        first = await versions.add_version(
            cast["owner"], draft.id, io.BytesIO(b"one"), "budget.pdf", "application/pdf"
        )
        second = await versions.add_version(
            cast["owner"], draft.id, io.BytesIO(b"two"), "budget-v2.pdf", change_summary="Fixes"
        )

        assert (first.version_number, second.version_number) == ("1.0", "2.0")
        assert first.change_summary == "New version uploaded"
        assert second.change_summary == "Fixes"
        assert first.file_size == 3
        assert first.storage_path.startswith(f"documents/{draft.id}/")
        assert (tmp_path / first.storage_path).read_bytes() == b"one"
        document = await store.documents.get_by_id(draft.id)
        assert document.current_version_id == second.id
        history = await versions.list_versions(cast["owner"], draft.id)
        assert [v.version_number for v in history] == ["2.0", "1.0"]
        assert (await versions.latest_version(cast["owner"], draft.id)).id == second.id

    async def test_concurrent_uploads_get_distinct_numbers(self, store, versions, cast, draft):
        first, second = await asyncio.gather(
            versions.add_version(cast["owner"], draft.id, io.BytesIO(b"a"), "left.pdf"),
            versions.add_version(cast["owner"], draft.id, io.BytesIO(b"b"), "right.pdf"),
        )

        assert sorted([first.version_number, second.version_number]) == ["1.0", "2.0"]
        document = await store.documents.get_by_id(draft.id)
        assert document.version_counter == 2

    async def test_allowed_even_after_submission(self, versions, workflows, cast, draft):
        await workflows.submit(cast["owner"], draft.id)
        version = await versions.add_version(
            cast["owner"], draft.id, io.BytesIO(b"x"), "late.txt"
        )
        assert version.version_number == "1.0"

    @pytest.mark.parametrize("filename", [None, "", "malware.exe", "../.."])
    async def test_rejects_bad_filenames(self, versions, cast, draft, filename):
        with pytest.raises(ValidationException):
            await versions.add_version(cast["owner"], draft.id, io.BytesIO(b"x"), filename)

    async def test_path_components_are_stripped(self, versions, cast, draft):
        version = await versions.add_version(
            cast["owner"], draft.id, io.BytesIO(b"x"), "..\\..\\etc/notes.txt"
        )
        assert version.file_name == "notes.txt"

    async def test_size_limit(self, versions, cast, draft):
        with pytest.raises(ValidationException):
            await versions.add_version(
                cast["owner"], draft.id, io.BytesIO(b"x" * 65), "big.txt"
            )

    async def test_reviewer_cannot_upload_and_nothing_is_stored(
        self, versions, cast, draft, tmp_path
    ):
        with pytest.raises(AuthorizationException):
            await versions.add_version(cast["rev1"], draft.id, io.BytesIO(b"x"), "a.txt")
        assert not (tmp_path / "documents").exists()


class TestComments:
    async def test_add_list_and_resolve(self, store, cast, draft):
        comments = CommentService(store)
        first = await comments.add_comment(cast["rev1"], draft.id, "  Check row 4  ")
        await comments.add_comment(cast["owner"], draft.id, "Done")

        listed = await comments.list_comments(cast["appr"], draft.id)
        assert [c.body for c in listed] == ["Check row 4", "Done"]
        assert first.resolved is False

        resolved = await comments.set_resolved(cast["owner"], draft.id, first.id, True)
        assert resolved.resolved is True

    async def test_outsider_cannot_comment(self, store, cast, draft):
        with pytest.raises(AuthorizationException):
            await CommentService(store).add_comment(cast["outsider"], draft.id, "hi")

    async def test_blank_body(self, store, cast, draft):
        with pytest.raises(ValidationException):
            await CommentService(store).add_comment(cast["owner"], draft.id, "   ")

    async def test_other_reviewer_cannot_resolve(self, store, cast, draft):
        comments = CommentService(store)
        comment = await comments.add_comment(cast["rev1"], draft.id, "Note")
        with pytest.raises(AuthorizationException):
            await comments.set_resolved(cast["rev2"], draft.id, comment.id, True)

    async def test_comment_must_belong_to_document(self, store, documents, cast, draft):
        comments = CommentService(store)
        other = await documents.create_document(cast["owner"], "Other")
        comment = await comments.add_comment(cast["owner"], other.id, "elsewhere")
        with pytest.raises(ResourceNotFoundException):
            await comments.set_resolved(cast["owner"], draft.id, comment.id, True)

    async def test_comments_counted_in_list(self, store, documents, cast, draft):
        await CommentService(store).add_comment(cast["owner"], draft.id, "one")
        items = await documents.list_documents(cast["owner"])
        assert items[0].comments_count == 1
