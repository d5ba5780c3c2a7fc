"""Document API: thin routes over DocumentService, VersionService and CommentService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from app.api.v1.dependencies import (
    AuditContextDep,
    CurrentUser,
    get_comment_service,
    get_document_service,
    get_version_service,
)
from app.application.use_cases import CommentService, DocumentService, VersionService
from app.core.limiter import limit_upload, limit_writes
from app.domain.enums import DocumentStatus
from app.schemas.document import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
    DocumentCreateRequest,
    DocumentDetailResponse,
    DocumentListItemResponse,
    DocumentResponse,
    DocumentUpdateRequest,
    VersionResponse,
)

router = APIRouter()


@router.get("", response_model=list[DocumentListItemResponse])
async def list_documents(
    current_user: CurrentUser,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
    status: DocumentStatus | None = None,
    department_id: Annotated[str | None, Query(alias="departmentId")] = None,
    owner_uid: Annotated[str | None, Query(alias="ownerUid")] = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List documents, most recently updated first."""
    items = await document_svc.list_documents(
        current_user,
        status=status,
        department_id=department_id,
        owner_uid=owner_uid,
        search=search,
        limit=limit,
        offset=offset,
    )
    return [DocumentListItemResponse.from_item(i) for i in items]


@router.post("", response_model=DocumentResponse, status_code=201)
@limit_writes
async def create_document(
    request: Request,
    body: DocumentCreateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
):
    """Create a DRAFT document (and its workflow) owned by the caller."""
    document = await document_svc.create_document(
        current_user,
        title=body.title,
        content=body.content,
        department_id=body.department_id,
        participants=body.participants.to_value() if body.participants else None,
        acl=body.acl.to_value() if body.acl else None,
        tags=body.tags,
        due_at=body.due_at,
        assignees=body.assignees.to_value() if body.assignees else None,
        context=context,
    )
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    current_user: CurrentUser,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
):
    detail = await document_svc.get_document(current_user, document_id)
    return DocumentDetailResponse.from_detail(detail)


@router.patch("/{document_id}", response_model=DocumentResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
):
    """Edit title and/or content (DRAFT or REJECTED only)."""
    document = await document_svc.edit_document(
        current_user,
        document_id,
        title=body.title,
        content=body.content,
        context=context,
    )
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    document_svc: Annotated[DocumentService, Depends(get_document_service)],
) -> None:
    """Delete the document with its versions, comments, workflow and tasks."""
    await document_svc.delete_document(current_user, document_id, context=context)


@router.post(
    "/{document_id}/versions", response_model=VersionResponse, status_code=201
)
@limit_upload
async def upload_version(
    request: Request,
    document_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    version_svc: Annotated[VersionService, Depends(get_version_service)],
    file: Annotated[UploadFile | None, File()] = None,
    change_summary: Annotated[str | None, Form()] = None,
    change_summary_camel: Annotated[str | None, Form(alias="changeSummary")] = None,
):
    """Upload a new file version (multipart: file, changeSummary)."""
    version = await version_svc.add_version(
        current_user,
        document_id,
        file_data=file.file if file else None,
        filename=file.filename if file else None,
        mime_type=file.content_type if file else None,
        change_summary=change_summary or change_summary_camel,
        context=context,
    )
    return VersionResponse.model_validate(version)


@router.get("/{document_id}/versions", response_model=list[VersionResponse])
async def list_versions(
    document_id: str,
    current_user: CurrentUser,
    version_svc: Annotated[VersionService, Depends(get_version_service)],
):
    """Versions newest first."""
    versions = await version_svc.list_versions(current_user, document_id)
    return [VersionResponse.model_validate(v) for v in versions]


@router.post(
    "/{document_id}/comments", response_model=CommentResponse, status_code=201
)
@limit_writes
async def add_comment(
    request: Request,
    document_id: str,
    body: CommentCreateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    comment = await comment_svc.add_comment(
        current_user, document_id, body.body, context=context
    )
    return CommentResponse.model_validate(comment)


@router.get("/{document_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    document_id: str,
    current_user: CurrentUser,
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    """Comments oldest first."""
    comments = await comment_svc.list_comments(current_user, document_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.patch(
    "/{document_id}/comments/{comment_id}", response_model=CommentResponse
)
@limit_writes
async def update_comment(
    request: Request,
    document_id: str,
    comment_id: str,
    body: CommentUpdateRequest,
    current_user: CurrentUser,
    context: AuditContextDep,
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    """Resolve or reopen a comment."""
    comment = await comment_svc.set_resolved(
        current_user, document_id, comment_id, body.resolved, context=context
    )
    return CommentResponse.model_validate(comment)
