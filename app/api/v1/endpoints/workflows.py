"""Workflow API: lifecycle transitions, workflow read and the document audit trail.

Mounted under /documents alongside the document routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import AuditContextDep, CurrentUser, get_workflow_service
from app.application.use_cases import WorkflowService
from app.core.limiter import limit_writes
from app.schemas.document import DocumentResponse
from app.schemas.workflow import (
    ApproveRequest,
    AuditLogResponse,
    RejectRequest,
    WorkflowResponse,
)

router = APIRouter()


@router.post("/{document_id}/submit", response_model=DocumentResponse)
@limit_writes
async def submit_document(
    request: Request,
    document_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    workflow_svc: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    """DRAFT -> IN_REVIEW; opens a REVIEW task per reviewer."""
    document = await workflow_svc.submit(current_user, document_id, context=context)
    return DocumentResponse.model_validate(document)


@router.post("/{document_id}/approve", response_model=DocumentResponse)
@limit_writes
async def approve_document(
    request: Request,
    document_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    workflow_svc: Annotated[WorkflowService, Depends(get_workflow_service)],
    body: ApproveRequest | None = None,
):
    """IN_REVIEW or PENDING_SIGNATURE -> APPROVED."""
    body = body or ApproveRequest()
    meta = dict(body.metadata)
    if context.request_id:
        meta.setdefault("requestId", context.request_id)
    if context.ip:
        meta.setdefault("ip", context.ip)
    document = await workflow_svc.approve(
        current_user, document_id, notes=body.notes, meta=meta, context=context
    )
    return DocumentResponse.model_validate(document)


@router.post("/{document_id}/reject", response_model=DocumentResponse)
@limit_writes
async def reject_document(
    request: Request,
    document_id: str,
    current_user: CurrentUser,
    context: AuditContextDep,
    workflow_svc: Annotated[WorkflowService, Depends(get_workflow_service)],
    body: RejectRequest | None = None,
):
    """-> REJECTED with a required reason; cancels open tasks."""
    reason = body.reason if body else None
    document = await workflow_svc.reject(
        current_user, document_id, reason, context=context
    )
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}/workflow", response_model=WorkflowResponse)
async def get_workflow(
    document_id: str,
    current_user: CurrentUser,
    workflow_svc: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    workflow = await workflow_svc.get_workflow(current_user, document_id)
    return WorkflowResponse.model_validate(workflow)


@router.get("/{document_id}/audit-logs", response_model=list[AuditLogResponse])
async def list_audit_logs(
    document_id: str,
    current_user: CurrentUser,
    workflow_svc: Annotated[WorkflowService, Depends(get_workflow_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Audit entries for the document, newest first."""
    entries = await workflow_svc.list_audit_logs(
        current_user, document_id, skip=skip, limit=limit
    )
    return [AuditLogResponse.model_validate(e) for e in entries]
