"""Shared helpers for audit logging: derive request metadata from Starlette Request."""

from __future__ import annotations

from starlette.requests import Request

from app.application.dtos.audit_log import AuditContext


def get_audit_request_context(request: Request) -> AuditContext:
    """Return the request facts copied onto audit log entries.

    Single source of truth for deriving client identity from the request:
    request_id from request state, IP from X-Forwarded-For (first hop) or
    request.client.host, user_agent from header.
    """
    request_id = getattr(request.state, "request_id", None)
    return AuditContext(
        ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        request_id=request_id,
    )


def get_client_ip(request: Request) -> str | None:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    client_host = request.client.host if request.client else None
    return (forwarded.split(",")[0].strip() if forwarded else None) or client_host
