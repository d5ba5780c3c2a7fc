"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the entity store, collaborators and use-case
services. Routes depend only on these; no route builds a repository or
touches infrastructure directly.

One store per request: with DATABASE_BACKEND=postgres that is a
SqlEntityStore over a single transactional session (commit on success,
rollback on exception); with memory it is the process-wide MemoryEntityStore.
FastAPI caches dependencies per request, so the current user's upsert and
the operation itself share the same store.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.audit_log import AuditContext
from app.application.dtos.office import OfficeSessionResult
from app.application.dtos.user import UserResult, UserUpsert
from app.application.interfaces.services import IPasswordHasher, IStorageService
from app.application.interfaces.store import IEntityStore
from app.application.use_cases import (
    CommentService,
    DirectoryService,
    DocumentService,
    MessageService,
    NotificationInboxService,
    OfficeService,
    OfficeSessionManager,
    TaskService,
    VersionService,
    WorkflowService,
)
from app.core.config import Settings, get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.security.jwt import verify_token
from app.infrastructure.security.password import BcryptPasswordHasher
from app.infrastructure.services import StoreNotificationService
from app.infrastructure.store_factory import open_store
from app.shared.request_audit import get_audit_request_context

SettingsDep = Annotated[Settings, Depends(get_settings)]


async def get_store(settings: SettingsDep) -> AsyncIterator[IEntityStore]:
    """Entity store for the request (see module docstring)."""
    async with open_store(settings) as store:
        yield store


StoreDep = Annotated[IEntityStore, Depends(get_store)]


def get_storage_service(settings: SettingsDep) -> IStorageService:
    return StorageFactory.create_storage_service(settings)


def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher()


def get_audit_context(request: Request) -> AuditContext:
    """IP, user agent and request id copied onto audit entries."""
    return get_audit_request_context(request)


AuditContextDep = Annotated[AuditContext, Depends(get_audit_context)]


def get_directory_service(store: StoreDep) -> DirectoryService:
    return DirectoryService(store)


def get_document_service(store: StoreDep, settings: SettingsDep) -> DocumentService:
    return DocumentService(
        store,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def get_version_service(
    store: StoreDep,
    settings: SettingsDep,
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> VersionService:
    return VersionService(
        store,
        storage,
        allowed_extensions=settings.upload_extensions,
        max_upload_size=settings.max_upload_size,
    )


def get_comment_service(store: StoreDep) -> CommentService:
    return CommentService(store)


def get_workflow_service(store: StoreDep) -> WorkflowService:
    return WorkflowService(store, StoreNotificationService(store))


def get_task_service(store: StoreDep) -> TaskService:
    return TaskService(store)


def get_office_service(
    store: StoreDep,
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
) -> OfficeService:
    return OfficeService(store, hasher)


def get_office_session_manager(
    store: StoreDep,
    settings: SettingsDep,
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
) -> OfficeSessionManager:
    return OfficeSessionManager(
        store,
        hasher,
        ttl_hours=settings.office_session_ttl_hours,
        retention_hours=settings.office_session_retention_hours,
    )


def get_message_service(store: StoreDep) -> MessageService:
    return MessageService(store)


def get_notification_inbox_service(store: StoreDep) -> NotificationInboxService:
    return NotificationInboxService(store)


_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    directory: Annotated[DirectoryService, Depends(get_directory_service)],
) -> UserResult:
    """Return the user named by the bearer JWT, synced from its profile claims.

    Raises:
        AuthenticationException: Missing, malformed, expired or unsigned token (401).
    """
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    return await directory.sync_user(
        UserUpsert(
            id=str(payload["sub"]),
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            profile_image_url=payload.get("profile_image_url"),
        )
    )


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


def get_office_session_token(
    x_office_session: Annotated[str | None, Header(alias="X-Office-Session")] = None,
    session: Annotated[str | None, Query()] = None,
) -> str | None:
    """Raw office session token from the X-Office-Session header, else ?session=."""
    return x_office_session or session


OfficeSessionToken = Annotated[str | None, Depends(get_office_session_token)]


async def get_office_session(
    token: OfficeSessionToken,
    manager: Annotated[OfficeSessionManager, Depends(get_office_session_manager)],
) -> OfficeSessionResult:
    """Validated office session; any failure is InvalidOfficeSessionException (401)."""
    return await manager.validate(token)


CurrentOfficeSession = Annotated[OfficeSessionResult, Depends(get_office_session)]
