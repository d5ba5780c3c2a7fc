"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    directory,
    documents,
    health,
    notifications,
    office_session,
    offices,
    tasks,
    workflows,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(workflows.router, prefix="/documents", tags=["workflows"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(directory.users_router, prefix="/users", tags=["users"])
api_router.include_router(
    directory.departments_router, prefix="/departments", tags=["departments"]
)
api_router.include_router(offices.offices_router, prefix="/offices", tags=["offices"])
api_router.include_router(offices.messages_router, prefix="/messages", tags=["messages"])
api_router.include_router(office_session.router, prefix="/office", tags=["office-session"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
