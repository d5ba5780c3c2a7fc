"""Health check endpoint. No store access; used for liveness probes."""

from fastapi import APIRouter

from app.core.config import get_settings
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok with the running version and entity store backend."""
    settings = get_settings()
    return HealthResponse(
        version=settings.app_version, database_backend=settings.database_backend
    )
