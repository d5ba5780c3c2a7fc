"""Health check API schemas."""

from pydantic import Field

from app.schemas.common import ApiModel


class HealthResponse(ApiModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = None
    database_backend: str | None = None
