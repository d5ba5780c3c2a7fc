"""Auth API: the authenticated user (synced from the bearer token on every request)."""

from fastapi import APIRouter

from app.api.v1.dependencies import CurrentUser
from app.schemas.user import UserResponse

router = APIRouter()


@router.get("/user", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Return the current user with roles and office."""
    return UserResponse.model_validate(current_user)
