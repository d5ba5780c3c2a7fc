"""Pytest configuration and fixtures for docflow.

The app runs on the in-memory entity store; env is set here before any
app module reads settings. SQL repository tests use TEST_DATABASE_URL and
are marked requires_db.
"""

import os
import tempfile
from collections.abc import Awaitable, Callable
from unittest.mock import AsyncMock

os.environ["DATABASE_BACKEND"] = "memory"
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="docflow-test-storage-"))
os.environ["OFFICE_SESSION_SWEEP_INTERVAL_SECONDS"] = "0"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.application.dtos.user import UserResult, UserUpsert  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.memory import MemoryEntityStore  # noqa: E402
from app.infrastructure.security.jwt import create_user_token  # noqa: E402
from app.infrastructure.store_factory import get_memory_store  # noqa: E402

get_settings.cache_clear()

from app.main import app  # noqa: E402

UserFactory = Callable[..., Awaitable[UserResult]]


@pytest.fixture(autouse=True)
def _reset_shared_state() -> None:
    """Fresh process-wide memory store and rate-limit counters per test."""
    get_memory_store().reset()
    limiter.reset()


@pytest.fixture
def store() -> MemoryEntityStore:
    """Isolated store for service-level tests."""
    return MemoryEntityStore()


@pytest.fixture
def notifier() -> AsyncMock:
    """INotificationService double; inspect notify.await_args_list."""
    return AsyncMock()


async def _make_user(
    target: MemoryEntityStore,
    user_id: str,
    roles: tuple[str, ...] = (),
    office_id: str | None = None,
    email: str | None = None,
) -> UserResult:
    user = await target.users.upsert(
        UserUpsert(id=user_id, email=email or f"{user_id}@example.com")
    )
    if roles:
        user = await target.users.update_roles(user_id, list(roles))
    if office_id:
        user = await target.users.assign_office(user_id, office_id)
    return user


@pytest.fixture
def make_user(store: MemoryEntityStore) -> UserFactory:
    """Create a user with roles in the isolated store."""

    async def _factory(user_id: str, *roles: str, office_id: str | None = None) -> UserResult:
        return await _make_user(store, user_id, roles, office_id=office_id)

    return _factory


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[..., Awaitable[dict[str, str]]]:
    """Seed a user (with roles) in the app's store and return bearer headers for it."""

    async def _headers(user_id: str, *roles: str, office_id: str | None = None) -> dict[str, str]:
        await _make_user(get_memory_store(), user_id, roles, office_id=office_id)
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}

    return _headers
