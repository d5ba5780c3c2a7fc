"""Entity store selection (DATABASE_BACKEND=memory|postgres).

The memory store is a process singleton so every request and the session
sweeper see the same rows. The SQL store is built per session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from app.application.interfaces.store import IEntityStore
from app.core.config import Settings
from app.infrastructure.memory import MemoryEntityStore


@lru_cache
def get_memory_store() -> MemoryEntityStore:
    """Return the process-wide in-memory store."""
    return MemoryEntityStore()


@asynccontextmanager
async def open_store(settings: Settings) -> AsyncIterator[IEntityStore]:
    """Yield a store for one request, script run or sweep.

    For postgres the session commits when the block exits cleanly.
    """
    if settings.database_backend == "memory":
        yield get_memory_store()
        return
    from app.infrastructure.persistence.database import session_scope
    from app.infrastructure.persistence.store import SqlEntityStore

    async with session_scope() as session:
        yield SqlEntityStore(session)
