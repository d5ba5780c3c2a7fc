"""In-memory persistence (DATABASE_BACKEND=memory)."""

from app.infrastructure.memory.repositories import MemoryState
from app.infrastructure.memory.store import MemoryEntityStore

__all__ = ["MemoryEntityStore", "MemoryState"]
