"""Delete office sessions expired or inactive for longer than OFFICE_SESSION_RETENTION_HOURS.

Usage:
    uv run python -m scripts.sweep_office_sessions
Same sweep the API runs in the background; use it from cron when the
background sweeper is disabled (OFFICE_SESSION_SWEEP_INTERVAL_SECONDS=0).
Requires DATABASE_BACKEND=postgres (the memory store is per process).
"""

import asyncio
import sys

from app.application.use_cases.offices.office_session import OfficeSessionManager
from app.core.config import get_settings
from app.infrastructure.security.password import BcryptPasswordHasher
from app.infrastructure.store_factory import open_store
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    settings = get_settings()
    setup_logging()
    if settings.database_backend != "postgres":
        print("Nothing to sweep: DATABASE_BACKEND is not postgres", file=sys.stderr)
        sys.exit(1)
    async with open_store(settings) as store:
        manager = OfficeSessionManager(
            store,
            BcryptPasswordHasher(),
            ttl_hours=settings.office_session_ttl_hours,
            retention_hours=settings.office_session_retention_hours,
        )
        removed = await manager.sweep()
    print(f"Removed {removed} stale office session(s)")


if __name__ == "__main__":
    asyncio.run(main())
