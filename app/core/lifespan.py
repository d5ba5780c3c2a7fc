"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (office session sweeper,
telemetry, DB engine dispose).
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


async def run_office_session_sweeper(settings: Settings) -> None:
    """Delete stale office sessions every office_session_sweep_interval_seconds."""
    from app.application.use_cases.offices.office_session import OfficeSessionManager
    from app.infrastructure.security.password import BcryptPasswordHasher
    from app.infrastructure.store_factory import open_store

    interval = settings.office_session_sweep_interval_seconds
    while True:
        await asyncio.sleep(interval)
        try:
            async with open_store(settings) as store:
                manager = OfficeSessionManager(
                    store,
                    BcryptPasswordHasher(),
                    ttl_hours=settings.office_session_ttl_hours,
                    retention_hours=settings.office_session_retention_hours,
                )
                await manager.sweep()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Office session sweep failed; retrying next interval")


def configure_telemetry(app: FastAPI, settings: Settings) -> None:
    """Install tracing when TELEMETRY_ENABLED.

    Called from create_app(): FastAPI instrumentation adds middleware, which
    Starlette refuses once the app has started serving.
    """
    if not settings.telemetry_enabled:
        return
    from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    if settings.database_backend == "postgres":
        from app.infrastructure.persistence.database import get_engine

        telemetry.instrument_sqlalchemy(get_engine())
    logger.info("Telemetry initialized")


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: office session sweeper (if interval > 0). Shutdown order:
    sweeper cancel, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.office_session_sweeper = None
    if settings.office_session_sweep_interval_seconds > 0:
        app.state.office_session_sweeper = asyncio.create_task(
            run_office_session_sweeper(settings)
        )
        logger.info(
            "Office session sweeper started (every %ss)",
            settings.office_session_sweep_interval_seconds,
        )

    yield

    # ---- Shutdown ----
    sweeper = app.state.office_session_sweeper
    if sweeper is not None:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        logger.info("Office session sweeper stopped")

    from app.shared.telemetry.telemetry import get_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()

    from app.infrastructure.persistence import database

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
