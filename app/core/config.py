"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, DATABASE_URL for
postgres) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_storage (secret_key, and database_url when the
    backend is postgres).
    """

    # App
    app_name: str = "docflow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Entity store: "memory" (process-local, dev/tests) or "postgres" (SQLAlchemy + Alembic)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Storage (document version files)
    storage_backend: str = "local"
    storage_root: str = "./storage"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    allowed_upload_extensions: str = ".pdf,.doc,.docx,.txt"

    # Office sessions
    office_session_ttl_hours: int = 24
    office_session_retention_hours: int = 24
    office_session_sweep_interval_seconds: int = 3600  # 0 disables the background sweep

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    max_request_body_size: int = 12 * 1024 * 1024

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def upload_extensions(self) -> tuple[str, ...]:
        """allowed_upload_extensions as a normalized tuple (".pdf", ...)."""
        exts = (e.strip().lower() for e in self.allowed_upload_extensions.split(","))
        return tuple(e if e.startswith(".") else f".{e}" for e in exts if e)

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env and backends.

        - Postgres: DATABASE_URL required.
        - Memory: nothing persists across restarts.
        """
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'memory' or 'postgres', got: {self.database_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. Must be 'local'"
            )
        if self.office_session_ttl_hours < 1:
            raise ValueError("OFFICE_SESSION_TTL_HOURS must be >= 1")
        if self.office_session_sweep_interval_seconds < 0:
            raise ValueError("OFFICE_SESSION_SWEEP_INTERVAL_SECONDS must be >= 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
