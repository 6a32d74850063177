"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_backends (secret_key, and storage / notification
    backend settings when applicable).
    """

    # App
    app_name: str = "snap-intake-hub"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security (administrator sessions)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    allow_admin_signup: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/snap-intake/uploads"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    s3_public_base_url: str | None = None
    max_upload_size: int = 25 * 1024 * 1024  # 25MB per file
    max_request_size: int = 250 * 1024 * 1024  # whole multipart batch

    # Notification: "log" (log only) or "http" (Resend-compatible e-mail API)
    notification_backend: str = "log"
    notification_api_url: str = "https://api.resend.com/emails"
    notification_api_key: SecretStr | None = None
    notification_sender: str = "Snap Manage Hub <onboarding@resend.dev>"
    notification_timezone: str = "Europe/Berlin"
    notification_timeout_seconds: float = 10.0

    # Audit overview
    overview_fetch_limit: int = 5000
    orphan_sweep_grace_minutes: int = 60

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_backends(self) -> "Settings":
        """Validate required env plus storage and notification backends."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if self.notification_backend == "http":
            key = self.notification_api_key
            if not key or not key.get_secret_value():
                raise ValueError(
                    "NOTIFICATION_API_KEY is required when notification_backend is 'http'."
                )
        elif self.notification_backend != "log":
            raise ValueError(
                f"Invalid notification_backend '{self.notification_backend}'. "
                "Must be one of: 'log', 'http'"
            )
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
