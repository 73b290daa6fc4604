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
    validate_required (secret_key, and GoTrue credentials when the
    identity backend is 'gotrue').
    """

    # App
    app_name: str = "villagetech-platform"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database: any SQLAlchemy async URL (postgresql+asyncpg://... in production)
    database_url: str = "sqlite+aiosqlite:///./villagetech.db"
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py; ignored for SQLite)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS (platform console origins)
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"

    # Identity service: "local" (identity_user table) or "gotrue" (GoTrue admin API)
    identity_backend: str = "local"
    gotrue_url: str | None = None
    gotrue_service_role_key: SecretStr | None = None
    identity_timeout_seconds: float = 15.0

    # Outbound email (Resend). Without an API key activation emails are only logged.
    resend_api_key: SecretStr | None = None
    resend_api_url: str = "https://api.resend.com/emails"
    default_from_email: str = "noreply@villagetech.com"
    email_timeout_seconds: float = 15.0

    # Provisioning
    portal_url_template: str = "https://{subdomain}.admin.villagetech.app"
    resource_batch_size: int = 500

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and identity backend.

        - SECRET_KEY is always required (JWT verification of platform callers).
        - GoTrue: GOTRUE_URL and GOTRUE_SERVICE_ROLE_KEY required.
        """
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.identity_backend == "gotrue":
            has_key = (
                self.gotrue_service_role_key
                and self.gotrue_service_role_key.get_secret_value()
            )
            if not self.gotrue_url or not has_key:
                raise ValueError(
                    "When identity_backend is 'gotrue', set GOTRUE_URL and "
                    "GOTRUE_SERVICE_ROLE_KEY."
                )
        elif self.identity_backend != "local":
            raise ValueError(
                f"identity_backend must be 'local' or 'gotrue', got: {self.identity_backend!r}"
            )
        if self.resource_batch_size < 1:
            raise ValueError("RESOURCE_BATCH_SIZE must be at least 1")
        if "{subdomain}" not in self.portal_url_template:
            raise ValueError("PORTAL_URL_TEMPLATE must contain a '{subdomain}' placeholder")
        return self

    def portal_url_for(self, subdomain: str) -> str:
        """Return the admin portal URL for a tenant subdomain."""
        return self.portal_url_template.format(subdomain=subdomain)


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
