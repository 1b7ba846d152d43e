"""Application configuration (settings and environment).

Single source of truth for server configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; Firestore
credentials are optional so the app can start (and report itself as
degraded on /health) without them.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "craftly"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    # Accept the X-User-ID header used by the mobile and web clients when no bearer token is sent.
    allow_user_id_header: bool = True
    user_id_header: str = "X-User-ID"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    max_request_size: int = 1024 * 1024
    rate_limit_enabled: bool = True

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Overrides the project_id of the service account (e.g. a staging project).
    firebase_project_id: str | None = None

    # Cache: Redis when enabled and reachable, else in-process memory.
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    orders_cache_ttl_seconds: int = 1
    stats_cache_ttl_seconds: int = 300

    # Orders
    orders_default_limit: int = 50
    orders_max_limit: int = 100
    seller_orders_scan_limit: int = 200

    # Messaging
    conversations_limit: int = 50
    messages_limit: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and value ranges."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.orders_default_limit > self.orders_max_limit:
            raise ValueError(
                "ORDERS_DEFAULT_LIMIT must not exceed ORDERS_MAX_LIMIT "
                f"({self.orders_default_limit} > {self.orders_max_limit})"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """allowed_origins split on commas, blanks dropped."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


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
