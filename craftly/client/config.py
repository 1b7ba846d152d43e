"""Client settings, read from CRAFTLY_CLIENT_* environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    base_url: str = "http://localhost:8000/api"
    timeout_seconds: float = 30.0

    # Repository caches (seconds)
    products_cache_ttl_seconds: float = 300.0
    stats_cache_ttl_seconds: float = 300.0
    cart_cache_ttl_seconds: float = 300.0

    session_file: str = "~/.craftly/session.json"

    # Conversation listener polling interval
    poll_interval_seconds: float = 3.0

    model_config = SettingsConfigDict(
        env_prefix="CRAFTLY_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
