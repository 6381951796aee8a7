"""
Centralized configuration for the Users API backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., STRIPE_*, DB_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Users API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    enable_docs: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False
    request_timeout_seconds: float = 60.0

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Database
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    migrate_on_startup: bool = False

    # Stripe (loaded by billing module)
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_price_id: str = ""
    webhook_max_body_bytes: int = 65536

    # Checkout redirects (frontend URLs)
    checkout_success_url: str = "http://localhost:3000/success?session_id={CHECKOUT_SESSION_ID}"
    checkout_cancel_url: str = "http://localhost:3000/cancel"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
