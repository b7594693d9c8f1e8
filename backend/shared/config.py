"""
Centralized configuration for the IOU backend.

All settings are loaded from environment variables with sensible defaults.
Concern-specific settings are namespaced (e.g., SUPABASE_*, SESSION_*, REDIS_*).
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
    app_name: str = "IOU API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, migrations only
    supabase_storage_bucket: str = "iou-uploads"

    # Sessions
    session_secret: str = ""
    session_ttl_days: int = 30
    session_cookie_name: str = "session"
    session_cookie_secure: bool = True

    # Rate limiting (empty redis_url disables limiting)
    redis_url: str = ""
    phone_check_limit: int = 10
    phone_check_window_seconds: int = 15 * 60
    auth_attempt_limit: int = 5
    auth_attempt_window_seconds: int = 15 * 60
    api_limit: int = 100
    api_window_seconds: int = 60

    # Uploads
    upload_max_bytes: int = 10 * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
