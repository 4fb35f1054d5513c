"""
Centralized configuration for the Willerspace backend.

All settings are loaded from environment variables (prefixed with
WILLERSPACE_) or a local .env file. Nothing secret lives in source.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WILLERSPACE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Willerspace API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:9002"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""  # Direct Postgres URI, only used by run_migrations.py

    # Storage
    storage_bucket: str = "media"
    max_upload_bytes: int = 200 * 1024 * 1024

    # Session cookie
    session_cookie_name: str = "willerspace_session"
    session_max_age: int = 60 * 60 * 24  # 1 day

    # Site owner (can list subscribers)
    admin_email: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:3000"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
