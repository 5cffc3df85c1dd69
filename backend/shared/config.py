"""
Centralized configuration for the Trashfoot backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, ROUTE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tables whose changes invalidate the admin/overview screens
DEFAULT_WATCHED_TABLES = [
    "players",
    "groups",
    "matches",
    "competitions",
    "group_members",
    "pending_group_members",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Trashfoot API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8081", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:8081"

    # Accounts
    demonstration_seed: int = 20240917

    # Realtime
    watched_tables: list[str] = DEFAULT_WATCHED_TABLES

    # Auth flows
    min_password_length: int = 8


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
