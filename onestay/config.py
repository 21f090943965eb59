"""
Application configuration.

Loads settings from environment variables (and an optional .env file) with
sensible development defaults. The settings object is built once at startup
and handed to the components that need it.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings

from onestay.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: str = "http://localhost:3000,http://localhost:3001"

    # ==========================================================================
    # Storage
    # ==========================================================================

    storage_backend: str = "memory"  # memory, file
    data_dir: str = "./data"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24

    # Where the gate reads the caller's role from:
    #   token   - the role claim embedded at login (changes apply at next login)
    #   storage - the user's current role, looked up on every request
    auth_role_source: str = "token"

    # First super-admin, created by `onestay create-superadmin` or at startup
    superadmin_email: str = ""
    superadmin_password: str = ""

    # ==========================================================================
    # Properties
    # ==========================================================================

    slug_max_attempts: int = 1000

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def check_settings(settings: Settings) -> Settings:
    """
    Validate settings before the application starts.

    Raises ConfigurationError for anything the service cannot run with;
    logs a warning for insecure but usable values.
    """
    if not settings.jwt_secret_key:
        raise ConfigurationError("JWT_SECRET_KEY is required")

    if settings.jwt_secret_key == DEFAULT_JWT_SECRET:
        if settings.is_production:
            raise ConfigurationError("The default JWT_SECRET_KEY cannot be used in production")
        logger.warning("Using default JWT_SECRET_KEY. Change it in production!")

    if settings.jwt_access_token_expire_minutes <= 0:
        raise ConfigurationError("JWT_ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

    if settings.storage_backend not in ("memory", "file"):
        raise ConfigurationError(f"Unknown STORAGE_BACKEND: {settings.storage_backend!r}")

    if settings.storage_backend == "file" and not settings.data_dir:
        raise ConfigurationError("DATA_DIR is required for the file storage backend")

    if settings.auth_role_source not in ("token", "storage"):
        raise ConfigurationError(f"Unknown AUTH_ROLE_SOURCE: {settings.auth_role_source!r}")

    if settings.slug_max_attempts < 1:
        raise ConfigurationError("SLUG_MAX_ATTEMPTS must be at least 1")

    return settings
