"""
Central configuration using Pydantic BaseSettings.

Validates all env vars at startup (fail-fast). The JWT signing secret is
required in production but gets an insecure development default in
TESTING/development mode.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    print(settings.auth.jwt_secret.get_secret_value())

Lazy initialization: get_settings() creates the singleton on first call.
Tests can reset via get_settings.cache_clear().
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Only ever substituted outside production (see AppSettings validator)
DEV_JWT_SECRET = "dev-insecure-secret-change-in-production"

_DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "tasks.db"


def _is_testing() -> bool:
    """Check if running in test or local development mode."""
    return (
        os.getenv("TESTING", "").lower() in ("true", "1")
        or os.getenv("FLASK_ENV", "") in ("testing", "development")
    )


# =============================================================================
# Nested Settings Groups
# =============================================================================


class AuthSettings(BaseSettings):
    """JWT and password hashing configuration."""

    model_config = {"env_prefix": "", "extra": "ignore"}

    jwt_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 7

    # Werkzeug hash method string (salted, one-way)
    password_hash_method: str = "scrypt"


class DatabaseSettings(BaseSettings):
    """Task/user database configuration."""

    model_config = {"env_prefix": "TASKS_DB_", "extra": "ignore"}

    path: Path = _DEFAULT_DB_PATH
    pool_size: int = 10


class CorsSettings(BaseSettings):
    """Allowed browser origins."""

    model_config = {"env_prefix": "CORS_", "extra": "ignore"}

    origins: str = "http://localhost:3000,http://localhost:10000,http://127.0.0.1:10000"

    @property
    def origin_list(self) -> list[str]:
        return [o.strip() for o in self.origins.split(",") if o.strip()]


# =============================================================================
# Root Settings
# =============================================================================


class AppSettings(BaseSettings):
    """Root application settings composing all sub-settings."""

    model_config = {"env_prefix": "", "extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""

    # Server
    port: int = 10000
    request_timeout: int = 30

    # Nested groups (initialized separately to support env_prefix)
    auth: AuthSettings = None  # type: ignore[assignment]
    database: DatabaseSettings = None  # type: ignore[assignment]
    cors: CorsSettings = None  # type: ignore[assignment]

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v

    @model_validator(mode="before")
    @classmethod
    def _init_nested(cls, values):
        """Initialize nested settings from environment."""
        if values.get("auth") is None:
            values["auth"] = AuthSettings()
        if values.get("database") is None:
            values["database"] = DatabaseSettings()
        if values.get("cors") is None:
            values["cors"] = CorsSettings()
        return values

    @model_validator(mode="after")
    def _validate_required_secrets(self):
        """Require JWT_SECRET in production; substitute a dev secret otherwise."""
        if self.auth.jwt_secret.get_secret_value():
            return self

        if _is_testing():
            logger.warning("JWT_SECRET not set, using insecure development secret")
            self.auth.jwt_secret = SecretStr(DEV_JWT_SECRET)
            return self

        raise ValueError(
            "JWT_SECRET env var is required. "
            "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
        )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get the application settings singleton.

    Lazy-initialized on first call. Validates all env vars (fail-fast).
    Tests can reset via: get_settings.cache_clear()
    """
    return AppSettings()
