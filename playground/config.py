"""
Centralized application configuration using pydantic-settings.

All settings are read from environment variables or .env file.
Store providers, share links and logging are tuned here - no code changes needed.
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Priority: environment variables > .env file > defaults
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # --- Database (db store provider) ---
    DB_URL: str = Field(
        default="postgresql://localhost:5432/playground",
        description="PostgreSQL connection URL"
    )

    # --- Redis (redis store provider) ---
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )

    # --- Server ---
    HOST: str = Field(
        default="127.0.0.1",
        description="Server bind host"
    )
    PORT: int = Field(
        default=8888,
        description="Server bind port"
    )

    # --- Sharing ---
    SHARE_BASE_URL: str = Field(
        default="http://127.0.0.1:8888/",
        description="Playground page that share links point at"
    )
    SHARE_TTL_SECONDS: int = Field(
        default=60 * 60 * 24 * 30,
        description="Lifetime of shares kept by the redis provider"
    )
    SHARE_RETENTION_DAYS: int = Field(
        default=365,
        description="Age after which database shares are purged by the worker"
    )
    SHORT_ID_LENGTH: int = Field(
        default=8,
        description="Length of generated share ids"
    )
    STORE_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Upper bound for a single provider save/load"
    )

    # --- Debug / Logging ---
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v_upper

    @field_validator("SHORT_ID_LENGTH")
    @classmethod
    def validate_short_id_length(cls, v: int) -> int:
        if v < 4:
            raise ValueError("SHORT_ID_LENGTH must be at least 4")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings()


# --- Singleton instance for easy import ---
settings = get_settings()


# --- Module-level exports ---

# Database
DATABASE_URL: str = settings.DB_URL

# Server
HOST: str = settings.HOST
PORT: int = settings.PORT
DEBUG: bool = settings.DEBUG
LOG_LEVEL: str = settings.LOG_LEVEL

# Redis
REDIS_URL: str = settings.REDIS_URL

# Service name reported to tracing
SERVICE_NAME: str = "playground-share"

# --- Paths (computed, not from env) ---
PROJECT_ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
LOGS_PATH: str = os.path.join(PROJECT_ROOT, "logs")
