"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from enum import Enum
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─────────────────────────────────────────────────────────────
# MODE ENUMS
# ─────────────────────────────────────────────────────────────


class StoreBackend(str, Enum):
    """Where recorded moves are persisted."""

    MEMORY = "memory"  # Session only
    JSON = "json"  # JSON file on disk


class ReporterBackend(str, Enum):
    """Where finished game results are sent."""

    NONE = "none"
    LOG = "log"  # Log the payload
    HTTP = "http"  # POST the payload to {base_url}/games


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Game rules configuration."""

    model_config = SettingsConfigDict(env_prefix="GAME_")

    replay_interval: float = Field(
        default=1.0,
        gt=0,
        description="Delay in seconds between replayed moves",
    )


class StorageSettings(BaseSettings):
    """Move store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backend: StoreBackend = StoreBackend.JSON
    path: str = ".connect4/moves.json"
    prefix: str = "c4."


class ReporterSettings(BaseSettings):
    """Result reporter configuration."""

    model_config = SettingsConfigDict(env_prefix="REPORTER_")

    backend: ReporterBackend = ReporterBackend.LOG
    base_url: str = "http://localhost:8000"
    timeout: float = Field(default=2.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    reporter: ReporterSettings = Field(default_factory=ReporterSettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
