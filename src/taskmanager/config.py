"""Application configuration using environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Base URL for the frontend (allowed CORS origin)
    frontend_url: AnyHttpUrl = Field(
        default_factory=lambda: AnyHttpUrl("http://localhost:5173"),
        validation_alias=AliasChoices("FRONTEND_URL", "frontend_url"),
    )
    tasks_database_path: Path = Field(
        default_factory=lambda: Path("data/tasks.db"),
        validation_alias=AliasChoices("TASKS_DATABASE_PATH", "tasks_db"),
    )
    api_prefix: str = Field(
        default="",
        validation_alias=AliasChoices("API_PREFIX", "api_prefix"),
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
    )
    logging_settings_path: Path = Field(
        default_factory=lambda: Path("logging_settings.conf"),
        validation_alias=AliasChoices(
            "LOGGING_SETTINGS_PATH",
            "logging_settings_path",
        ),
    )

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @property
    def cors_origin(self) -> str:
        # AnyHttpUrl renders a bare host with a trailing slash
        return str(self.frontend_url).rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


__all__ = ["PROJECT_ROOT", "Settings", "get_settings"]
