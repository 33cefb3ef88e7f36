"""
Application configuration via Pydantic Settings.

All values are sourced from environment variables (prefixed ``DIFFVAULT_``)
or an .env file.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import BeforeValidator, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment identifiers."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(StrEnum):
    """Structured log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_SUPPORTED_EXTENSIONS: list[str] = [
    ".txt",
    ".md",
    ".log",
    ".conf",
    ".ini",
    ".csv",
    ".tsv",
    ".js",
    ".jsx",
    ".ts",
    ".tsx",
    ".json",
    ".py",
    ".css",
    ".html",
    ".xml",
    ".yaml",
    ".yml",
    ".sh",
    ".bash",
    ".sql",
    ".env",
]


def _parse_csv_list(value: str | list[str]) -> list[str]:
    """Accept comma-separated string or list."""
    if isinstance(value, list):
        return value
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Centralised, type-validated application configuration.

    Reads from environment variables with an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIFFVAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )

    # ── Application ────────────────────────────────────────────────────── #
    app_name: str = Field(default="DiffVault", description="Human-readable application name")
    app_version: str = Field(default="1.0.0", description="Semantic version string")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment (development|testing|production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode. Must be False in production.",
    )

    # ── Server ─────────────────────────────────────────────────────────── #
    host: str = Field(default="127.0.0.1", description="Bind host. Default local-only.")
    port: int = Field(default=8000, ge=1024, le=65535, description="Bind port")
    reload: bool = Field(default=False, description="Auto-reload on code change (dev only)")

    # ── CORS ───────────────────────────────────────────────────────────── #
    cors_origins: Annotated[list[str], NoDecode, BeforeValidator(_parse_csv_list)] = Field(
        default=["http://localhost:3000"],
        description="Comma-separated list of allowed CORS origins",
    )

    # ── Input limits ───────────────────────────────────────────────────── #
    max_file_size_bytes: int = Field(
        default=1_048_576,
        ge=1,
        le=64 * 1_048_576,
        description="Maximum size of a single uploaded file",
    )
    max_diff_input_bytes: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Maximum combined UTF-8 size of both diff inputs. "
            "Defaults to twice max_file_size_bytes."
        ),
    )
    supported_file_extensions: Annotated[
        list[str], NoDecode, BeforeValidator(_parse_csv_list)
    ] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_EXTENSIONS),
        description="File extensions accepted by the upload endpoint",
    )

    # ── Rate Limiting ──────────────────────────────────────────────────── #
    rate_limit_default: str = Field(
        default="100/minute",
        description="Default rate limit string (slowapi format)",
    )

    # ── Logging ────────────────────────────────────────────────────────── #
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Minimum log level")
    log_json: bool = Field(default=True, description="Emit logs as JSON (False for dev console)")
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # ── Validators ─────────────────────────────────────────────────────── #

    @field_validator("supported_file_extensions")
    @classmethod
    def normalise_extensions(cls, v: list[str]) -> list[str]:
        normalised = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            normalised.append(ext)
        return normalised

    @model_validator(mode="after")
    def production_safety_checks(self) -> Settings:
        if self.environment == Environment.PRODUCTION:
            if self.debug:
                raise ValueError("debug must be False in production")
            if self.reload:
                raise ValueError("reload must be False in production")
        return self

    @property
    def diff_input_limit_bytes(self) -> int:
        """Combined input limit with the default applied."""
        return self.max_diff_input_bytes or self.max_file_size_bytes * 2


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the cached Settings singleton.

    Use dependency injection in FastAPI routes:
        settings: Settings = Depends(get_settings)
    """
    return Settings()
