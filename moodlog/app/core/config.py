from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/moodlog.db"


def normalize_database_url(raw_url: str | None) -> str:
    """Map sync driver URLs onto their async drivers and create the sqlite directory."""

    url = str(raw_url) if raw_url else DEFAULT_DATABASE_URL
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://") and "+aiosqlite" not in url:
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    if url.startswith("sqlite+aiosqlite:///"):
        db_path = url.split("///", maxsplit=1)[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        alias="DATABASE_URL",
    )
    log_file: Path = Field(default=Path("logs/moodlog.log"))
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_max_bytes: int = Field(default=1_000_000, alias="LOG_MAX_BYTES")
    log_backup_count: int = Field(default=3, alias="LOG_BACKUP_COUNT")

    # Analytics engine configuration
    analytics_top_tags: int = Field(default=10, alias="ANALYTICS_TOP_TAGS")
    analytics_default_range_months: int = Field(
        default=1,
        alias="ANALYTICS_DEFAULT_RANGE_MONTHS",
    )

    version: str = Field(default_factory=lambda: Settings._load_version())

    @staticmethod
    def _load_version() -> str:
        version_env = os.getenv("VERSION")
        if version_env:
            return version_env
        version_file = Path("VERSION")
        if version_file.exists():
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str) -> Path:
        path = Path(value)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        if not value:
            return "INFO"
        normalized = str(value).upper()
        if normalized not in logging.getLevelNamesMapping():
            return "INFO"
        return normalized

    @field_validator("analytics_top_tags", mode="before")
    @classmethod
    def _validate_top_tags(cls, value: int | str | None) -> int:
        if value is None:
            return 10
        return max(int(value), 1)

    @field_validator("analytics_default_range_months", mode="before")
    @classmethod
    def _validate_default_range(cls, value: int | str | None) -> int:
        if value is None:
            return 1
        return max(int(value), 1)

    @field_validator("database_url", mode="before")
    @classmethod
    def _validate_database_url(cls, value: str | None) -> str:
        return normalize_database_url(value)


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
