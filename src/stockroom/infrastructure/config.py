"""Application configuration — environment-driven settings via pydantic-settings.

Values come from environment variables (case-insensitive) or a ``.env``
file in the working directory. ``get_settings()`` is cached so the whole
process shares one instance.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str = "sqlite:///stockroom.db"
    database_pool_size: int = 5
    database_echo: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_sqlite_url(cls, v: str) -> str:
        """Accept the ``sqlite://file.db`` shorthand used by other tools."""
        if isinstance(v, str) and v.startswith("sqlite://") and not v.startswith("sqlite:///"):
            return "sqlite:///" + v[len("sqlite://"):]
        return v

    # HTTP
    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
