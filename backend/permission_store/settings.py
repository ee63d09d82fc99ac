from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from environment variables or `.env`."""

    environment: str = Field(default="development", description="development / production / testing")
    log_level: str = Field(default="INFO")

    database_url: str = Field(default="sqlite+pysqlite:///./permission_store.db")
    database_echo: bool = Field(default=False, description="Echo SQL statements through SQLAlchemy")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"invalid log level: {value!r}")
        return level


settings = Settings()


__all__ = ["Settings", "settings"]
