"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./bms_notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify the JWT bearer tokens", min_length=1
    )
    jwt_algorithm: str = Field(
        default="HS256", description="Algorithm the bearer tokens are signed with"
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name or UTC offset used for notification timestamps",
    )
    notifications_page_size: int = Field(
        default=50,
        description="Number of notifications returned when the client omits ``take``",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
