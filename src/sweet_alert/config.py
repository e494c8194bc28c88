"""Configuration management with Pydantic Settings.

This module provides the process-wide defaults used when an alert builder
is created without explicit values, loaded and validated from environment
variables.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SweetAlertSettings(BaseSettings):
    """Alert defaults."""

    model_config = SettingsConfigDict(env_prefix="SWEET_ALERT_")

    autoclose: int | None = Field(
        default=1800,
        alias="SWEET_ALERT_AUTOCLOSE",
        description="Default auto-close timer in milliseconds (empty disables it)",
    )
    namespace: str = Field(
        default="sweet_alert",
        alias="SWEET_ALERT_NAMESPACE",
        description="Prefix for every flashed key",
    )

    @field_validator("autoclose", mode="before")
    @classmethod
    def empty_autoclose_is_none(cls, v: object) -> object:
        """Treat an empty value as 'no auto-close'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("autoclose")
    @classmethod
    def validate_autoclose(cls, v: int | None) -> int | None:
        """Validate the timer is not negative."""
        if v is not None and v < 0:
            raise ValueError("SWEET_ALERT_AUTOCLOSE must not be negative")
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Validate namespace format."""
        if not v or v.startswith(".") or v.endswith("."):
            raise ValueError(
                "SWEET_ALERT_NAMESPACE must be non-empty and not start or end with '.'"
            )
        return v


class RedisSettings(BaseSettings):
    """Redis flash store settings."""

    model_config = SettingsConfigDict(env_prefix="")

    url: str = Field(
        default="redis://localhost:6379",
        alias="REDIS_URL",
        description="Redis connection string",
    )
    flash_ttl_seconds: int = Field(
        default=300,
        alias="FLASH_TTL_SECONDS",
        description="Seconds a flashed value survives if never read",
        ge=1,
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate Redis URL format."""
        if not v.startswith(("redis://", "rediss://")):
            raise ValueError("REDIS_URL must start with redis:// or rediss://")
        return v


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from sweet_alert.config import get_settings

        settings = get_settings()
        print(settings.sweet_alert.autoclose)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sweet_alert: SweetAlertSettings = Field(default_factory=SweetAlertSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with sensitive values masked.
        """
        autoclose = self.sweet_alert.autoclose
        return {
            "autoclose": "(disabled)" if autoclose is None else f"{autoclose}ms",
            "namespace": self.sweet_alert.namespace,
            "redis_url": self._redact_url(self.redis.url),
            "flash_ttl_seconds": str(self.redis.flash_ttl_seconds),
            "log_level": self.log_level,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact password from URL if present."""
        if "@" in url and "://" in url:
            protocol_end = url.index("://") + 3
            at_pos = url.index("@")
            creds_part = url[protocol_end:at_pos]
            if ":" in creds_part:
                username = creds_part.split(":")[0]
                return f"{url[:protocol_end]}{username}:***@{url[at_pos + 1 :]}"
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
