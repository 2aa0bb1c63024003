"""Settings management using Pydantic for type validation and configuration."""

import logging
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL")


class TzResolverSettings(BaseSettings):
    """Runtime configuration for timezone resolution.

    Values come from ``TZRESOLVER_*`` environment variables, an optional YAML
    file, then the defaults below. Environment variables win over the file.
    """

    zone_set: Literal["all", "common"] = Field(
        default="all", description="Which pytz zone list the catalog enumerates"
    )
    eager_abbreviation_index: bool = Field(
        default=False, description="Build the abbreviation index when the resolver is created"
    )
    local_timezone: Optional[str] = Field(
        default=None, description="Explicit host zone, bypassing local detection"
    )
    fallback_timezone: str = Field(
        default="UTC", description="Host zone used when local detection finds nothing"
    )
    test_time: Optional[str] = Field(
        default=None, description="ISO 8601 timestamp that replaces the current time"
    )
    log_level: str = Field(
        default="INFO", description="Log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL"
    )
    log_colors: bool = Field(default=True, description="Colour console logs when supported")

    model_config = SettingsConfigDict(
        env_prefix="TZRESOLVER_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_yaml(cls, path: Union[str, Path], **overrides: Any) -> "TzResolverSettings":
        """Load settings from a YAML mapping.

        Keys in the file are used as initial values; ``TZRESOLVER_*``
        environment variables still take precedence, and ``overrides`` win
        over both.

        Raises:
            ValueError: If the file does not contain a mapping
        """
        config_path = Path(path)
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Settings file {config_path} must contain a mapping")

        logger.debug("Loaded settings keys from %s: %s", config_path, ", ".join(sorted(data)))

        values = dict(data)
        values.update(cls().model_dump(exclude_unset=True))
        values.update(overrides)
        return cls(**values)


_settings: Optional[TzResolverSettings] = None


def get_settings() -> TzResolverSettings:
    """Get the process-wide settings instance, creating it on first use."""
    if "_settings" not in globals() or globals()["_settings"] is None:
        globals()["_settings"] = TzResolverSettings()
    return globals()["_settings"]


def reset_settings() -> None:
    """Forget the cached settings so the next access re-reads the environment."""
    globals()["_settings"] = None
