"""Typed settings loader for the SkyNow weather dashboard."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    geocoding_url: AnyUrl = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="SKYNOW_GEOCODING_URL",
    )
    forecast_url: AnyUrl = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="SKYNOW_FORECAST_URL",
    )
    api_key: str | None = Field(default=None, alias="SKYNOW_API_KEY", repr=False)
    user_agent: str = Field(
        default="skynow/0.1 (terminal weather dashboard)",
        alias="SKYNOW_USER_AGENT",
    )
    timeout_seconds: float = Field(default=15.0, alias="SKYNOW_TIMEOUT_SECONDS")

    preferences_path: Path = Field(
        default=Path("~/.config/skynow/preferences.json"),
        alias="SKYNOW_PREFERENCES_PATH",
    )

    geo_timeout_seconds: float = Field(default=10.0, alias="SKYNOW_GEO_TIMEOUT_SECONDS")
    geo_maximum_age_seconds: float = Field(
        default=300.0,
        alias="SKYNOW_GEO_MAXIMUM_AGE_SECONDS",
    )
    device_lat: float | None = Field(default=None, alias="SKYNOW_DEVICE_LAT")
    device_lon: float | None = Field(default=None, alias="SKYNOW_DEVICE_LON")

    hourly_window: int = Field(default=12, alias="SKYNOW_HOURLY_WINDOW")
    sequence_refreshes: bool = Field(default=False, alias="SKYNOW_SEQUENCE_REFRESHES")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="SKYNOW_LOG_LEVEL",
    )

    @field_validator("device_lat", "device_lon", "api_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric bounds and paired device coordinates."""
        if not self.user_agent.strip():
            raise ValueError("SKYNOW_USER_AGENT must not be empty.")
        if self.timeout_seconds <= 0:
            raise ValueError("SKYNOW_TIMEOUT_SECONDS must be > 0.")
        if self.geo_timeout_seconds <= 0:
            raise ValueError("SKYNOW_GEO_TIMEOUT_SECONDS must be > 0.")
        if self.geo_maximum_age_seconds < 0:
            raise ValueError("SKYNOW_GEO_MAXIMUM_AGE_SECONDS must be >= 0.")
        if self.hourly_window <= 0:
            raise ValueError("SKYNOW_HOURLY_WINDOW must be > 0.")

        has_lat = self.device_lat is not None
        has_lon = self.device_lon is not None
        if has_lat != has_lon:
            raise ValueError("SKYNOW_DEVICE_LAT and SKYNOW_DEVICE_LON must be set together.")
        if has_lat and not (-90 <= self.device_lat <= 90):
            raise ValueError("SKYNOW_DEVICE_LAT must be between -90 and 90.")
        if has_lon and not (-180 <= self.device_lon <= 180):
            raise ValueError("SKYNOW_DEVICE_LON must be between -180 and 180.")
        return self

    @property
    def has_device_position(self) -> bool:
        return self.device_lat is not None and self.device_lon is not None

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no API key)."""
        return {
            "geocoding_url": str(self.geocoding_url),
            "forecast_url": str(self.forecast_url),
            "api_key_configured": self.api_key is not None,
            "timeout_seconds": self.timeout_seconds,
            "preferences_path": str(self.preferences_path),
            "geo_timeout_seconds": self.geo_timeout_seconds,
            "geo_maximum_age_seconds": self.geo_maximum_age_seconds,
            "device_position_configured": self.has_device_position,
            "hourly_window": self.hourly_window,
            "sequence_refreshes": self.sequence_refreshes,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    return settings.model_copy(
        update={"preferences_path": settings.preferences_path.expanduser()}
    )
