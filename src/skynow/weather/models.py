"""Typed models for resolved locations and normalized forecast snapshots.

Temperatures are Celsius and speeds km/h throughout; display conversion
happens in ``skynow.render`` and never writes back into these models.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Coordinates plus the label shown above the current-conditions panel."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    label: str = ""


class CurrentReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    humidity_percent: float
    precipitation_mm: float = 0.0
    wind_speed_kmh: float
    wind_direction_deg: float
    weather_code: int
    is_daytime: bool


class HourlyPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: dt.datetime
    temperature: float
    weather_code: int
    precipitation_probability: float = 0.0


class DailyPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    weather_code: int
    temperature_max: float
    temperature_min: float
    precipitation_probability: float = 0.0


class ForecastSnapshot(BaseModel):
    """One complete current + hourly + daily payload for a coordinate pair."""

    model_config = ConfigDict(frozen=True)

    current: CurrentReading
    hourly: tuple[HourlyPoint, ...] = Field(default_factory=tuple)
    daily: tuple[DailyPoint, ...] = Field(default_factory=tuple)
    utc_offset_seconds: int = 0
    timezone: str | None = None
