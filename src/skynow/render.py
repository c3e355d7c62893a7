"""Pure forecast-to-view-model transformations.

Nothing here touches the terminal. Every function reads a ForecastSnapshot
plus the active unit system and returns display-ready dataclasses.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .conditions import describe
from .ui.models import CurrentView, DailyTile, HourlyTile
from .units import (
    UnitSystem,
    compass_label,
    percent_label,
    precipitation_label,
    temperature_label,
    wind_label,
)
from .weather.models import ForecastSnapshot, HourlyPoint

DEFAULT_HOURLY_WINDOW = 12
DEFAULT_CURRENT_LABEL = "Current location"


def build_current(snapshot: ForecastSnapshot, label: str, units: UnitSystem) -> CurrentView:
    current = snapshot.current
    condition = describe(current.weather_code)
    return CurrentView(
        label=label or DEFAULT_CURRENT_LABEL,
        symbol=condition.symbol,
        description=condition.text,
        temperature=temperature_label(current.temperature, units),
        feels_like=temperature_label(current.feels_like, units),
        humidity=percent_label(current.humidity_percent),
        wind=f"{wind_label(current.wind_speed_kmh, units)} "
        f"{compass_label(current.wind_direction_deg)}",
        precipitation=precipitation_label(current.precipitation_mm),
        is_daytime=current.is_daytime,
    )


def hourly_window_start(points: Sequence[HourlyPoint], now: datetime) -> int:
    """Index of the first point at or after ``now``; 0 when every point is past."""
    for index, point in enumerate(points):
        if point.timestamp >= now:
            return index
    return 0


def select_hourly_window(
    points: Sequence[HourlyPoint],
    now: datetime,
    count: int = DEFAULT_HOURLY_WINDOW,
) -> list[HourlyPoint]:
    start = hourly_window_start(points, now)
    return list(points[start : start + count])


def build_hourly(
    snapshot: ForecastSnapshot,
    units: UnitSystem,
    now: datetime,
    count: int = DEFAULT_HOURLY_WINDOW,
) -> list[HourlyTile]:
    tiles: list[HourlyTile] = []
    for point in select_hourly_window(snapshot.hourly, now, count):
        condition = describe(point.weather_code)
        tiles.append(
            HourlyTile(
                time=point.timestamp.strftime("%H:%M"),
                symbol=condition.symbol,
                description=condition.text,
                temperature=temperature_label(point.temperature, units),
                precipitation_chance=f"{percent_label(point.precipitation_probability)} rain",
            )
        )
    return tiles


def build_daily(snapshot: ForecastSnapshot, units: UnitSystem) -> list[DailyTile]:
    tiles: list[DailyTile] = []
    for point in snapshot.daily:
        condition = describe(point.weather_code)
        tiles.append(
            DailyTile(
                day=point.date.strftime("%a"),
                symbol=condition.symbol,
                description=condition.text,
                temperature_max=temperature_label(point.temperature_max, units),
                temperature_min=temperature_label(point.temperature_min, units),
                precipitation_chance=f"{percent_label(point.precipitation_probability)} rain",
            )
        )
    return tiles
