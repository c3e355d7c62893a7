"""Display formatting for metric readings in the active unit system.

Forecast data is always stored in metric. These helpers convert only at
display time, so switching unit systems never alters stored values.
"""

from __future__ import annotations

import math
from typing import Literal

UnitSystem = Literal["metric", "imperial"]

KMH_TO_MPH = 0.621371

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (0.5 -> 1, -0.5 -> 0)."""
    return math.floor(value + 0.5)


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def kmh_to_mph(kmh: float) -> float:
    return kmh * KMH_TO_MPH


def temperature_label(celsius: float, units: UnitSystem) -> str:
    """Format a Celsius reading, e.g. ``0 -> "0°C"`` or ``"32°F"``."""
    if units == "imperial":
        return f"{round_half_up(celsius_to_fahrenheit(celsius))}°F"
    return f"{round_half_up(celsius)}°C"


def wind_label(kmh: float, units: UnitSystem) -> str:
    """Format a km/h wind speed, e.g. ``100 -> "100 km/h"`` or ``"62 mph"``."""
    if units == "imperial":
        return f"{round_half_up(kmh_to_mph(kmh))} mph"
    return f"{round_half_up(kmh)} km/h"


def compass_label(degrees: float) -> str:
    """Map a bearing in degrees onto one of 16 compass points."""
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def precipitation_label(mm: float | None) -> str:
    return f"{round_half_up(mm or 0)} mm"


def percent_label(value: float | None) -> str:
    return f"{round_half_up(value or 0)}%"
