"""Shared Open-Meteo payload fixtures."""

from __future__ import annotations

from typing import Any

import pytest


def make_forecast_payload(*, hours: int = 24, days: int = 7) -> dict[str, Any]:
    """Forecast payload shaped like an Open-Meteo response for timezone=auto."""
    return {
        "latitude": 38.72,
        "longitude": -9.14,
        "timezone": "Europe/Lisbon",
        "utc_offset_seconds": 3600,
        "current": {
            "time": "2026-10-19T12:00",
            "temperature_2m": 21.4,
            "relative_humidity_2m": 63,
            "apparent_temperature": 20.6,
            "is_day": 1,
            "precipitation": 0.4,
            "weather_code": 2,
            "wind_speed_10m": 14.8,
            "wind_direction_10m": 315,
        },
        "hourly": {
            "time": [f"2026-10-19T{h:02d}:00" for h in range(hours)],
            "temperature_2m": [15.0 + h * 0.5 for h in range(hours)],
            "weather_code": [0 if h % 2 else 61 for h in range(hours)],
            "precipitation_probability": [h * 2 for h in range(hours)],
        },
        "daily": {
            "time": [f"2026-10-{19 + d:02d}" for d in range(days)],
            "weather_code": [3] * days,
            "temperature_2m_max": [22.5 - d for d in range(days)],
            "temperature_2m_min": [12.4 - d for d in range(days)],
            "precipitation_probability_mean": [10 * d for d in range(days)],
        },
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return make_forecast_payload()
