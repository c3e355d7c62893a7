"""Tests for forecast view-model building and hourly window selection."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from conftest import make_forecast_payload
from skynow.render import (
    build_current,
    build_daily,
    build_hourly,
    hourly_window_start,
    select_hourly_window,
)
from skynow.weather.models import HourlyPoint
from skynow.weather.open_meteo import normalize_forecast

START = datetime(2026, 10, 19, 0, 0, tzinfo=UTC)


def _hourly_points(count: int) -> list[HourlyPoint]:
    return [
        HourlyPoint(timestamp=START + timedelta(hours=i), temperature=10.0 + i, weather_code=0)
        for i in range(count)
    ]


def test_window_starts_at_point_matching_now() -> None:
    points = _hourly_points(20)
    now = START + timedelta(hours=5)

    window = select_hourly_window(points, now)

    assert hourly_window_start(points, now) == 5
    assert [p.timestamp for p in window] == [p.timestamp for p in points[5:17]]
    assert len(window) == 12


def test_window_starts_at_next_point_between_hours() -> None:
    points = _hourly_points(20)
    assert hourly_window_start(points, START + timedelta(hours=5, minutes=1)) == 6


def test_window_falls_back_to_start_when_series_is_in_the_past() -> None:
    points = _hourly_points(20)
    now = START + timedelta(days=2)
    assert hourly_window_start(points, now) == 0
    assert len(select_hourly_window(points, now)) == 12


def test_window_is_shorter_near_series_end() -> None:
    points = _hourly_points(20)
    window = select_hourly_window(points, START + timedelta(hours=15))
    assert len(window) == 5


def test_window_of_empty_series_is_empty() -> None:
    assert hourly_window_start([], START) == 0
    assert select_hourly_window([], START) == []


def test_build_current_formats_in_active_units(forecast_payload: dict[str, Any]) -> None:
    snapshot = normalize_forecast(forecast_payload)

    metric = build_current(snapshot, "Lisbon, Portugal", "metric")
    assert metric.label == "Lisbon, Portugal"
    assert metric.description == "Partly cloudy"
    assert metric.temperature == "21°C"
    assert metric.feels_like == "21°C"
    assert metric.humidity == "63%"
    assert metric.wind == "15 km/h NW"
    assert metric.precipitation == "0 mm"

    imperial = build_current(snapshot, "", "imperial")
    assert imperial.label == "Current location"
    assert imperial.temperature == "71°F"
    assert imperial.wind == "9 mph NW"


def test_hourly_tiles_use_local_wall_clock(forecast_payload: dict[str, Any]) -> None:
    snapshot = normalize_forecast(forecast_payload)
    # 10:30 UTC is 11:30 local (+01:00); the next point is 12:00 local.
    now = datetime(2026, 10, 19, 10, 30, tzinfo=UTC)

    tiles = build_hourly(snapshot, "metric", now)

    assert len(tiles) == 12
    assert tiles[0].time == "12:00"
    assert tiles[0].temperature == "21°C"
    assert tiles[0].precipitation_chance == "24% rain"
    assert tiles[0].description == "Slight rain"


def test_daily_tiles_cover_every_day_in_order() -> None:
    snapshot = normalize_forecast(make_forecast_payload(days=5))

    tiles = build_daily(snapshot, "imperial")

    assert [t.day for t in tiles] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert tiles[0].temperature_max == "73°F"
    assert tiles[0].temperature_min == "54°F"
    assert tiles[0].precipitation_chance == "0% rain"
    assert tiles[0].symbol == "☁️"


def test_unit_round_trip_leaves_snapshot_untouched(forecast_payload: dict[str, Any]) -> None:
    snapshot = normalize_forecast(forecast_payload)
    before = snapshot.model_dump()
    now = datetime(2026, 10, 19, 10, 30, tzinfo=UTC)

    metric_first = (build_current(snapshot, "", "metric"), build_hourly(snapshot, "metric", now))
    build_current(snapshot, "", "imperial")
    build_hourly(snapshot, "imperial", now)
    build_daily(snapshot, "imperial")
    metric_again = (build_current(snapshot, "", "metric"), build_hourly(snapshot, "metric", now))

    assert metric_first == metric_again
    assert snapshot.model_dump() == before
