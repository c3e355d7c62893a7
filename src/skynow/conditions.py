"""WMO weather-code lookup used by Open-Meteo."""

from __future__ import annotations

from typing import NamedTuple


class Condition(NamedTuple):
    symbol: str
    text: str


UNKNOWN_CONDITION = Condition("?", "N/A")

WEATHER_CODES: dict[int, Condition] = {
    0: Condition("☀️", "Clear sky"),
    1: Condition("🌤️", "Mainly clear"),
    2: Condition("⛅️", "Partly cloudy"),
    3: Condition("☁️", "Overcast"),
    45: Condition("🌫️", "Fog"),
    48: Condition("🌫️", "Depositing rime fog"),
    51: Condition("🌦️", "Light drizzle"),
    53: Condition("🌦️", "Moderate drizzle"),
    55: Condition("🌧️", "Dense drizzle"),
    56: Condition("🌧️", "Freezing drizzle"),
    57: Condition("🌧️", "Dense freezing drizzle"),
    61: Condition("🌧️", "Slight rain"),
    63: Condition("🌧️", "Moderate rain"),
    65: Condition("🌧️", "Heavy rain"),
    66: Condition("🌧️", "Freezing rain"),
    67: Condition("🌧️", "Heavy freezing rain"),
    71: Condition("🌨️", "Slight snow"),
    73: Condition("🌨️", "Moderate snow"),
    75: Condition("❄️", "Heavy snow"),
    77: Condition("❄️", "Snow grains"),
    80: Condition("🌦️", "Rain showers"),
    81: Condition("🌧️", "Heavy rain showers"),
    82: Condition("⛈️", "Violent rain showers"),
    85: Condition("🌨️", "Snow showers"),
    86: Condition("❄️", "Heavy snow showers"),
    95: Condition("⛈️", "Thunderstorm"),
    96: Condition("⛈️", "Thunderstorm w/ hail"),
    99: Condition("⛈️", "Thunderstorm w/ hail"),
}


def describe(code: int | None) -> Condition:
    """Return the (symbol, text) pair for a weather code, or the fallback pair."""
    if code is None:
        return UNKNOWN_CONDITION
    return WEATHER_CODES.get(code, UNKNOWN_CONDITION)
