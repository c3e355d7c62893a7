"""Typed view models handed from the render step to a dashboard view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StatusKind = Literal["", "warn", "error"]


@dataclass(slots=True, frozen=True)
class StatusMessage:
    """Single status line shown above the panels."""

    text: str
    kind: StatusKind = ""


@dataclass(slots=True, frozen=True)
class CurrentView:
    label: str
    symbol: str
    description: str
    temperature: str
    feels_like: str
    humidity: str
    wind: str
    precipitation: str
    is_daytime: bool


@dataclass(slots=True, frozen=True)
class HourlyTile:
    time: str
    symbol: str
    description: str
    temperature: str
    precipitation_chance: str


@dataclass(slots=True, frozen=True)
class DailyTile:
    day: str
    symbol: str
    description: str
    temperature_max: str
    temperature_min: str
    precipitation_chance: str
