"""Provider-agnostic geocoding and forecast interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import ForecastSnapshot, Location


class GeocoderClient(ABC):
    """Resolves a free-text place name to a single best-match location."""

    @abstractmethod
    async def resolve(self, place_name: str) -> Location:
        """Return the best match or raise NotFoundError / NetworkError."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release client resources."""


class ForecastClient(ABC):
    """Fetches current, hourly and daily forecast data for coordinates."""

    @abstractmethod
    async def fetch(self, latitude: float, longitude: float) -> ForecastSnapshot:
        """Fetch and normalize a forecast snapshot or raise NetworkError."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release client resources."""
