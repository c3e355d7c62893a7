"""Open-Meteo geocoding and forecast clients."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import NetworkError, NotFoundError
from ..redaction import sanitize_for_logging, sanitize_text
from .base import ForecastClient, GeocoderClient
from .models import CurrentReading, DailyPoint, ForecastSnapshot, HourlyPoint, Location

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
)
HOURLY_FIELDS = ("temperature_2m", "weather_code", "precipitation_probability")
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_mean",
)

GEOCODING_LANGUAGE = "en"


class _OpenMeteoHTTP:
    """Shared async HTTP plumbing for the Open-Meteo endpoints."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.user_agent,
            },
        )

    async def __aenter__(self) -> Any:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _with_api_key(self, params: dict[str, Any]) -> dict[str, Any]:
        if self.settings.api_key:
            return {**params, "apikey": self.settings.api_key}
        return params

    async def _request_json(
        self, url: str, params: dict[str, Any], context: str
    ) -> dict[str, Any]:
        query = self._with_api_key(params)
        self.logger.debug(
            "Open-Meteo %s request to %s params=%s", context, url, sanitize_for_logging(query)
        )
        try:
            response = await self._client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NetworkError(
                f"Open-Meteo {context} failed with status {status} "
                f"at {sanitize_text(str(exc.request.url))}: "
                f"{sanitize_text(exc.response.text[:300])}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"Open-Meteo {context} request failed at {url}: "
                f"{type(exc).__name__}: {sanitize_text(str(exc))}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Open-Meteo {context} returned non-JSON response at {url}.",
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise NetworkError(
                f"Open-Meteo {context} returned unexpected payload type "
                f"{type(payload).__name__} at {url}.",
                status_code=response.status_code,
            )
        return payload


class OpenMeteoGeocoder(_OpenMeteoHTTP, GeocoderClient):
    """Resolves place names through the Open-Meteo geocoding search endpoint."""

    async def resolve(self, place_name: str) -> Location:
        name = place_name.strip()
        if not name:
            raise ValueError("place_name must not be empty.")

        payload = await self._request_json(
            str(self.settings.geocoding_url),
            params={
                "name": name,
                "count": 1,
                "language": GEOCODING_LANGUAGE,
                "format": "json",
            },
            context="geocoding",
        )
        results = payload.get("results")
        if not isinstance(results, list) or not results:
            raise NotFoundError(f"City not found: {name!r}")

        best = results[0]
        return Location(
            latitude=best["latitude"],
            longitude=best["longitude"],
            label=self._label(best),
        )

    @staticmethod
    def _label(result: dict[str, Any]) -> str:
        name = str(result.get("name") or "")
        country = result.get("country")
        if country:
            return f"{name}, {country}"
        return name


class OpenMeteoForecastClient(_OpenMeteoHTTP, ForecastClient):
    """Fetches and normalizes forecast snapshots from the Open-Meteo forecast API.

    Only the fields needed for rendering are indexed. A payload missing one of
    them raises an ordinary ``KeyError``/``IndexError``/``ValidationError``
    rather than a dedicated error type.
    """

    async def fetch(self, latitude: float, longitude: float) -> ForecastSnapshot:
        payload = await self._request_json(
            str(self.settings.forecast_url),
            params={
                "latitude": latitude,
                "longitude": longitude,
                "timezone": "auto",
                "current": ",".join(CURRENT_FIELDS),
                "hourly": ",".join(HOURLY_FIELDS),
                "daily": ",".join(DAILY_FIELDS),
            },
            context="forecast fetch",
        )
        return normalize_forecast(payload)


def normalize_forecast(payload: dict[str, Any]) -> ForecastSnapshot:
    """Build a ForecastSnapshot from a raw Open-Meteo forecast payload."""
    offset_seconds = int(payload.get("utc_offset_seconds") or 0)
    tz = timezone(timedelta(seconds=offset_seconds))

    current = payload["current"]
    reading = CurrentReading(
        temperature=current["temperature_2m"],
        feels_like=current["apparent_temperature"],
        humidity_percent=current["relative_humidity_2m"],
        precipitation_mm=current.get("precipitation") or 0,
        wind_speed_kmh=current["wind_speed_10m"],
        wind_direction_deg=current["wind_direction_10m"],
        weather_code=current["weather_code"],
        is_daytime=bool(current["is_day"]),
    )

    hourly = payload["hourly"]
    hourly_temps = hourly["temperature_2m"]
    hourly_codes = hourly["weather_code"]
    hourly_pops = hourly.get("precipitation_probability")
    hourly_points = tuple(
        HourlyPoint(
            timestamp=_local_timestamp(stamp, tz),
            temperature=hourly_temps[i],
            weather_code=hourly_codes[i],
            precipitation_probability=_optional_at(hourly_pops, i),
        )
        for i, stamp in enumerate(hourly["time"])
    )

    daily = payload["daily"]
    daily_codes = daily["weather_code"]
    daily_max = daily["temperature_2m_max"]
    daily_min = daily["temperature_2m_min"]
    daily_pops = daily.get("precipitation_probability_mean")
    daily_points = tuple(
        DailyPoint(
            date=date.fromisoformat(str(day)[:10]),
            weather_code=daily_codes[i],
            temperature_max=daily_max[i],
            temperature_min=daily_min[i],
            precipitation_probability=_optional_at(daily_pops, i),
        )
        for i, day in enumerate(daily["time"])
    )

    return ForecastSnapshot(
        current=reading,
        hourly=hourly_points,
        daily=daily_points,
        utc_offset_seconds=offset_seconds,
        timezone=payload.get("timezone"),
    )


def _local_timestamp(value: str, tz: timezone) -> datetime:
    # timezone=auto returns wall-clock times without an offset.
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=tz)


def _optional_at(values: list[Any] | None, index: int) -> float:
    if not isinstance(values, list) or index >= len(values):
        return 0.0
    value = values[index]
    return float(value) if isinstance(value, (int, float)) else 0.0
