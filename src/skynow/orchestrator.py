"""Refresh pipeline: resolve a location, fetch its forecast, render panels.

Every refresh enters ``loading`` no matter what state the orchestrator is in.
Overlapping refreshes are not ordered against each other by default, so the
response that arrives last is the one left on screen even if its request was
issued first. With ``sequence_refreshes=True`` each refresh takes a
generation number and a result whose generation has been superseded is
dropped instead of rendered.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Literal

from .exceptions import NetworkError, NotFoundError, PositioningError
from .preferences import PreferenceStore, Theme
from .render import DEFAULT_HOURLY_WINDOW, build_current, build_daily, build_hourly
from .ui.dashboard import DashboardView
from .ui.models import StatusMessage
from .units import UnitSystem
from .weather.base import ForecastClient, GeocoderClient
from .weather.models import ForecastSnapshot, Location
from .weather.positioning import DEVICE_LOCATION_LABEL, PositionProvider

RefreshState = Literal["idle", "loading", "ready", "failed"]

STATUS_FETCHING = StatusMessage("Fetching weather...")
STATUS_READY = StatusMessage("Ready")
STATUS_FETCH_FAILED = StatusMessage(
    "Something went wrong fetching weather. Please try again.", "error"
)
STATUS_NOT_FOUND = StatusMessage("City not found. Try another name.", "error")
STATUS_SEARCH_FAILED = StatusMessage("Search failed. Please try again.", "error")
STATUS_LOCATING = StatusMessage("Locating...")
STATUS_GEO_UNSUPPORTED = StatusMessage(
    "Geolocation not supported here. Try searching a city.", "warn"
)
STATUS_GEO_FAILED = StatusMessage(
    "Location permission denied or unavailable. Try searching a city.", "error"
)
STATUS_TIP = StatusMessage("Tip: search for a city to begin.")


def searching_status(name: str) -> StatusMessage:
    return StatusMessage(f"Searching “{name}”...")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RefreshOrchestrator:
    """Drives status messaging, the weather clients and the dashboard view."""

    def __init__(
        self,
        *,
        geocoder: GeocoderClient,
        forecast: ForecastClient,
        preferences: PreferenceStore,
        view: DashboardView,
        logger: logging.Logger,
        position_provider: PositionProvider | None = None,
        hourly_window: int = DEFAULT_HOURLY_WINDOW,
        geo_timeout_seconds: float = 10.0,
        geo_maximum_age_seconds: float = 300.0,
        sequence_refreshes: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.geocoder = geocoder
        self.forecast = forecast
        self.preferences = preferences
        self.view = view
        self.logger = logger
        self.position_provider = position_provider
        self.hourly_window = hourly_window
        self.geo_timeout_seconds = geo_timeout_seconds
        self.geo_maximum_age_seconds = geo_maximum_age_seconds
        self.sequence_refreshes = sequence_refreshes
        self.clock = clock

        self.state: RefreshState = "idle"
        self.status: StatusMessage | None = None
        self.snapshot: ForecastSnapshot | None = None
        self.label: str = ""
        self._generation = 0

    async def refresh_by_coordinates(
        self, latitude: float, longitude: float, label: str = ""
    ) -> bool:
        """Fetch and render the forecast for coordinates. Returns True when rendered."""
        generation = self._begin()
        self._set_status(STATUS_FETCHING)
        self.view.show_loading()
        try:
            snapshot = await self.forecast.fetch(latitude, longitude)
            if self._superseded(generation):
                return False
            self.view.clear()
            self._render(snapshot, label)
        except NetworkError as exc:
            if self._superseded(generation):
                return False
            self.logger.warning("Forecast fetch failed: %s", exc)
            return self._fail(STATUS_FETCH_FAILED)
        except Exception as exc:
            if self._superseded(generation):
                return False
            self.logger.exception("Forecast processing failed: %s", exc)
            return self._fail(STATUS_FETCH_FAILED)

        self.snapshot = snapshot
        self.label = label
        self._set_status(STATUS_READY)
        self.state = "ready"
        return True

    async def refresh_by_place_name(self, name: str) -> bool:
        """Geocode ``name``, remember its label, then refresh by its coordinates."""
        generation = self._begin()
        self._set_status(searching_status(name))
        self.view.show_loading()
        try:
            location = await self.geocoder.resolve(name)
            if self._superseded(generation):
                return False
            self.preferences.last_location_label = location.label
        except NotFoundError as exc:
            if self._superseded(generation):
                return False
            self.logger.warning("Geocoding found nothing: %s", exc)
            return self._fail(STATUS_NOT_FOUND)
        except NetworkError as exc:
            if self._superseded(generation):
                return False
            self.logger.warning("Geocoding failed: %s", exc)
            return self._fail(STATUS_SEARCH_FAILED)
        except Exception as exc:
            if self._superseded(generation):
                return False
            self.logger.exception("Search failed: %s", exc)
            return self._fail(STATUS_SEARCH_FAILED)

        return await self.refresh_by_coordinates(
            location.latitude, location.longitude, location.label
        )

    async def submit_search(self, query: str) -> bool:
        """Search for a trimmed query; blank input does nothing."""
        name = query.strip()
        if not name:
            return False
        return await self.refresh_by_place_name(name)

    async def refresh_from_device(self) -> bool:
        """Refresh for the device position, reporting positioning failures."""
        self._set_status(STATUS_LOCATING)
        try:
            location = await self._locate()
        except PositioningError as exc:
            self.logger.warning("Positioning failed (%s): %s", exc.reason, exc)
            if exc.reason == "unsupported":
                self._set_status(STATUS_GEO_UNSUPPORTED)
            else:
                self._set_status(STATUS_GEO_FAILED)
            return False
        return await self._refresh_location(location)

    def toggle_theme(self) -> Theme:
        theme = self.preferences.toggle_theme()
        self.view.apply_theme(theme)
        self.logger.info("Theme switched to %s", theme)
        return theme

    async def toggle_units(self) -> UnitSystem:
        """Flip the unit system and re-run a full refresh for the last location."""
        units = self.preferences.toggle_units()
        self.logger.info("Units switched to %s", units)
        last_label = self.preferences.last_location_label
        if last_label:
            await self.refresh_by_place_name(last_label)
            return units
        try:
            location = await self._locate()
        except PositioningError as exc:
            self.logger.debug("Silent positioning after unit toggle failed: %s", exc)
            return units
        await self._refresh_location(location)
        return units

    async def start(self) -> bool:
        """Apply the stored theme and load the last location or the device position."""
        prefs = self.preferences.load()
        self.view.apply_theme(prefs.theme)
        if prefs.last_location_label:
            return await self.refresh_by_place_name(prefs.last_location_label)
        try:
            location = await self._locate()
        except PositioningError as exc:
            self.logger.info("No start location available: %s", exc)
            self._set_status(STATUS_TIP)
            return False
        return await self._refresh_location(location)

    async def _locate(self) -> Location:
        if self.position_provider is None:
            raise PositioningError("No position provider configured.", reason="unsupported")
        try:
            return await asyncio.wait_for(
                self.position_provider.locate(
                    timeout_seconds=self.geo_timeout_seconds,
                    maximum_age_seconds=self.geo_maximum_age_seconds,
                ),
                timeout=self.geo_timeout_seconds,
            )
        except TimeoutError as exc:
            raise PositioningError(
                f"Position not acquired within {self.geo_timeout_seconds:g}s.",
                reason="timeout",
            ) from exc

    async def _refresh_location(self, location: Location) -> bool:
        return await self.refresh_by_coordinates(
            location.latitude,
            location.longitude,
            location.label or DEVICE_LOCATION_LABEL,
        )

    def _render(self, snapshot: ForecastSnapshot, label: str) -> None:
        units = self.preferences.units
        self.view.render_current(build_current(snapshot, label, units))
        self.view.render_hourly(
            build_hourly(snapshot, units, self.clock(), count=self.hourly_window)
        )
        self.view.render_daily(build_daily(snapshot, units))

    def _begin(self) -> int:
        self._generation += 1
        self.state = "loading"
        return self._generation

    def _superseded(self, generation: int) -> bool:
        if self.sequence_refreshes and generation != self._generation:
            self.logger.debug(
                "Dropping result of refresh %d; refresh %d is newer.",
                generation,
                self._generation,
            )
            return True
        return False

    def _fail(self, status: StatusMessage) -> bool:
        self.view.clear()
        self._set_status(status)
        self.state = "failed"
        return False

    def _set_status(self, status: StatusMessage) -> None:
        self.status = status
        self.view.set_status(status)
