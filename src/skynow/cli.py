"""SkyNow CLI: search a city or use the device position and show its forecast."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from rich.console import Console

from .config import Settings, load_settings
from .exceptions import ConfigError, PreferenceStoreError
from .log_setup import setup_logger
from .orchestrator import RefreshOrchestrator
from .preferences import JsonFilePreferenceStore, PreferenceStore
from .ui.dashboard import RichDashboard
from .weather.open_meteo import OpenMeteoForecastClient, OpenMeteoGeocoder
from .weather.positioning import (
    FixedPositionProvider,
    PositionProvider,
    UnsupportedPositionProvider,
)

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_REFRESH_FAILED = 4
EXIT_UNEXPECTED = 99


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse SkyNow CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="skynow",
        description="Terminal weather dashboard backed by Open-Meteo.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("start", help="Load the last searched city, else the device position.")

    search = sub.add_parser("search", help="Search a city by name.")
    search.add_argument("name", nargs="+", help="Free-text place name.")

    sub.add_parser("locate", help="Show the forecast for the device position.")

    coords = sub.add_parser("coords", help="Show the forecast for explicit coordinates.")
    coords.add_argument("lat", type=float, help="Latitude.")
    coords.add_argument("lon", type=float, help="Longitude.")
    coords.add_argument("--label", default="", help="Label shown above current conditions.")

    sub.add_parser("toggle-units", help="Switch metric/imperial and refresh.")
    sub.add_parser("toggle-theme", help="Switch light/dark theme.")
    sub.add_parser("prefs", help="Print stored preferences.")
    return parser.parse_args(argv)


def _position_provider(settings: Settings) -> PositionProvider:
    if settings.device_lat is None or settings.device_lon is None:
        return UnsupportedPositionProvider()
    return FixedPositionProvider(settings.device_lat, settings.device_lon)


def _command(
    args: argparse.Namespace, orchestrator: RefreshOrchestrator
) -> Callable[[], Awaitable[object]]:
    if args.command == "start":
        return orchestrator.start
    if args.command == "search":
        return lambda: orchestrator.submit_search(" ".join(args.name))
    if args.command == "locate":
        return orchestrator.refresh_from_device
    if args.command == "coords":
        return lambda: orchestrator.refresh_by_coordinates(args.lat, args.lon, args.label)
    if args.command == "toggle-units":
        return orchestrator.toggle_units

    async def _toggle_theme() -> str:
        return orchestrator.toggle_theme()

    return _toggle_theme


async def run(
    args: argparse.Namespace,
    settings: Settings,
    preferences: PreferenceStore,
    console: Console,
    logger: logging.Logger,
) -> int:
    """Run one refresh command against live Open-Meteo clients."""
    view = RichDashboard(console=console, theme=preferences.theme)
    async with (
        OpenMeteoGeocoder(settings, logger) as geocoder,
        OpenMeteoForecastClient(settings, logger) as forecast,
    ):
        orchestrator = RefreshOrchestrator(
            geocoder=geocoder,
            forecast=forecast,
            preferences=preferences,
            view=view,
            logger=logger,
            position_provider=_position_provider(settings),
            hourly_window=settings.hourly_window,
            geo_timeout_seconds=settings.geo_timeout_seconds,
            geo_maximum_age_seconds=settings.geo_maximum_age_seconds,
            sequence_refreshes=settings.sequence_refreshes,
        )
        await _command(args, orchestrator)()
    if orchestrator.status is not None and orchestrator.status.kind in {"warn", "error"}:
        return EXIT_REFRESH_FAILED
    if args.command == "toggle-theme":
        console.print(f"Theme set to {preferences.theme}.")
    return EXIT_OK


def _print_preferences(console: Console, preferences: PreferenceStore) -> None:
    prefs = preferences.load()
    console.print(
        f"theme={prefs.theme} units={prefs.units} "
        f"last_location={prefs.last_location_label or '-'}"
    )


def main(argv: list[str] | None = None) -> int:
    """Run the SkyNow CLI."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return EXIT_CONFIG

    logger.setLevel(settings.log_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())
    preferences = JsonFilePreferenceStore(settings.preferences_path, logger=logger)

    try:
        if args.command == "prefs":
            _print_preferences(console, preferences)
            return EXIT_OK
        return asyncio.run(run(args, settings, preferences, console, logger))
    except PreferenceStoreError as exc:
        logger.error("Preference storage failure: %s", exc)
        return EXIT_CONFIG
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        logger.exception("Unexpected SkyNow failure: %s", exc)
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
