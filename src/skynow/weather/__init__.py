"""Open-Meteo weather integrations and device positioning."""

from .base import ForecastClient, GeocoderClient
from .models import CurrentReading, DailyPoint, ForecastSnapshot, HourlyPoint, Location
from .open_meteo import OpenMeteoForecastClient, OpenMeteoGeocoder, normalize_forecast
from .positioning import (
    DEVICE_LOCATION_LABEL,
    FixedPositionProvider,
    PositionProvider,
    UnsupportedPositionProvider,
)

__all__ = [
    "CurrentReading",
    "DEVICE_LOCATION_LABEL",
    "DailyPoint",
    "FixedPositionProvider",
    "ForecastClient",
    "ForecastSnapshot",
    "GeocoderClient",
    "HourlyPoint",
    "Location",
    "OpenMeteoForecastClient",
    "OpenMeteoGeocoder",
    "PositionProvider",
    "UnsupportedPositionProvider",
    "normalize_forecast",
]
