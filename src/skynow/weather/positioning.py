"""Device positioning providers.

A position lookup is one awaitable call that either yields a Location or
raises PositioningError. The bounded wait and the staleness tolerance are
passed by the caller on every lookup.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from ..exceptions import PositioningError
from .models import Location

DEVICE_LOCATION_LABEL = "Your location"


class PositionProvider(ABC):
    """Source of the device's current coordinates."""

    @abstractmethod
    async def locate(self, *, timeout_seconds: float, maximum_age_seconds: float) -> Location:
        """Return the current position or raise PositioningError."""


class UnsupportedPositionProvider(PositionProvider):
    """Provider for environments with no positioning capability."""

    async def locate(self, *, timeout_seconds: float, maximum_age_seconds: float) -> Location:
        raise PositioningError("Positioning is not supported here.", reason="unsupported")


class FixedPositionProvider(PositionProvider):
    """Reports a position fixed at construction time, e.g. from configuration.

    ``fixed_at`` is the monotonic time the fix was taken. A fix older than the
    caller's ``maximum_age_seconds`` is reported as unavailable, matching how
    a positioning service refuses to hand back a stale cached position.
    """

    def __init__(
        self,
        latitude: float,
        longitude: float,
        *,
        label: str = DEVICE_LOCATION_LABEL,
        fixed_at: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._location = Location(latitude=latitude, longitude=longitude, label=label)
        self._clock = clock
        self._fixed_at = clock() if fixed_at is None else fixed_at

    async def locate(self, *, timeout_seconds: float, maximum_age_seconds: float) -> Location:
        age = self._clock() - self._fixed_at
        if age > maximum_age_seconds:
            raise PositioningError(
                f"Cached position is {age:.0f}s old (limit {maximum_age_seconds:.0f}s).",
                reason="unavailable",
            )
        return self._location
