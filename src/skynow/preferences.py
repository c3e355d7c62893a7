"""Persisted dashboard preferences (theme, units, last location)."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel

from .exceptions import PreferenceStoreError
from .units import UnitSystem

Theme = Literal["light", "dark"]

THEME_KEY = "theme"
UNITS_KEY = "units"
LAST_CITY_KEY = "lastCity"

DEFAULT_THEME: Theme = "light"
DEFAULT_UNITS: UnitSystem = "metric"


class Preferences(BaseModel):
    """Point-in-time view of the stored preferences."""

    theme: Theme = DEFAULT_THEME
    units: UnitSystem = DEFAULT_UNITS
    last_location_label: str = ""


class PreferenceStore(ABC):
    """Key-value backed preference access with defaults for absent keys.

    Values are not validated beyond presence: whatever string was written is
    what the next read returns.
    """

    @abstractmethod
    def _read(self, key: str) -> str | None:
        """Return the stored string for ``key`` or None when absent."""

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key`` before returning."""

    @property
    def theme(self) -> Theme:
        return cast(Theme, self._read(THEME_KEY) or DEFAULT_THEME)

    @theme.setter
    def theme(self, value: Theme) -> None:
        self._write(THEME_KEY, value)

    @property
    def units(self) -> UnitSystem:
        return cast(UnitSystem, self._read(UNITS_KEY) or DEFAULT_UNITS)

    @units.setter
    def units(self, value: UnitSystem) -> None:
        self._write(UNITS_KEY, value)

    @property
    def last_location_label(self) -> str:
        return self._read(LAST_CITY_KEY) or ""

    @last_location_label.setter
    def last_location_label(self, value: str) -> None:
        self._write(LAST_CITY_KEY, value)

    def load(self) -> Preferences:
        return Preferences.model_construct(
            theme=self.theme,
            units=self.units,
            last_location_label=self.last_location_label,
        )

    def toggle_theme(self) -> Theme:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme

    def toggle_units(self) -> UnitSystem:
        self.units = "imperial" if self.units == "metric" else "metric"
        return self.units


class MemoryPreferenceStore(PreferenceStore):
    """Process-local store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> str | None:
        return self._values.get(key)

    def _write(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore(PreferenceStore):
    """Durable store keeping all preference keys in one JSON object on disk."""

    def __init__(self, path: Path, logger: logging.Logger | None = None) -> None:
        self.path = path
        self.logger = logger or logging.getLogger("skynow.preferences")

    def _load_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            self.logger.warning("Ignoring preferences file %s: expected a JSON object", self.path)
            return {}
        return {str(key): value for key, value in raw.items() if isinstance(value, str)}

    def _read(self, key: str) -> str | None:
        return self._load_all().get(key)

    def _write(self, key: str, value: str) -> None:
        values = self._load_all()
        values[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fh:
                json.dump(values, fh, ensure_ascii=False, indent=2)
                fh.write("\n")
        except OSError as exc:
            raise PreferenceStoreError(f"Failed writing preferences to {self.path}: {exc}") from exc
