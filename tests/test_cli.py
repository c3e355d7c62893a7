"""CLI smoke tests with the Open-Meteo clients swapped for in-process fakes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from conftest import make_forecast_payload
from skynow import cli
from skynow.exceptions import NetworkError, NotFoundError
from skynow.weather.models import ForecastSnapshot, Location
from skynow.weather.open_meteo import normalize_forecast


class _FakeClientBase:
    instances: list[Any] = []

    def __init__(self, settings: Any, logger: Any) -> None:
        self.settings = settings
        self.closed = False
        type(self).instances.append(self)

    async def __aenter__(self) -> Any:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.closed = True


class FakeGeocoder(_FakeClientBase):
    instances: list[Any] = []
    result: Location | Exception = Location(latitude=38.72, longitude=-9.14, label="Lisbon, Portugal")

    async def resolve(self, place_name: str) -> Location:
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeForecast(_FakeClientBase):
    instances: list[Any] = []
    result: ForecastSnapshot | Exception = normalize_forecast(make_forecast_payload())

    async def fetch(self, latitude: float, longitude: float) -> ForecastSnapshot:
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def prefs_path(monkeypatch: Any, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "prefs.json"
    monkeypatch.setenv("SKYNOW_PREFERENCES_PATH", str(path))
    monkeypatch.delenv("SKYNOW_DEVICE_LAT", raising=False)
    monkeypatch.delenv("SKYNOW_DEVICE_LON", raising=False)
    monkeypatch.setattr(cli, "OpenMeteoGeocoder", FakeGeocoder)
    monkeypatch.setattr(cli, "OpenMeteoForecastClient", FakeForecast)
    monkeypatch.setattr(FakeGeocoder, "instances", [])
    monkeypatch.setattr(FakeForecast, "instances", [])
    return path


def test_search_renders_and_persists_label(prefs_path: Path, capsys: Any) -> None:
    exit_code = cli.main(["search", "Lisbon"])

    assert exit_code == cli.EXIT_OK
    output = capsys.readouterr().out
    assert "Lisbon, Portugal" in output
    assert "Ready" in output
    assert json.loads(prefs_path.read_text(encoding="utf-8"))["lastCity"] == "Lisbon, Portugal"
    assert all(client.closed for client in FakeGeocoder.instances + FakeForecast.instances)


def test_search_not_found_exits_with_failure(
    prefs_path: Path, capsys: Any, monkeypatch: Any
) -> None:
    monkeypatch.setattr(FakeGeocoder, "result", NotFoundError("none"))

    assert cli.main(["search", "Nowhereville"]) == cli.EXIT_REFRESH_FAILED
    assert "City not found" in capsys.readouterr().out
    assert not prefs_path.exists()


def test_coords_fetch_failure_exits_with_failure(
    prefs_path: Path, capsys: Any, monkeypatch: Any
) -> None:
    monkeypatch.setattr(FakeForecast, "result", NetworkError("status 500", status_code=500))

    assert cli.main(["coords", "1.0", "2.0"]) == cli.EXIT_REFRESH_FAILED
    assert "Something went wrong fetching weather" in capsys.readouterr().out


def test_toggle_units_then_prefs(prefs_path: Path, capsys: Any) -> None:
    prefs_path.write_text(json.dumps({"lastCity": "Lisbon, Portugal"}), encoding="utf-8")

    assert cli.main(["toggle-units"]) == cli.EXIT_OK
    assert "71°F" in capsys.readouterr().out

    assert cli.main(["prefs"]) == cli.EXIT_OK
    assert "units=imperial" in capsys.readouterr().out


def test_toggle_theme(prefs_path: Path, capsys: Any) -> None:
    assert cli.main(["toggle-theme"]) == cli.EXIT_OK
    assert "Theme set to dark." in capsys.readouterr().out
    assert json.loads(prefs_path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_start_without_anything_shows_tip(prefs_path: Path, capsys: Any) -> None:
    assert cli.main(["start"]) == cli.EXIT_OK
    assert "Tip: search for a city to begin." in capsys.readouterr().out


def test_locate_uses_configured_device_position(
    prefs_path: Path, capsys: Any, monkeypatch: Any
) -> None:
    monkeypatch.setenv("SKYNOW_DEVICE_LAT", "51.5")
    monkeypatch.setenv("SKYNOW_DEVICE_LON", "-0.12")

    assert cli.main(["locate"]) == cli.EXIT_OK
    assert "Your location" in capsys.readouterr().out


def test_locate_without_device_position_warns(prefs_path: Path, capsys: Any) -> None:
    assert cli.main(["locate"]) == cli.EXIT_REFRESH_FAILED
    assert "Geolocation not supported" in capsys.readouterr().out


def test_invalid_config_exits_with_config_code(prefs_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setenv("SKYNOW_DEVICE_LAT", "12")

    assert cli.main(["start"]) == cli.EXIT_CONFIG
