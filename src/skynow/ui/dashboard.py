"""Dashboard view boundary and its rich terminal implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..preferences import Theme
from .models import CurrentView, DailyTile, HourlyTile, StatusMessage

_THEME_STYLES: dict[str, dict[str, str]] = {
    "light": {"border": "blue", "accent": "bold black", "muted": "grey50"},
    "dark": {"border": "magenta", "accent": "bold white", "muted": "grey62"},
}
_STATUS_STYLES = {"": "cyan", "warn": "yellow", "error": "bold red"}


class DashboardView(ABC):
    """Render targets driven by the refresh orchestrator."""

    @abstractmethod
    def set_status(self, status: StatusMessage) -> None: ...

    @abstractmethod
    def show_loading(self) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def render_current(self, view: CurrentView) -> None: ...

    @abstractmethod
    def render_hourly(self, tiles: list[HourlyTile]) -> None: ...

    @abstractmethod
    def render_daily(self, tiles: list[DailyTile]) -> None: ...

    @abstractmethod
    def apply_theme(self, theme: Theme) -> None: ...


class RichDashboard(DashboardView):
    """Prints status lines and forecast panels to a rich console."""

    def __init__(self, *, console: Console, theme: Theme = "light") -> None:
        self.console = console
        self.theme: Theme = theme
        self.status: StatusMessage | None = None
        self.loading = False
        self.current: CurrentView | None = None
        self.hourly: list[HourlyTile] = []
        self.daily: list[DailyTile] = []

    @property
    def _styles(self) -> dict[str, str]:
        return _THEME_STYLES.get(self.theme, _THEME_STYLES["light"])

    def set_status(self, status: StatusMessage) -> None:
        self.status = status
        style = _STATUS_STYLES.get(status.kind, "cyan")
        self.console.print(Text(status.text, style=style))

    def show_loading(self) -> None:
        self.loading = True
        self.console.print(Text("Loading forecast panels...", style=self._styles["muted"]))

    def clear(self) -> None:
        self.loading = False
        self.current = None
        self.hourly = []
        self.daily = []

    def render_current(self, view: CurrentView) -> None:
        self.current = view
        self.console.print(self._build_current_panel(view))

    def render_hourly(self, tiles: list[HourlyTile]) -> None:
        self.hourly = list(tiles)
        self.console.print(self._build_hourly_panel(self.hourly))

    def render_daily(self, tiles: list[DailyTile]) -> None:
        self.daily = list(tiles)
        self.console.print(self._build_daily_panel(self.daily))

    def apply_theme(self, theme: Theme) -> None:
        self.theme = theme

    def _build_current_panel(self, view: CurrentView) -> Panel:
        styles = self._styles
        header = Text()
        header.append(f"{view.symbol}  ", style=styles["accent"])
        header.append(view.label, style=styles["accent"])
        header.append(f"  feels like {view.feels_like}", style=styles["muted"])

        table = Table.grid(padding=(0, 2))
        table.add_column(style=styles["muted"])
        table.add_column(style="bold")
        table.add_row("Condition", view.description)
        table.add_row("Temperature", view.temperature)
        table.add_row("Humidity", view.humidity)
        table.add_row("Wind", view.wind)
        table.add_row("Precip", view.precipitation)
        title = "Now (day)" if view.is_daytime else "Now (night)"
        return Panel(Group(header, table), title=title, border_style=styles["border"])

    def _build_hourly_panel(self, tiles: list[HourlyTile]) -> Panel:
        table = Table(show_header=True, header_style="bold", expand=True)
        table.add_column("Time")
        table.add_column("")
        table.add_column("Temp", justify="right")
        table.add_column("Rain", justify="right")
        table.add_column("Condition", overflow="fold")
        for tile in tiles:
            table.add_row(
                tile.time,
                tile.symbol,
                tile.temperature,
                tile.precipitation_chance,
                tile.description,
            )
        if not tiles:
            table.add_row("-", "", "-", "-", "No hourly data")
        return Panel(table, title="Next hours", border_style=self._styles["border"])

    def _build_daily_panel(self, tiles: list[DailyTile]) -> Panel:
        table = Table(show_header=True, header_style="bold", expand=True)
        table.add_column("Day")
        table.add_column("")
        table.add_column("High / Low", justify="right")
        table.add_column("Rain", justify="right")
        table.add_column("Condition", overflow="fold")
        for tile in tiles:
            table.add_row(
                tile.day,
                tile.symbol,
                f"{tile.temperature_max} / {tile.temperature_min}",
                tile.precipitation_chance,
                tile.description,
            )
        if not tiles:
            table.add_row("-", "", "-", "-", "No daily data")
        return Panel(table, title="Daily", border_style=self._styles["border"])
