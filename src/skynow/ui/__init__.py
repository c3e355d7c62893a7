"""Terminal presentation: view models and the rich dashboard view."""

from .dashboard import DashboardView, RichDashboard
from .models import CurrentView, DailyTile, HourlyTile, StatusMessage

__all__ = [
    "CurrentView",
    "DailyTile",
    "DashboardView",
    "HourlyTile",
    "RichDashboard",
    "StatusMessage",
]
