"""Tracker services: consistency calendar, home streak widget, challenges."""

from .calendar import CalendarCell, CalendarGrid, CellStatus, ConsistencyCalendar, build_grid
from .challenges import ChallengeTracker, motivational_message
from .history import ChallengeHistory, HistorySummary
from .streak_widget import HomeStreakWidget, StreakCell

__all__ = [
    "CalendarCell",
    "CalendarGrid",
    "CellStatus",
    "ConsistencyCalendar",
    "build_grid",
    "ChallengeTracker",
    "motivational_message",
    "ChallengeHistory",
    "HistorySummary",
    "HomeStreakWidget",
    "StreakCell",
]
