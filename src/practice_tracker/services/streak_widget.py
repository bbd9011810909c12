"""Home page 7-day streak widget."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from practice_tracker.api.client import ConsistencyClient
from practice_tracker.exceptions import PracticeTrackerError
from practice_tracker.models.consistency import MarkTodayResult, StreakDay
from practice_tracker.utils.dates import weekday_initial


logger = logging.getLogger(__name__)

WINDOW_DAYS = 7

# Labels used while the window has not loaded
_PLACEHOLDER_LABELS = ["M", "T", "W", "T", "F", "S", "S"]


@dataclass(frozen=True)
class StreakCell:
    """One dot/flame in the widget."""
    date: Optional[date]
    active: bool
    is_today: bool
    label: str

    @property
    def icon(self) -> str:
        return "flame" if self.active else "dot"


class HomeStreakWidget:
    """
    Trailing 7-day activity strip plus the once-per-mount "mark today" call.

    The mark call is fire-and-forget: failures are logged and never block
    the rest of the page.
    """

    def __init__(self, client: ConsistencyClient, today: date):
        self.client = client
        self.today = today
        self.days: Optional[List[StreakDay]] = None
        self.mark_result: Optional[MarkTodayResult] = None
        self._mark_attempted = False

    @property
    def visible(self) -> bool:
        """The widget only renders for signed-in users."""
        return self.client.is_authenticated

    @property
    def mark_attempted(self) -> bool:
        return self._mark_attempted

    def mount(self) -> Optional[MarkTodayResult]:
        """Issue the one-shot mark-today call if signed in."""
        if self._mark_attempted or not self.client.is_authenticated:
            return None

        self._mark_attempted = True
        try:
            self.mark_result = self.client.mark_today(self.today)
        except PracticeTrackerError as e:
            logger.error("Failed to mark streak: %s", e)
            return None

        if not self.mark_result.ok:
            logger.warning("Mark-today for %s was not confirmed", self.today)
        return self.mark_result

    def load(self) -> List[StreakDay]:
        """Fetch the trailing window; an error leaves it empty."""
        if not self.client.is_authenticated:
            self.days = None
            return []
        try:
            self.days = self.client.get_last_7_days(self.today)
        except PracticeTrackerError as e:
            logger.warning("Could not load streak window: %s", e)
            self.days = None
        return self.days or []

    def refresh(self) -> List[StreakDay]:
        """Mount then load, so a fresh mark shows in the window."""
        self.mount()
        return self.load()

    def cells(self) -> List[StreakCell]:
        if not self.days:
            return [
                StreakCell(date=None, active=False, is_today=False, label=label)
                for label in _PLACEHOLDER_LABELS
            ]
        return [
            StreakCell(
                date=day.date,
                active=day.active,
                is_today=day.date == self.today,
                label=weekday_initial(day.date),
            )
            for day in self.days
        ]

    @property
    def active_count(self) -> int:
        return sum(1 for day in self.days or [] if day.active)

    def summary(self) -> str:
        return f"{self.active_count}/{WINDOW_DAYS}"
