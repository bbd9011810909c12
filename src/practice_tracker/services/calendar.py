"""
Consistency calendar service.

Holds the month currently being viewed, clamps navigation to the range the
backend reports, and shapes a month of activity into a Sunday-first grid
with the streak overlay applied.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from practice_tracker.api.client import ConsistencyClient
from practice_tracker.exceptions import PracticeTrackerError
from practice_tracker.models.consistency import ConsistencyMonth, ConsistencyRange
from practice_tracker.utils.dates import (
    days_between,
    first_weekday_offset,
    month_label,
    shift_month,
    to_month_key,
)


logger = logging.getLogger(__name__)

# Streak length at which the flame overlay appears on the calendar
FLAME_STREAK_THRESHOLD = 7

EMPTY_STATE_MESSAGE = "Start using the app daily to build your consistency!"


class CellStatus(str, Enum):
    FUTURE = "future"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class CalendarCell:
    """One day in the month grid."""
    date: date
    active: bool
    is_today: bool
    is_future: bool
    in_streak: bool

    @property
    def day_number(self) -> int:
        return self.date.day

    @property
    def status(self) -> CellStatus:
        if self.is_future:
            return CellStatus.FUTURE
        return CellStatus.ACTIVE if self.active else CellStatus.INACTIVE


@dataclass
class CalendarGrid:
    """A month laid out in weeks; None marks padding before the 1st."""
    year: int
    month: int
    label: str
    cells: List[Optional[CalendarCell]] = field(default_factory=list)

    @property
    def weeks(self) -> List[List[Optional[CalendarCell]]]:
        rows = [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]
        if rows and len(rows[-1]) < 7:
            rows[-1] = rows[-1] + [None] * (7 - len(rows[-1]))
        return rows

    @property
    def days(self) -> List[CalendarCell]:
        return [c for c in self.cells if c is not None]


def is_in_streak(day: date, active: bool, today: date, current_streak: int) -> bool:
    """Whether a day gets the flame overlay.

    Only active, non-future days inside the trailing streak window qualify,
    and only once the streak reaches the flame threshold.
    """
    if not active or current_streak < FLAME_STREAK_THRESHOLD:
        return False
    days_ago = days_between(day, today)
    return 0 <= days_ago < current_streak


def build_grid(
    month_data: ConsistencyMonth,
    today: date,
    current_streak: int = 0,
) -> CalendarGrid:
    """Lay out a month for display."""
    year, month = month_data.year, month_data.month
    cells: List[Optional[CalendarCell]] = [None] * first_weekday_offset(year, month)

    for day in month_data.normalized().days:
        is_future = day.date > today
        cells.append(
            CalendarCell(
                date=day.date,
                active=day.active,
                is_today=day.date == today,
                is_future=is_future,
                in_streak=not is_future and is_in_streak(day.date, day.active, today, current_streak),
            )
        )

    return CalendarGrid(year=year, month=month, label=month_label(year, month), cells=cells)


class ConsistencyCalendar:
    """
    State behind the consistency calendar.

    Read failures never propagate: a failed range load leaves the calendar
    without bounds or streak, a failed month load shows the month as
    inactive.
    """

    def __init__(self, client: ConsistencyClient, today: date):
        self.client = client
        self.today = today
        self.view_year = today.year
        self.view_month = today.month
        self.range: Optional[ConsistencyRange] = None
        self.month_data: Optional[ConsistencyMonth] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_range(self) -> Optional[ConsistencyRange]:
        try:
            self.range = self.client.get_range(self.today)
        except PracticeTrackerError as e:
            logger.warning("Could not load consistency range: %s", e)
            self.range = None
        return self.range

    def load_month(self) -> ConsistencyMonth:
        try:
            self.month_data = self.client.get_month(self.view_year, self.view_month)
        except PracticeTrackerError as e:
            logger.warning(
                "Could not load consistency month %s: %s", self.view_month_key, e
            )
            self.month_data = ConsistencyMonth.empty(self.view_year, self.view_month)
        return self.month_data

    def load(self) -> None:
        self.load_range()
        self.load_month()

    # ------------------------------------------------------------------
    # Range and streak
    # ------------------------------------------------------------------

    @property
    def current_streak(self) -> int:
        return self.range.current_streak if self.range else 0

    @property
    def show_flame(self) -> bool:
        return self.current_streak >= FLAME_STREAK_THRESHOLD

    @property
    def start_month(self) -> Optional[str]:
        return self.range.start_month if self.range else None

    @property
    def current_month(self) -> str:
        if self.range:
            return self.range.current_month
        return to_month_key(self.today)

    @property
    def is_empty(self) -> bool:
        """No activity history: show the empty state instead of a grid."""
        return self.start_month is None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def view_month_key(self) -> str:
        return to_month_key((self.view_year, self.view_month))

    @property
    def can_go_back(self) -> bool:
        return self.start_month is not None and self.view_month_key > self.start_month

    @property
    def can_go_forward(self) -> bool:
        return self.view_month_key < self.current_month

    def prev_month(self) -> bool:
        """Step back one month. No-op at the start of the range."""
        if not self.can_go_back:
            return False
        self.view_year, self.view_month = shift_month(self.view_year, self.view_month, -1)
        self.month_data = None
        return True

    def next_month(self) -> bool:
        """Step forward one month. No-op at the current month."""
        if not self.can_go_forward:
            return False
        self.view_year, self.view_month = shift_month(self.view_year, self.view_month, 1)
        self.month_data = None
        return True

    def go_to(self, year: int, month: int) -> bool:
        """Jump to a month, if it lies within the range."""
        target = to_month_key((year, month))
        if self.start_month is None or not self.start_month <= target <= self.current_month:
            return False
        self.view_year, self.view_month = year, month
        self.month_data = None
        return True

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def month_label(self) -> str:
        return month_label(self.view_year, self.view_month)

    def build_grid(self) -> CalendarGrid:
        if self.month_data is None:
            self.load_month()
        return build_grid(self.month_data, self.today, self.current_streak)
