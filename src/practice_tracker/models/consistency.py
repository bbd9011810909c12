"""Wire models for the consistency calendar and the home streak widget."""

import datetime as dt
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from practice_tracker.utils.dates import format_date, month_dates, parse_month_key


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class ConsistencyDay(BaseModel):
    """Whether the user did a qualifying activity on a date."""

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(..., description="Calendar date")
    active: bool = Field(default=False, description="Activity recorded that day")


class StreakDay(ConsistencyDay):
    """One day of the trailing 7-day window shown on the home page."""


class ConsistencyRange(BaseModel):
    """Navigable month range plus the current streak."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    start_month: Optional[str] = Field(None, description="First month with activity (YYYY-MM)")
    current_month: str = Field(..., description="Month containing today (YYYY-MM)")
    current_streak: int = Field(default=0, ge=0, description="Consecutive active days ending today")

    @field_validator("start_month", "current_month")
    @classmethod
    def _check_month_key(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_month_key(value)
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "ConsistencyRange":
        if self.start_month is not None and self.start_month > self.current_month:
            raise ValueError(
                f"startMonth {self.start_month} is after currentMonth {self.current_month}"
            )
        return self

    @property
    def has_history(self) -> bool:
        return self.start_month is not None


class ConsistencyMonth(BaseModel):
    """Per-day activity for one calendar month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    days: List[ConsistencyDay] = Field(default_factory=list)

    def normalized(self) -> "ConsistencyMonth":
        """One entry per calendar day; days without a record are inactive."""
        active_dates = {d.date for d in self.days if d.active}
        return ConsistencyMonth(
            year=self.year,
            month=self.month,
            days=[
                ConsistencyDay(date=d, active=d in active_dates)
                for d in month_dates(self.year, self.month)
            ],
        )

    def is_active(self, d: dt.date) -> bool:
        return any(day.date == d and day.active for day in self.days)

    @classmethod
    def empty(cls, year: int, month: int) -> "ConsistencyMonth":
        return cls(year=year, month=month).normalized()


class MarkTodayResult(BaseModel):
    """Acknowledgement of a mark-today call."""

    ok: bool = Field(
        default=False,
        validation_alias=AliasChoices("ok", "success"),
    )
    date: Optional[dt.date] = None

    def describe(self) -> str:
        when = format_date(self.date) if self.date else "today"
        return f"marked {when}" if self.ok else f"backend did not confirm {when}"
