"""Challenge catalog, persisted challenge records and tracker states."""

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from practice_tracker.exceptions import ChallengeNotFoundError
from practice_tracker.models.consistency import to_camel


class ChallengeDefinition(BaseModel):
    """A challenge the user can start from the Level Up screen."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(..., description="Route id, '{N}-day'")
    title: str = Field(..., description="Display name, stored as the challenge type")
    description: str = Field(default="")
    total_days: int = Field(..., gt=0)


CHALLENGES: List[ChallengeDefinition] = [
    ChallengeDefinition(
        id="7-day",
        title="7-Day Calm Mind",
        description="Build a foundation of daily mindfulness practice",
        total_days=7,
    ),
    ChallengeDefinition(
        id="21-day",
        title="21-Day Mind Discipline",
        description="Develop mental strength and consistency",
        total_days=21,
    ),
    ChallengeDefinition(
        id="90-day",
        title="90-Day Life Transformation",
        description="Complete transformation of habits and mindset",
        total_days=90,
    ),
]

_CHALLENGES_BY_ID: Dict[str, ChallengeDefinition] = {c.id: c for c in CHALLENGES}


def get_challenge(challenge_id: str) -> ChallengeDefinition:
    """Look up a challenge by its '{N}-day' id."""
    try:
        return _CHALLENGES_BY_ID[challenge_id]
    except KeyError:
        raise ChallengeNotFoundError(challenge_id) from None


class ChallengeData(BaseModel):
    """The active challenge record kept in the local store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: str = Field(..., description="Challenge display name")
    total_days: int = Field(..., gt=0)
    start_date: dt.date
    completed_days: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    is_completed: bool = False
    last_completed_date: Optional[dt.date] = None

    @model_validator(mode="after")
    def _check_progress(self) -> "ChallengeData":
        if self.completed_days > self.total_days:
            raise ValueError(
                f"completedDays {self.completed_days} exceeds totalDays {self.total_days}"
            )
        if self.is_completed != (self.completed_days >= self.total_days):
            raise ValueError("isCompleted does not match completedDays")
        return self

    @classmethod
    def fresh(cls, definition: ChallengeDefinition, start_date: dt.date) -> "ChallengeData":
        return cls(
            type=definition.title,
            total_days=definition.total_days,
            start_date=start_date,
        )

    @property
    def progress_percent(self) -> float:
        return self.completed_days / self.total_days * 100

    @property
    def remaining_days(self) -> int:
        return self.total_days - self.completed_days

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class ChallengeHistoryEntry(ChallengeData):
    """A completed challenge as archived in the history list."""

    completed_date: dt.date

    @classmethod
    def from_challenge(cls, challenge: ChallengeData, completed_date: dt.date) -> "ChallengeHistoryEntry":
        return cls(**challenge.model_dump(), completed_date=completed_date)


# ----------------------------------------------------------------------------
# Tracker states
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class NotStarted:
    """No challenge is active."""


@dataclass(frozen=True)
class InProgress:
    """A challenge is running and has days left."""
    challenge: ChallengeData

    @property
    def completed_days(self) -> int:
        return self.challenge.completed_days

    @property
    def streak(self) -> int:
        return self.challenge.streak

    @property
    def last_completed_date(self) -> Optional[dt.date]:
        return self.challenge.last_completed_date


@dataclass(frozen=True)
class Completed:
    """The challenge reached its last day and was archived."""
    entry: ChallengeHistoryEntry


ChallengeState = Union[NotStarted, InProgress, Completed]


class MarkOutcome(str, Enum):
    """What a mark-complete attempt did."""
    PROGRESSED = "progressed"
    COMPLETED = "completed"
    ALREADY_COMPLETED_TODAY = "already_completed_today"
    NO_ACTIVE_CHALLENGE = "no_active_challenge"


@dataclass
class MarkResult:
    """Result of ChallengeTracker.mark_complete()."""
    outcome: MarkOutcome
    state: ChallengeState
    title: str
    message: str

    @property
    def accepted(self) -> bool:
        return self.outcome in (MarkOutcome.PROGRESSED, MarkOutcome.COMPLETED)


@dataclass
class InitResult:
    """Result of ChallengeTracker.initialize()."""
    challenge: ChallengeData
    created: bool
    discarded: Optional[ChallengeData] = None
