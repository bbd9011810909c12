"""Data models for the practice tracker."""

from .consistency import (
    ConsistencyDay,
    ConsistencyMonth,
    ConsistencyRange,
    MarkTodayResult,
    StreakDay,
    to_camel,
)
from .challenge import (
    CHALLENGES,
    ChallengeData,
    ChallengeDefinition,
    ChallengeHistoryEntry,
    ChallengeState,
    Completed,
    InitResult,
    InProgress,
    MarkOutcome,
    MarkResult,
    NotStarted,
    get_challenge,
)

__all__ = [
    "ConsistencyDay",
    "ConsistencyMonth",
    "ConsistencyRange",
    "MarkTodayResult",
    "StreakDay",
    "to_camel",
    "CHALLENGES",
    "ChallengeData",
    "ChallengeDefinition",
    "ChallengeHistoryEntry",
    "ChallengeState",
    "Completed",
    "InitResult",
    "InProgress",
    "MarkOutcome",
    "MarkResult",
    "NotStarted",
    "get_challenge",
]
