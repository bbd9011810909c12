"""Consistency calendar, daily streak and challenge tracking."""

from practice_tracker.api.client import ConsistencyClient
from practice_tracker.config import Settings, get_settings
from practice_tracker.models import (
    CHALLENGES,
    ChallengeData,
    ChallengeHistoryEntry,
    Completed,
    ConsistencyDay,
    ConsistencyMonth,
    ConsistencyRange,
    InProgress,
    MarkOutcome,
    NotStarted,
    StreakDay,
    get_challenge,
)
from practice_tracker.services import (
    ChallengeHistory,
    ChallengeTracker,
    ConsistencyCalendar,
    HomeStreakWidget,
)
from practice_tracker.storage import InMemoryStore, KeyValueStore, SqliteStore

__version__ = "0.1.0"

__all__ = [
    "ConsistencyClient",
    "Settings",
    "get_settings",
    "CHALLENGES",
    "ChallengeData",
    "ChallengeHistoryEntry",
    "Completed",
    "ConsistencyDay",
    "ConsistencyMonth",
    "ConsistencyRange",
    "InProgress",
    "MarkOutcome",
    "NotStarted",
    "StreakDay",
    "get_challenge",
    "ChallengeHistory",
    "ChallengeTracker",
    "ConsistencyCalendar",
    "HomeStreakWidget",
    "InMemoryStore",
    "KeyValueStore",
    "SqliteStore",
]
