"""Local key-value stores for challenge state."""

from .base import ACTIVE_CHALLENGE_KEY, CHALLENGE_HISTORY_KEY, KeyValueStore
from .memory import InMemoryStore
from .sqlite import SqliteStore

__all__ = [
    "ACTIVE_CHALLENGE_KEY",
    "CHALLENGE_HISTORY_KEY",
    "KeyValueStore",
    "InMemoryStore",
    "SqliteStore",
]
