"""
Key-value store interface for locally persisted tracker state.

Stands in for browser local storage: string keys, string (JSON) values,
last write wins.
"""

from abc import ABC, abstractmethod
from typing import Optional


ACTIVE_CHALLENGE_KEY = "@app:active_challenge"
CHALLENGE_HISTORY_KEY = "@app:challenge_history"


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
