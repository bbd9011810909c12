"""Completed challenge history, kept in the local store."""

import logging
from dataclasses import dataclass
from typing import List

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from practice_tracker.models.challenge import ChallengeHistoryEntry
from practice_tracker.storage.base import CHALLENGE_HISTORY_KEY, KeyValueStore


logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(List[ChallengeHistoryEntry])

EMPTY_STATE_MESSAGE = "Start your first challenge to begin your transformation journey"


@dataclass(frozen=True)
class HistorySummary:
    count: int
    total_days: int

    @property
    def label(self) -> str:
        return f"{self.count} Challenge{'' if self.count == 1 else 's'} Completed"

    @property
    def days_label(self) -> str:
        return f"{self.total_days} total days of growth"


class ChallengeHistory:
    """Append-only list of completed challenges."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load(self) -> List[ChallengeHistoryEntry]:
        raw = self.store.get(CHALLENGE_HISTORY_KEY)
        if not raw:
            return []
        try:
            return _ENTRIES.validate_json(raw)
        except PydanticValidationError as e:
            logger.error("Error loading challenge history, treating as empty: %s", e)
            return []

    def append(self, entry: ChallengeHistoryEntry) -> None:
        entries = self._load()
        entries.append(entry)
        self.store.set(
            CHALLENGE_HISTORY_KEY,
            _ENTRIES.dump_json(entries, by_alias=True, exclude_none=True).decode(),
        )

    def entries(self) -> List[ChallengeHistoryEntry]:
        """Entries newest first; ties keep the most recently archived first."""
        return sorted(
            reversed(self._load()),
            key=lambda e: e.completed_date,
            reverse=True,
        )

    @property
    def is_empty(self) -> bool:
        return not self._load()

    def summary(self) -> HistorySummary:
        entries = self._load()
        return HistorySummary(
            count=len(entries),
            total_days=sum(e.completed_days for e in entries),
        )
