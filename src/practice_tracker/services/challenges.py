"""
Challenge tracker.

A 7/21/90-day challenge lives in a single "active challenge" slot of the
local store. The tracker moves it through three states:

    NotStarted -> InProgress -> Completed

Marking a day is accepted at most once per calendar day. The streak grows
only when the previous mark was exactly one day earlier; any other gap
restarts it at 1. Reaching the last day archives the record to history and
clears the active slot.
"""

import logging
from datetime import date
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from practice_tracker.exceptions import ChallengeSwitchError
from practice_tracker.models.challenge import (
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
from practice_tracker.services.history import ChallengeHistory
from practice_tracker.storage.base import ACTIVE_CHALLENGE_KEY, KeyValueStore
from practice_tracker.utils.dates import days_between


logger = logging.getLogger(__name__)

DateProvider = Callable[[], date]

# Streak at which the challenge dashboard shows a trophy
TROPHY_STREAK = 7


def motivational_message(challenge: ChallengeData) -> str:
    """Encouragement shown under the progress ring."""
    if challenge.completed_days == 0:
        return "Every journey begins with a single step. You've got this, Champion!"
    if challenge.completed_days < challenge.total_days / 2:
        return "Great start! Consistency is the key to transformation."
    if challenge.completed_days < challenge.total_days:
        return "You're more than halfway there! The finish line is in sight."
    return "Challenge completed!"


class ChallengeTracker:
    """
    State machine for the active challenge.

    Args:
        store: Local key-value store holding the active slot and history
        today: Returns the current calendar date
        confirm_switch: Refuse to discard an in-progress challenge of another
            type unless the caller passes allow_discard=True
    """

    def __init__(
        self,
        store: KeyValueStore,
        today: DateProvider,
        confirm_switch: bool = False,
    ):
        self.store = store
        self.today = today
        self.confirm_switch = confirm_switch
        self.history = ChallengeHistory(store)
        self._challenge: Optional[ChallengeData] = None
        self._archived: Optional[ChallengeHistoryEntry] = None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_active(self) -> Optional[ChallengeData]:
        raw = self.store.get(ACTIVE_CHALLENGE_KEY)
        if not raw:
            return None
        try:
            return ChallengeData.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Discarding unreadable active challenge: %s", e)
            return None

    def _save_active(self, challenge: ChallengeData) -> None:
        self.store.set(ACTIVE_CHALLENGE_KEY, challenge.to_json())

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ChallengeState:
        if self._archived is not None:
            return Completed(entry=self._archived)
        if self._challenge is not None:
            return InProgress(challenge=self._challenge)
        return NotStarted()

    @property
    def challenge(self) -> Optional[ChallengeData]:
        return self._challenge

    def resume(self) -> ChallengeState:
        """Pick up whatever challenge is in the active slot."""
        self._archived = None
        self._challenge = self._load_active()
        return self.state

    def initialize(self, challenge_id: str, allow_discard: bool = False) -> InitResult:
        """
        Enter the screen for a challenge.

        Loads the saved record when it belongs to the same challenge;
        otherwise starts a fresh one and persists it right away, replacing
        any record for a different challenge.

        Raises:
            ChallengeNotFoundError: Unknown challenge id
            ChallengeSwitchError: confirm_switch is on and another challenge
                has progress that would be discarded
        """
        definition = get_challenge(challenge_id)
        saved = self._load_active()
        self._archived = None

        if saved is not None and saved.type == definition.title:
            self._challenge = saved
            return InitResult(challenge=saved, created=False)

        if saved is not None and saved.completed_days > 0:
            if self.confirm_switch and not allow_discard:
                raise ChallengeSwitchError(saved.type, definition.title)
            logger.warning(
                "Discarding in-progress '%s' (%d/%d days) to start '%s'",
                saved.type, saved.completed_days, saved.total_days, definition.title,
            )

        fresh = self._start(definition)
        return InitResult(challenge=fresh, created=True, discarded=saved)

    def _start(self, definition: ChallengeDefinition) -> ChallengeData:
        challenge = ChallengeData.fresh(definition, self.today())
        self._save_active(challenge)
        self._challenge = challenge
        logger.info("Started '%s' on %s", challenge.type, challenge.start_date)
        return challenge

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def mark_complete(self) -> MarkResult:
        """Check off today. Rejected (no state change) once today is already counted."""
        challenge = self._challenge
        if challenge is None:
            return MarkResult(
                outcome=MarkOutcome.NO_ACTIVE_CHALLENGE,
                state=self.state,
                title="No active challenge",
                message="Start a challenge to begin tracking your days.",
            )

        today = self.today()
        # A clock moved backwards must not reopen an already counted day
        if (
            challenge.last_completed_date is not None
            and days_between(challenge.last_completed_date, today) <= 0
        ):
            return MarkResult(
                outcome=MarkOutcome.ALREADY_COMPLETED_TODAY,
                state=self.state,
                title="Already completed today",
                message="You've already marked today as complete. Come back tomorrow!",
            )

        streak = 1
        if (
            challenge.last_completed_date is not None
            and days_between(challenge.last_completed_date, today) == 1
        ):
            streak = challenge.streak + 1

        completed_days = challenge.completed_days + 1
        updated = ChallengeData(
            **{
                **challenge.model_dump(),
                "completed_days": completed_days,
                "streak": streak,
                "last_completed_date": today,
                "is_completed": completed_days >= challenge.total_days,
            }
        )

        if updated.is_completed:
            return self._archive(updated, today)

        self._save_active(updated)
        self._challenge = updated
        return MarkResult(
            outcome=MarkOutcome.PROGRESSED,
            state=self.state,
            title="Day completed!",
            message=f"{completed_days} of {updated.total_days} days completed. Keep going!",
        )

    def _archive(self, challenge: ChallengeData, today: date) -> MarkResult:
        entry = ChallengeHistoryEntry.from_challenge(challenge, completed_date=today)
        self.history.append(entry)
        self.store.delete(ACTIVE_CHALLENGE_KEY)
        self._challenge = None
        self._archived = entry
        logger.info("Completed '%s' with a %d-day streak", entry.type, entry.streak)
        return MarkResult(
            outcome=MarkOutcome.COMPLETED,
            state=self.state,
            title="Congratulations! You leveled up",
            message=f"{entry.type} completed with a {entry.streak}-day streak!",
        )
