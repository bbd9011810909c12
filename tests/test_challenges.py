"""Tests for the challenge tracker state machine."""

import json
from datetime import date, timedelta

import pytest

from practice_tracker.exceptions import ChallengeNotFoundError, ChallengeSwitchError
from practice_tracker.models import (
    ChallengeData,
    Completed,
    InProgress,
    MarkOutcome,
    NotStarted,
    get_challenge,
)
from practice_tracker.services.challenges import ChallengeTracker, motivational_message
from practice_tracker.storage.base import ACTIVE_CHALLENGE_KEY, CHALLENGE_HISTORY_KEY


@pytest.fixture
def tracker(store, fake_today) -> ChallengeTracker:
    return ChallengeTracker(store, today=fake_today)


def _assert_invariants(tracker: ChallengeTracker) -> None:
    challenge = tracker.challenge
    if challenge is not None:
        assert 0 <= challenge.completed_days <= challenge.total_days
        assert challenge.is_completed == (challenge.completed_days == challenge.total_days)
        assert challenge.streak >= 0


class TestInitialize:
    """Tests for entering a challenge screen."""

    def test_starts_in_not_started(self, tracker):
        assert isinstance(tracker.state, NotStarted)

    def test_creates_and_persists_fresh_challenge(self, tracker, store, fake_today):
        result = tracker.initialize("7-day")

        assert result.created
        assert result.discarded is None
        assert isinstance(tracker.state, InProgress)
        saved = json.loads(store.get(ACTIVE_CHALLENGE_KEY))
        assert saved["type"] == "7-Day Calm Mind"
        assert saved["totalDays"] == 7
        assert saved["startDate"] == "2026-10-19"
        assert saved["completedDays"] == 0
        assert saved["streak"] == 0
        assert saved["isCompleted"] is False

    def test_resumes_same_challenge(self, tracker, store, fake_today):
        tracker.initialize("21-day")
        tracker.mark_complete()

        fake_today.set(date(2026, 10, 25))
        again = ChallengeTracker(store, today=fake_today).initialize("21-day")

        assert not again.created
        assert again.challenge.completed_days == 1
        assert again.challenge.start_date == date(2026, 10, 19)

    def test_switching_type_discards_previous(self, tracker, store):
        tracker.initialize("7-day")
        tracker.mark_complete()

        result = tracker.initialize("90-day")

        assert result.created
        assert result.discarded is not None
        assert result.discarded.type == "7-Day Calm Mind"
        assert result.discarded.completed_days == 1
        saved = ChallengeData.model_validate_json(store.get(ACTIVE_CHALLENGE_KEY))
        assert saved.type == "90-Day Life Transformation"
        assert saved.completed_days == 0

    def test_switch_requires_confirmation_when_configured(self, store, fake_today):
        tracker = ChallengeTracker(store, today=fake_today, confirm_switch=True)
        tracker.initialize("7-day")
        tracker.mark_complete()

        with pytest.raises(ChallengeSwitchError):
            tracker.initialize("21-day")
        # Nothing was discarded
        saved = ChallengeData.model_validate_json(store.get(ACTIVE_CHALLENGE_KEY))
        assert saved.type == "7-Day Calm Mind"

        result = tracker.initialize("21-day", allow_discard=True)
        assert result.challenge.type == "21-Day Mind Discipline"

    def test_switch_without_progress_needs_no_confirmation(self, store, fake_today):
        tracker = ChallengeTracker(store, today=fake_today, confirm_switch=True)
        tracker.initialize("7-day")
        result = tracker.initialize("21-day")
        assert result.created

    def test_corrupt_record_falls_back_to_fresh_start(self, tracker, store):
        store.set(ACTIVE_CHALLENGE_KEY, "{not json")
        result = tracker.initialize("7-day")
        assert result.created
        assert result.challenge.completed_days == 0

    def test_record_violating_invariants_is_treated_as_absent(self, tracker, store):
        store.set(ACTIVE_CHALLENGE_KEY, json.dumps({
            "type": "7-Day Calm Mind", "totalDays": 7, "startDate": "2026-10-01",
            "completedDays": 12, "streak": 3, "isCompleted": False,
        }))
        result = tracker.initialize("7-day")
        assert result.created
        assert result.challenge.completed_days == 0

    def test_unknown_challenge(self, tracker):
        with pytest.raises(ChallengeNotFoundError):
            tracker.initialize("8-day")


class TestMarkComplete:
    """Tests for the once-per-day mark-complete transition."""

    def test_first_mark(self, tracker, store):
        tracker.initialize("7-day")
        result = tracker.mark_complete()

        assert result.outcome == MarkOutcome.PROGRESSED
        assert result.accepted
        assert result.message == "1 of 7 days completed. Keep going!"
        challenge = tracker.challenge
        assert (challenge.completed_days, challenge.streak, challenge.is_completed) == (1, 1, False)
        assert challenge.last_completed_date == date(2026, 10, 19)
        saved = ChallengeData.model_validate_json(store.get(ACTIVE_CHALLENGE_KEY))
        assert saved == challenge

    def test_second_mark_same_day_is_rejected(self, tracker, store):
        tracker.initialize("7-day")
        tracker.mark_complete()
        before = store.get(ACTIVE_CHALLENGE_KEY)

        result = tracker.mark_complete()

        assert result.outcome == MarkOutcome.ALREADY_COMPLETED_TODAY
        assert not result.accepted
        assert result.title == "Already completed today"
        assert tracker.challenge.completed_days == 1
        assert tracker.challenge.streak == 1
        assert tracker.challenge.last_completed_date == date(2026, 10, 19)
        assert store.get(ACTIVE_CHALLENGE_KEY) == before

    def test_clock_moving_backwards_does_not_count_a_day_twice(self, tracker, fake_today):
        tracker.initialize("7-day")
        tracker.mark_complete()

        fake_today.set(date(2026, 10, 18))
        earlier = tracker.mark_complete()
        fake_today.set(date(2026, 10, 19))
        again = tracker.mark_complete()

        assert earlier.outcome == MarkOutcome.ALREADY_COMPLETED_TODAY
        assert again.outcome == MarkOutcome.ALREADY_COMPLETED_TODAY
        assert tracker.challenge.completed_days == 1
        assert tracker.challenge.last_completed_date == date(2026, 10, 19)

        fake_today.set(date(2026, 10, 20))
        assert tracker.mark_complete().outcome == MarkOutcome.PROGRESSED
        assert tracker.challenge.completed_days == 2
        assert tracker.challenge.streak == 2

    def test_consecutive_day_extends_streak(self, tracker, fake_today):
        tracker.initialize("21-day")
        tracker.mark_complete()
        fake_today.set(date(2026, 10, 20))

        tracker.mark_complete()

        assert tracker.challenge.streak == 2
        assert tracker.challenge.completed_days == 2

    def test_gap_resets_streak(self, tracker, fake_today):
        tracker.initialize("7-day")
        tracker.mark_complete()
        fake_today.set(date(2026, 10, 21))  # skipped the 20th

        tracker.mark_complete()

        assert tracker.challenge.streak == 1
        assert tracker.challenge.completed_days == 2

    def test_streak_across_month_boundary(self, tracker, fake_today):
        fake_today.set(date(2026, 10, 30))
        tracker.initialize("21-day")
        for day in (date(2026, 10, 30), date(2026, 10, 31), date(2026, 11, 1)):
            fake_today.set(day)
            tracker.mark_complete()
        assert tracker.challenge.streak == 3

    def test_mark_without_challenge(self, tracker):
        result = tracker.mark_complete()
        assert result.outcome == MarkOutcome.NO_ACTIVE_CHALLENGE
        assert isinstance(result.state, NotStarted)

    def test_seven_consecutive_days_complete_the_challenge(self, tracker, store, fake_today):
        start = fake_today()
        tracker.initialize("7-day")

        for offset in range(7):
            fake_today.set(start + timedelta(days=offset))
            result = tracker.mark_complete()
            _assert_invariants(tracker)

        assert result.outcome == MarkOutcome.COMPLETED
        assert isinstance(tracker.state, Completed)
        entry = tracker.state.entry
        assert entry.streak == 7
        assert entry.completed_days == 7
        assert entry.is_completed
        assert entry.completed_date == start + timedelta(days=6)
        assert store.get(ACTIVE_CHALLENGE_KEY) is None

        history = json.loads(store.get(CHALLENGE_HISTORY_KEY))
        assert len(history) == 1
        assert history[0]["completedDate"] == "2026-10-25"
        assert history[0]["streak"] == 7

    def test_completion_with_gaps_keeps_short_streak(self, tracker, fake_today):
        start = fake_today()
        tracker.initialize("7-day")
        # every other day
        for offset in range(0, 14, 2):
            fake_today.set(start + timedelta(days=offset))
            tracker.mark_complete()

        assert isinstance(tracker.state, Completed)
        assert tracker.state.entry.streak == 1

    def test_no_mark_after_completion(self, tracker, fake_today):
        start = fake_today()
        tracker.initialize("7-day")
        for offset in range(7):
            fake_today.set(start + timedelta(days=offset))
            tracker.mark_complete()

        fake_today.set(start + timedelta(days=7))
        result = tracker.mark_complete()

        assert result.outcome == MarkOutcome.NO_ACTIVE_CHALLENGE
        assert tracker.history.summary().count == 1

    def test_new_challenge_after_completion(self, tracker, store, fake_today):
        start = fake_today()
        tracker.initialize("7-day")
        for offset in range(7):
            fake_today.set(start + timedelta(days=offset))
            tracker.mark_complete()

        result = tracker.initialize("7-day")

        assert result.created
        assert result.discarded is None
        assert isinstance(tracker.state, InProgress)
        assert tracker.challenge.completed_days == 0

    def test_invariants_hold_over_irregular_schedule(self, tracker, fake_today):
        start = fake_today()
        tracker.initialize("21-day")
        offsets = [0, 0, 1, 2, 5, 5, 6, 9, 10, 11, 12, 20, 21, 22, 23, 30, 31, 32, 40, 41, 42, 43, 44]
        for offset in offsets:
            fake_today.set(start + timedelta(days=offset))
            tracker.mark_complete()
            _assert_invariants(tracker)
        assert isinstance(tracker.state, Completed)
        assert tracker.state.entry.completed_days == 21


class TestResume:
    """Tests for picking up the active slot without a challenge id."""

    def test_resume_active(self, tracker, store, fake_today):
        tracker.initialize("21-day")
        tracker.mark_complete()

        other = ChallengeTracker(store, today=fake_today)
        state = other.resume()

        assert isinstance(state, InProgress)
        assert state.completed_days == 1
        assert state.last_completed_date == date(2026, 10, 19)

    def test_resume_empty(self, tracker):
        assert isinstance(tracker.resume(), NotStarted)


class TestMotivationalMessage:
    """Tests for progress-dependent encouragement."""

    @pytest.mark.parametrize("completed,expected", [
        (0, "Every journey begins"),
        (5, "Great start!"),
        (11, "more than halfway"),
        (20, "more than halfway"),
        (21, "Challenge completed"),
    ])
    def test_message(self, completed, expected):
        data = ChallengeData(
            type="21-Day Mind Discipline", total_days=21, start_date=date(2026, 1, 1),
            completed_days=completed, is_completed=completed == 21,
        )
        assert expected in motivational_message(data)
