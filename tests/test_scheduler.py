"""
Tests for the review scheduler.

Tests cover:
- Interval progression (1, 3, then interval * ease)
- Ease factor updates and the 1.3 floor
- Failure reset
- Grade validation and all-or-nothing updates
- Due predicate
"""

from datetime import datetime, timedelta, timezone

import pytest

from neuronq.errors import InvalidGrade
from neuronq.srs import (
    EASE_FLOOR,
    SECOND_INTERVAL_DAYS,
    Grade,
    is_due,
    next_ease_factor,
    record_review,
)
from neuronq.schemas import migrate_card
from neuronq.srs.scheduler import round_half_up


class TestIntervalProgression:

    def test_fresh_card_good_reviews(self, make_card, now):
        card = make_card()

        record_review(card, Grade.GOOD, now)
        assert card.interval_days == 1
        assert card.review_count == 1

        record_review(card, Grade.GOOD, now)
        assert card.interval_days == SECOND_INTERVAL_DAYS == 3
        assert card.review_count == 2

        ease_before_third = card.ease_factor
        record_review(card, Grade.GOOD, now)
        assert card.interval_days == round_half_up(3 * ease_before_third)
        assert card.review_count == 3

    def test_mature_card_perfect_recall(self, make_card, now):
        card = make_card(intervalDays=6, easeFactor=2.0, reviewCount=2, mastery=1)

        _, event = record_review(card, 5, now)

        assert card.interval_days == 12
        assert card.ease_factor == pytest.approx(2.1)
        assert card.ease_factor > 2.0
        assert card.mastery == 2
        assert card.review_count == 3
        assert event["interval_before"] == 6
        assert event["interval_after"] == 12

    def test_third_interval_uses_ease_before_review(self, make_card, now):
        # quality 3 lowers the ease, the interval must still use 2.5
        card = make_card(intervalDays=3, easeFactor=2.5, reviewCount=2)
        record_review(card, 3, now)
        assert card.interval_days == 8  # round(7.5) half up
        assert card.ease_factor == pytest.approx(2.36)

    def test_next_review_is_interval_days_after_now(self, make_card, now):
        card = make_card(intervalDays=6, easeFactor=2.0, reviewCount=2)
        record_review(card, Grade.GOOD, now)
        assert card.last_reviewed_at == now
        assert card.next_review_at == now + timedelta(days=card.interval_days)


class TestFailure:

    def test_failure_resets_streak_and_interval(self, make_card, now):
        card = make_card(intervalDays=30, easeFactor=2.2, reviewCount=5, mastery=3, correctCount=5)

        _, event = record_review(card, Grade.AGAIN, now)

        assert card.review_count == 0
        assert card.interval_days == 1
        assert card.ease_factor == pytest.approx(2.0)
        assert card.mastery == 2
        assert card.correct_count == 5
        assert card.next_review_at == now + timedelta(days=1)
        assert event["passed"] is False

    def test_mastery_never_below_zero(self, make_card, now):
        card = make_card(mastery=0)
        record_review(card, 0, now)
        assert card.mastery == 0

    def test_mastery_never_above_five(self, make_card, now):
        card = make_card(mastery=5)
        record_review(card, 5, now)
        assert card.mastery == 5


class TestEaseFactor:

    @pytest.mark.parametrize("quality", [0, 1, 2, 3, 4, 5])
    def test_floor_holds_for_every_quality(self, make_card, now, quality):
        card = make_card(easeFactor=1.3)
        for _ in range(5):
            record_review(card, quality, now)
            assert card.ease_factor >= EASE_FLOOR
            assert card.interval_days >= 1

    def test_quality_four_keeps_ease(self):
        assert next_ease_factor(2.5, 4) == pytest.approx(2.5)

    def test_quality_three_lowers_ease(self):
        assert next_ease_factor(2.5, 3) == pytest.approx(2.36)


class TestGradeValidation:

    @pytest.mark.parametrize("quality", [-1, 6, 2.5, "4", None, True])
    def test_invalid_quality_leaves_card_untouched(self, make_card, now, quality):
        card = make_card(intervalDays=6, easeFactor=2.0, reviewCount=2, mastery=2)
        before = card.model_dump()

        with pytest.raises(InvalidGrade) as exc_info:
            record_review(card, quality, now)

        assert exc_info.value.quality == quality
        assert card.model_dump() == before


class TestIsDue:

    def test_never_reviewed_is_due(self, make_card, now):
        assert is_due(make_card(), now)

    def test_future_review_is_not_due(self, make_card, now):
        card = make_card()
        record_review(card, Grade.GOOD, now)
        assert not is_due(card, now)
        assert is_due(card, now + timedelta(days=1))


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(7.5) == 8
    assert round_half_up(7.49) == 7


class TestNaiveTimestamps:
    """Naive datetimes are read as UTC everywhere."""

    def test_review_with_naive_now_stores_utc(self, make_card):
        card = make_card()
        record_review(card, Grade.GOOD, datetime(2024, 5, 1, 9))
        assert card.last_reviewed_at == datetime(2024, 5, 1, 9, tzinfo=timezone.utc)
        assert card.next_review_at.tzinfo is not None
        assert card.next_review_at == datetime(2024, 5, 2, 9, tzinfo=timezone.utc)

    def test_is_due_with_naive_now(self):
        # nextReview 2024-05-01T08:00:00Z as epoch milliseconds
        card = migrate_card({"id": "x", "question": "Q", "answer": "A", "nextReview": 1714550400000})
        assert is_due(card, datetime(2024, 5, 2))
        assert not is_due(card, datetime(2024, 4, 30))

    def test_naive_assignment_is_normalized(self, make_card, now):
        card = make_card()
        card.next_review_at = datetime(2024, 5, 3)
        assert card.next_review_at.tzinfo is not None
        assert not is_due(card, now)
