"""
Scheduler - Review Algorithm Logic

Pure scheduling and state updates (no I/O).

Main workflow:
1. Validate the review quality
2. Compute the new interval, ease factor, mastery and counters
3. Assign them to the card in one step
4. Return updated card + event data dict

Persisting the card and the event is the caller's responsibility.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
import logging
import math
from typing import TYPE_CHECKING, Optional, Tuple

from neuronq.errors import InvalidGrade
from neuronq.srs.constants import (
    EASE_FLOOR,
    FAILURE_EASE_PENALTY,
    FAILURE_INTERVAL_DAYS,
    FIRST_INTERVAL_DAYS,
    MAX_MASTERY,
    MAX_QUALITY,
    MIN_QUALITY,
    PASS_THRESHOLD,
    SECOND_INTERVAL_DAYS,
)

if TYPE_CHECKING:
    from neuronq.schemas import Card

logger = logging.getLogger(__name__)


def validate_quality(quality: object) -> int:
    """
    Check that a review quality is an integer in 0..5.

    Raises:
        InvalidGrade: For anything else (bools and floats included)
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidGrade(quality)
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidGrade(quality)
    return int(quality)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timezone-aware copy of `value`; naive datetimes are read as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    Ease factor after a review.

    Success:
        EF' = EF + 0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)
    Failure:
        EF' = EF - 0.2

    Both are floored at 1.3.
    """
    if quality >= PASS_THRESHOLD:
        miss = MAX_QUALITY - quality
        updated = ease_factor + 0.1 - miss * (0.08 + miss * 0.02)
    else:
        updated = ease_factor - FAILURE_EASE_PENALTY
    return max(EASE_FLOOR, updated)


def next_interval_days(interval_days: int, ease_factor: float, review_count: int) -> int:
    """
    Interval after a successful review.

    Args:
        interval_days: Interval before this review
        ease_factor: Ease factor before this review
        review_count: Consecutive successes including this one

    Returns:
        1 on the first success, SECOND_INTERVAL_DAYS on the second,
        round(interval * ease) afterwards (never below 1)
    """
    if review_count <= 1:
        return FIRST_INTERVAL_DAYS
    if review_count == 2:
        return SECOND_INTERVAL_DAYS
    return max(FIRST_INTERVAL_DAYS, round_half_up(interval_days * ease_factor))


def record_review(
    card: Card,
    quality: int,
    now: Optional[datetime] = None
) -> Tuple[Card, dict]:
    """
    Apply one review to a card and return it with the review event.

    The card is modified in place. Either every scheduling field is updated
    or, when the quality is rejected, none is.

    Args:
        card: Card to update
        quality: Review quality 0-5; 3 or more means recalled
        now: Review timestamp (defaults to now; naive values are read as UTC)

    Returns:
        Tuple of (card, event_data_dict)

    Raises:
        InvalidGrade: If quality is not an integer in 0..5
    """
    quality = validate_quality(quality)
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    passed = quality >= PASS_THRESHOLD

    interval_before = card.interval_days
    ease_before = card.ease_factor
    mastery_before = card.mastery

    if passed:
        review_count = card.review_count + 1
        interval_days = next_interval_days(card.interval_days, card.ease_factor, review_count)
        mastery = min(MAX_MASTERY, card.mastery + 1)
        correct_count = card.correct_count + 1
    else:
        review_count = 0
        interval_days = FAILURE_INTERVAL_DAYS
        mastery = max(0, card.mastery - 1)
        correct_count = card.correct_count
    ease_factor = next_ease_factor(card.ease_factor, quality)
    next_review_at = now + timedelta(days=interval_days)

    card.review_count = review_count
    card.interval_days = interval_days
    card.ease_factor = ease_factor
    card.mastery = mastery
    card.correct_count = correct_count
    card.last_reviewed_at = now
    card.next_review_at = next_review_at

    logger.debug(
        "Reviewed card %s q=%d: interval %d->%d, ease %.2f->%.2f, mastery %d->%d",
        card.id, quality, interval_before, interval_days,
        ease_before, ease_factor, mastery_before, mastery,
    )

    event_data = {
        'card_id': card.id,
        'timestamp': now,
        'quality': quality,
        'passed': passed,
        'interval_before': interval_before,
        'interval_after': interval_days,
        'ease_factor_before': ease_before,
        'ease_factor_after': ease_factor,
        'mastery_before': mastery_before,
        'mastery_after': mastery,
        'review_count_after': review_count,
    }

    return card, event_data


def is_due(card: Card, now: Optional[datetime] = None) -> bool:
    """A card is due when it has no next review time or that time has passed."""
    if card.next_review_at is None:
        return True
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    return as_utc(card.next_review_at) <= now
