"""
SRS - Spaced Repetition Scheduler

Main scheduling API for flashcard reviews.

This package implements an SM-2 style scheduler with:
- Interval growth driven by a per-card ease factor
- A fixed second interval (SECOND_INTERVAL_DAYS)
- Full reset of the repetition streak on failure
- A bounded mastery counter independent of interval/ease

Quick start:
    from neuronq import srs

    # Process a review (algorithm only, no I/O)
    card, event_data = srs.record_review(card, srs.Grade.GOOD)

    # Check whether a card should be studied now
    srs.is_due(card)
"""

# Core scheduler API (algorithm logic)
from neuronq.srs.scheduler import (
    record_review,
    is_due,
    validate_quality,
    next_ease_factor,
    next_interval_days,
    round_half_up,
    as_utc,
)

# Constants and parameters
from neuronq.srs.constants import (
    Grade,
    PASS_THRESHOLD,
    DEFAULT_EASE_FACTOR,
    EASE_FLOOR,
    FIRST_INTERVAL_DAYS,
    SECOND_INTERVAL_DAYS,
    MAX_MASTERY,
    MASTERED_THRESHOLD,
    LEARNING_THRESHOLD,
)


__all__ = [
    # Core algorithm
    "record_review",
    "is_due",
    "validate_quality",
    "next_ease_factor",
    "next_interval_days",
    "round_half_up",
    "as_utc",

    # Enums
    "Grade",

    # Parameters
    "PASS_THRESHOLD",
    "DEFAULT_EASE_FACTOR",
    "EASE_FLOOR",
    "FIRST_INTERVAL_DAYS",
    "SECOND_INTERVAL_DAYS",
    "MAX_MASTERY",
    "MASTERED_THRESHOLD",
    "LEARNING_THRESHOLD",
]
