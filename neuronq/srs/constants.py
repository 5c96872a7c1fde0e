"""
Scheduling Constants and Parameters

All tunable parameters of the review scheduler in one place.
"""

from enum import IntEnum


# ---- Review Grades ----

class Grade(IntEnum):
    """Named review qualities emitted by the study and quiz flows."""
    AGAIN = 1   # Swipe left / wrong quiz answer
    PASS = 3    # Auto-play: shown without learner input
    GOOD = 4    # Swipe right / correct quiz answer


MIN_QUALITY = 0
MAX_QUALITY = 5
PASS_THRESHOLD = 3  # quality >= 3 counts as recalled


# ---- Ease Factor ----

DEFAULT_EASE_FACTOR = 2.5
EASE_FLOOR = 1.3
FAILURE_EASE_PENALTY = 0.2


# ---- Intervals (days) ----

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 3  # Fixed interval after the second consecutive success
FAILURE_INTERVAL_DAYS = 1


# ---- Mastery ----

MAX_MASTERY = 5
MASTERED_THRESHOLD = 4  # mastery >= 4 is shown as "mastered"
LEARNING_THRESHOLD = 2  # mastery >= 2 is shown as "learning"
