"""
Types for deck analytics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional


MasteryLabel = Literal["mastered", "learning", "new"]


@dataclass(frozen=True)
class DeckStats:
    """
    Summary counts for a set of cards.
    """
    total: int
    mastered: int
    learning: int
    new: int
    due: int
    mastered_percentage: int
    by_folder: dict[str, int]


@dataclass
class StudyLog:
    """
    Learner activity: current streak, last study day, reviews per day.

    `daily_counts` is keyed by ISO date ("2024-05-01").
    """
    streak: int = 0
    last_study_date: Optional[date] = None
    daily_counts: dict[str, int] = field(default_factory=dict)
