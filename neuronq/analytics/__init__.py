"""
Analytics package exports.
"""

from neuronq.analytics.activity import (
    activity_heatmap,
    check_streak,
    daily_counts_series,
    heatmap_level,
    mark_studied,
)
from neuronq.analytics.metrics import cards_frame, deck_stats, mastery_label
from neuronq.analytics.types import DeckStats, MasteryLabel, StudyLog

__all__ = [
    "activity_heatmap",
    "check_streak",
    "daily_counts_series",
    "heatmap_level",
    "mark_studied",
    "cards_frame",
    "deck_stats",
    "mastery_label",
    "DeckStats",
    "MasteryLabel",
    "StudyLog",
]
