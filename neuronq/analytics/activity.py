"""
Study streak and daily activity.

Dates are calendar days supplied by the caller, so the learner's local day
boundary is the caller's decision.
"""

from __future__ import annotations
from datetime import date
import logging

import pandas as pd

from neuronq.analytics.types import StudyLog

logger = logging.getLogger(__name__)


# Minimum reviews per day for heatmap levels 1-4
HEATMAP_THRESHOLDS = (1, 5, 10, 20)
HEATMAP_DAYS = 90


def mark_studied(log: StudyLog, today: date, count: int = 1) -> StudyLog:
    """
    Record `count` reviews on `today`.

    The first study of a day extends the streak when the previous study day
    was yesterday and restarts it at 1 otherwise.
    """
    if log.last_study_date != today:
        if log.last_study_date is not None and (today - log.last_study_date).days == 1:
            log.streak += 1
        else:
            log.streak = 1
        log.last_study_date = today
        logger.debug("Study streak now %d", log.streak)

    key = today.isoformat()
    log.daily_counts[key] = log.daily_counts.get(key, 0) + count
    return log


def check_streak(log: StudyLog, today: date) -> int:
    """Zero the streak if more than a day has passed since the last study."""
    if log.last_study_date is None:
        log.streak = 0
    elif (today - log.last_study_date).days > 1:
        log.streak = 0
    return log.streak


def heatmap_level(count: int) -> int:
    level = 0
    for threshold in HEATMAP_THRESHOLDS:
        if count >= threshold:
            level += 1
    return level


def daily_counts_series(log: StudyLog, today: date, days: int = HEATMAP_DAYS) -> pd.Series:
    """
    Reviews per day over the `days` days ending `today`, zero-filled.
    """
    day_index = pd.date_range(end=pd.Timestamp(today), periods=days, freq="D")
    if not log.daily_counts:
        return pd.Series(0, index=day_index, dtype="int64")
    counts = pd.Series(log.daily_counts, dtype="int64")
    counts.index = pd.to_datetime(counts.index)
    return counts.reindex(day_index, fill_value=0).astype("int64")


def activity_heatmap(log: StudyLog, today: date, days: int = HEATMAP_DAYS) -> pd.Series:
    """
    Heatmap level 0-4 for each of the `days` days ending `today`.
    """
    return daily_counts_series(log, today, days).map(heatmap_level).astype("int64")
