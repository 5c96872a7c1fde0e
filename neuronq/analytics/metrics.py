"""
Metric computations for deck dashboards.
"""

from __future__ import annotations
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from neuronq.analytics.types import DeckStats, MasteryLabel
from neuronq.schemas import Card
from neuronq.srs import LEARNING_THRESHOLD, MASTERED_THRESHOLD, is_due, round_half_up


CARD_COLUMNS = ["id", "folder", "mastery", "review_count", "due"]


def mastery_label(card: Card) -> MasteryLabel:
    if card.mastery >= MASTERED_THRESHOLD:
        return "mastered"
    if card.mastery >= LEARNING_THRESHOLD:
        return "learning"
    return "new"


def cards_frame(cards: Iterable[Card], now: Optional[datetime] = None) -> pd.DataFrame:
    """
    One row per card with the columns the dashboards aggregate.
    """
    rows = [
        {
            "id": card.id,
            "folder": card.folder,
            "mastery": card.mastery,
            "review_count": card.review_count,
            "due": is_due(card, now),
        }
        for card in cards
    ]
    return pd.DataFrame(rows, columns=CARD_COLUMNS)


def deck_stats(cards: Iterable[Card], now: Optional[datetime] = None) -> DeckStats:
    """
    Totals, mastery buckets, due count and per-folder card counts.
    """
    df = cards_frame(cards, now)
    if df.empty:
        return DeckStats(
            total=0, mastered=0, learning=0, new=0, due=0,
            mastered_percentage=0, by_folder={},
        )

    total = len(df)
    mastered = int((df["mastery"] >= MASTERED_THRESHOLD).sum())
    learning = int(((df["mastery"] >= LEARNING_THRESHOLD) & (df["mastery"] < MASTERED_THRESHOLD)).sum())
    by_folder = df.groupby("folder").size().sort_index()

    return DeckStats(
        total=total,
        mastered=mastered,
        learning=learning,
        new=total - mastered - learning,
        due=int(df["due"].sum()),
        mastered_percentage=round_half_up(mastered / total * 100),
        by_folder={str(name): int(count) for name, count in by_folder.items()},
    )
