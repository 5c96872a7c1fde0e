"""
Pool utilities for study queues and quizzes.

These helpers provide shared, minimal primitives for filtering and ordering
card pools without enforcing a single study policy.
"""

from __future__ import annotations
from datetime import datetime
import random
from typing import Optional, Sequence, TypeVar

from neuronq.schemas import Card
from neuronq.srs import is_due


T = TypeVar("T")

ALL_FOLDERS = "All"


def fisher_yates_shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a shuffled copy of `items` (Fisher-Yates, back to front).

    Pass a seeded random.Random for reproducible orders.
    """
    if rng is None:
        rng = random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def folder_indices(corpus: Sequence[Card], folder: str) -> list[int]:
    """
    Corpus indices of cards in `folder`, in corpus order.

    The ALL_FOLDERS sentinel selects every card.
    """
    if folder == ALL_FOLDERS:
        return list(range(len(corpus)))
    return [i for i, card in enumerate(corpus) if card.folder == folder]


def due_indices(
    corpus: Sequence[Card],
    indices: Sequence[int],
    now: Optional[datetime] = None
) -> list[int]:
    """
    Keep the indices whose card is due (no DB calls).
    """
    return [i for i in indices if is_due(corpus[i], now)]


def folders(corpus: Sequence[Card]) -> list[str]:
    """Sorted distinct folder names."""
    return sorted({card.folder for card in corpus if card.folder})
