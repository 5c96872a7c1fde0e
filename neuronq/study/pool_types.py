"""
Typed queue models shared across study flows.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from neuronq.schemas import Card


class EmptyFilterPolicy(str, Enum):
    """What to do when a folder/due filter leaves no cards."""
    RAISE = "raise"         # Surface EmptyFilterResult to the caller
    FALLBACK = "fallback"   # Widen: folder -> all cards, due -> folder's cards
    EMPTY = "empty"         # Return an empty queue


@dataclass
class StudyQueue:
    """
    One pass through a filtered card pool.

    `order` holds indices into `corpus`. The cursor equals len(order) once the
    pass is finished.
    """
    corpus: Sequence[Card]
    order: list[int]
    cursor: int = 0
    folder: str = "All"
    due_only: bool = False
    shuffled: bool = False
    missed: list[str] = field(default_factory=list)

    @property
    def done(self) -> bool:
        return self.cursor >= len(self.order)

    def __len__(self) -> int:
        return len(self.order)


@dataclass(frozen=True)
class AdvanceResult:
    """
    Outcome of moving a queue forward.
    """
    done: bool
    card: Optional[Card] = None
