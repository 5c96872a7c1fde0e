"""
Auto-play planning for hands-free review.

The core owns no timers or audio. For each card it returns the ordered steps
the caller should perform (speak, wait, flip, rate, advance). The caller stops
executing steps as soon as the learner cancels auto-play.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from neuronq.schemas import Card
from neuronq.srs import Grade


StepKind = Literal["speak", "wait", "flip", "rate", "advance"]

# Pauses between steps, in milliseconds
PAUSE_AFTER_QUESTION_MS = 500
PAUSE_AFTER_FLIP_MS = 300
PAUSE_AFTER_ANSWER_MS = 1500
PAUSE_BEFORE_NEXT_MS = 800


@dataclass(frozen=True)
class PlaybackStep:
    """
    A single caller-side action.
    """
    kind: StepKind
    text: Optional[str] = None
    delay_ms: int = 0
    quality: Optional[int] = None


def plan_autoplay(card: Card) -> list[PlaybackStep]:
    """
    Steps to present one card without learner input.

    Ends with a PASS rating (rate_current) and an advance.
    """
    return [
        PlaybackStep(kind="speak", text=card.question),
        PlaybackStep(kind="wait", delay_ms=PAUSE_AFTER_QUESTION_MS),
        PlaybackStep(kind="flip"),
        PlaybackStep(kind="wait", delay_ms=PAUSE_AFTER_FLIP_MS),
        PlaybackStep(kind="speak", text=card.answer),
        PlaybackStep(kind="wait", delay_ms=PAUSE_AFTER_ANSWER_MS),
        PlaybackStep(kind="rate", quality=int(Grade.PASS)),
        PlaybackStep(kind="wait", delay_ms=PAUSE_BEFORE_NEXT_MS),
        PlaybackStep(kind="advance"),
    ]
