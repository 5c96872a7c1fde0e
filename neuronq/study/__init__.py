"""Study queue building and iteration."""

from neuronq.study.pool_types import AdvanceResult, EmptyFilterPolicy, StudyQueue
from neuronq.study.pool_utils import ALL_FOLDERS, fisher_yates_shuffle, folders
from neuronq.study.queue import (
    advance,
    build_queue,
    build_retry_queue,
    current_card,
    rate_current,
)
from neuronq.study.autoplay import PlaybackStep, plan_autoplay

__all__ = [
    "ALL_FOLDERS",
    "AdvanceResult",
    "EmptyFilterPolicy",
    "StudyQueue",
    "advance",
    "build_queue",
    "build_retry_queue",
    "current_card",
    "fisher_yates_shuffle",
    "folders",
    "rate_current",
    "PlaybackStep",
    "plan_autoplay",
]
