"""
Study Queue - Deck Pass Creation and Iteration

Builds the card order for one study pass:
1. Folder filter (exact match, or "All")
2. Optional due filter (next review unset or in the past)
3. Optional Fisher-Yates shuffle with an injectable RNG

Pass Logic:
- advance() walks the order and reports done at the end of the pass
- rate_current() records a review of the current card and remembers misses
- build_retry_queue() starts a sub-pass over the cards missed in this pass
"""

from __future__ import annotations
from datetime import datetime
import logging
import random
from typing import Optional, Sequence, Union

from neuronq import config
from neuronq.errors import EmptyFilterResult
from neuronq.schemas import Card
from neuronq.srs import record_review
from neuronq.study.pool_types import AdvanceResult, EmptyFilterPolicy, StudyQueue
from neuronq.study.pool_utils import (
    ALL_FOLDERS,
    due_indices,
    fisher_yates_shuffle,
    folder_indices,
)

logger = logging.getLogger(__name__)


def build_queue(
    corpus: Sequence[Card],
    folder_filter: str = ALL_FOLDERS,
    due_only: bool = False,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
    on_empty: Optional[Union[EmptyFilterPolicy, str]] = None,
    now: Optional[datetime] = None
) -> StudyQueue:
    """
    Build a study queue over a filtered view of the corpus.

    Args:
        corpus: All cards (the queue keeps a reference, not a copy)
        folder_filter: Folder name, or ALL_FOLDERS to skip folder filtering
        due_only: If True, keep only due cards
        shuffle: If True, Fisher-Yates shuffle the order; otherwise corpus order
        rng: Random source for the shuffle
        on_empty: Policy when a filter leaves no cards (default from config)
        now: Reference time for the due filter

    Returns:
        StudyQueue with the cursor at 0

    Raises:
        EmptyFilterResult: If a filter leaves no cards and the policy is RAISE
    """
    policy = EmptyFilterPolicy(on_empty or config.get_empty_filter_policy())

    folder = folder_filter
    indices = folder_indices(corpus, folder)

    if not indices and corpus and folder != ALL_FOLDERS:
        if policy is EmptyFilterPolicy.RAISE:
            raise EmptyFilterResult(folder, False)
        if policy is EmptyFilterPolicy.FALLBACK:
            logger.warning("Folder '%s' has no cards, using all folders", folder)
            folder = ALL_FOLDERS
            indices = folder_indices(corpus, folder)

    applied_due = due_only
    if due_only and indices:
        due = due_indices(corpus, indices, now)
        if not due and policy is EmptyFilterPolicy.RAISE:
            raise EmptyFilterResult(None if folder == ALL_FOLDERS else folder, True)
        if not due and policy is EmptyFilterPolicy.FALLBACK:
            logger.warning("No due cards in '%s', using every card in the folder", folder)
            applied_due = False
        else:
            indices = due

    if shuffle:
        indices = fisher_yates_shuffle(indices, rng)

    logger.debug(
        "Built study queue: %d cards (folder=%s, due_only=%s, shuffle=%s)",
        len(indices), folder, applied_due, shuffle,
    )

    return StudyQueue(
        corpus=corpus,
        order=indices,
        folder=folder,
        due_only=applied_due,
        shuffled=shuffle,
    )


def current_card(queue: StudyQueue) -> Optional[Card]:
    """Card under the cursor, or None once the pass is finished."""
    if queue.done:
        return None
    return queue.corpus[queue.order[queue.cursor]]


def advance(queue: StudyQueue) -> AdvanceResult:
    """
    Move to the next card.

    Returns:
        AdvanceResult(done=False, card=next_card), or AdvanceResult(done=True)
        when the pass is complete. The caller decides whether to rebuild the
        queue or start a retry pass.
    """
    if queue.cursor + 1 < len(queue.order):
        queue.cursor += 1
        return AdvanceResult(done=False, card=current_card(queue))

    queue.cursor = len(queue.order)
    logger.debug("Study pass complete (%d cards, %d missed)", len(queue.order), len(queue.missed))
    return AdvanceResult(done=True)


def rate_current(
    queue: StudyQueue,
    quality: int,
    now: Optional[datetime] = None
) -> Optional[dict]:
    """
    Record a study-mode review of the current card.

    Failed cards are remembered for build_retry_queue(); a later success
    in the same pass forgets them again.

    Returns:
        Review event dict, or None if the pass is already finished
    """
    card = current_card(queue)
    if card is None:
        return None

    _, event_data = record_review(card, quality, now)

    if not event_data["passed"]:
        if card.id not in queue.missed:
            queue.missed.append(card.id)
    elif card.id in queue.missed:
        queue.missed.remove(card.id)

    return event_data


def build_retry_queue(
    queue: StudyQueue,
    shuffle: bool = True,
    rng: Optional[random.Random] = None
) -> StudyQueue:
    """
    Build a sub-pass over only the cards missed during `queue`.

    Returns:
        New StudyQueue (empty if nothing was missed)
    """
    missed = set(queue.missed)
    indices = [i for i in queue.order if queue.corpus[i].id in missed]
    if shuffle:
        indices = fisher_yates_shuffle(indices, rng)

    return StudyQueue(
        corpus=queue.corpus,
        order=indices,
        folder=queue.folder,
        due_only=False,
        shuffled=shuffle,
    )
