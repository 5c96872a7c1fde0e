"""
Distractor Generator - Wrong Answers for Multiple Choice

Fill order for one target card:
1. Category pools whose triggers occur in the target's question or answer
2. Answers of other cards in the target's folder
3. Answers of other cards in any folder

Candidates are compared case-insensitively against the correct answer and
against distractors already chosen. Each stage is shuffled with the injected
RNG. The result may be shorter than requested when the corpus runs dry.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable, Optional, Sequence

from neuronq.quiz.categories import DEFAULT_CATEGORIES, DistractorCategory
from neuronq.schemas import Card
from neuronq.study.pool_utils import fisher_yates_shuffle

logger = logging.getLogger(__name__)


def _normalize(text: str) -> str:
    return text.strip().lower()


def matching_categories(
    target: Card,
    categories: Sequence[DistractorCategory] = DEFAULT_CATEGORIES
) -> list[DistractorCategory]:
    """Categories triggered by the target's question or answer."""
    text = f"{target.question} {target.answer}".lower()
    return [category for category in categories if category.matches(text)]


def category_candidates(
    target: Card,
    categories: Sequence[DistractorCategory] = DEFAULT_CATEGORIES
) -> list[str]:
    """
    Union of the matched categories' pools, first occurrence kept.

    Entries equal to the correct answer are left out.
    """
    correct = _normalize(target.answer)
    seen = {correct}
    candidates = []
    for category in matching_categories(target, categories):
        for entry in category.pool:
            key = _normalize(entry)
            if key in seen:
                continue
            seen.add(key)
            candidates.append(entry)
    return candidates


def _take(
    candidates: Iterable[str],
    chosen: list[str],
    used: set[str],
    count: int
) -> int:
    """Append unused candidates to `chosen` until it holds `count`. Returns how many were added."""
    added = 0
    for candidate in candidates:
        if len(chosen) >= count:
            break
        key = _normalize(candidate)
        if not key or key in used:
            continue
        used.add(key)
        chosen.append(candidate)
        added += 1
    return added


def generate_distractors(
    target: Card,
    corpus: Sequence[Card],
    count: int = 3,
    rng: Optional[random.Random] = None,
    categories: Optional[Sequence[DistractorCategory]] = None
) -> list[str]:
    """
    Pick up to `count` plausible wrong answers for `target`.

    Args:
        target: Card being asked
        corpus: All cards (read only)
        count: Number of distractors wanted
        rng: Random source for every shuffle
        categories: Category table (defaults to DEFAULT_CATEGORIES)

    Returns:
        List of min(count, available) distinct wrong answers
    """
    if rng is None:
        rng = random.Random()
    if categories is None:
        categories = DEFAULT_CATEGORIES
    if count <= 0:
        return []

    chosen: list[str] = []
    used = {_normalize(target.answer)}

    pooled = fisher_yates_shuffle(category_candidates(target, categories), rng)
    from_categories = _take(pooled, chosen, used, count)

    others = [card for card in corpus if card.id != target.id]

    from_folder = 0
    if len(chosen) < count:
        same_folder = [card.answer for card in others if card.folder == target.folder]
        from_folder = _take(fisher_yates_shuffle(same_folder, rng), chosen, used, count)

    from_corpus = 0
    if len(chosen) < count:
        anywhere = [card.answer for card in others]
        from_corpus = _take(fisher_yates_shuffle(anywhere, rng), chosen, used, count)

    logger.debug(
        "Distractors for card %s: %d category, %d folder, %d corpus (%d/%d)",
        target.id, from_categories, from_folder, from_corpus, len(chosen), count,
    )

    return chosen
