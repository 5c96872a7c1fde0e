"""
Quiz Session - State Machine for Self-Test Runs

States:
    SETUP -> ACTIVE -> FEEDBACK -> ACTIVE ... -> RESULT

- start_quiz() shuffles the pool, truncates it and enters ACTIVE
- present_question() builds the options for the current card (ACTIVE)
- submit_answer() grades, feeds the scheduler and enters FEEDBACK
- next_question() moves on, or enters RESULT after the last card
- abort() returns to SETUP from ACTIVE or FEEDBACK
- start_review_quiz() runs a new session over the previous wrong answers

Timers belong to the caller, which reports elapsed time through tick().
An operation called in the wrong state raises InvalidTransition and leaves
the session unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging
import random
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from neuronq import config
from neuronq.errors import CorruptResumeState, InsufficientPool, InvalidTransition
from neuronq.quiz.distractors import generate_distractors
from neuronq.quiz.matching import is_choice_correct, is_typed_correct
from neuronq.schemas import Card
from neuronq.srs import Grade, record_review, round_half_up
from neuronq.store import CardStore
from neuronq.study.pool_types import StudyQueue
from neuronq.study.pool_utils import fisher_yates_shuffle

logger = logging.getLogger(__name__)


MIN_QUIZ_POOL = 2
CHOICE_DISTRACTORS = 3

# Percentage thresholds for the result band
EXCELLENT_PERCENTAGE = 80
GOOD_PERCENTAGE = 50


class QuizMode(str, Enum):
    MULTIPLE_CHOICE = "multipleChoice"
    TYPED = "typed"


class QuizState(str, Enum):
    SETUP = "setup"
    ACTIVE = "active"
    FEEDBACK = "feedback"
    RESULT = "result"


class ResultBand(str, Enum):
    """Cosmetic grouping of a final percentage."""
    EXCELLENT = "excellent"   # >= 80%
    GOOD = "good"             # >= 50%
    KEEP_PRACTICING = "keep_practicing"


@dataclass
class QuizSession:
    """
    One in-flight quiz.

    `queue` holds the questions in asking order; `corpus` is where
    distractors come from. Cards are shared with the caller's store.
    """
    queue: list[Card]
    corpus: Sequence[Card]
    mode: QuizMode = QuizMode.MULTIPLE_CHOICE
    rng: random.Random = field(default_factory=random.Random)
    cursor: int = 0
    score: int = 0
    wrong_queue: list[Card] = field(default_factory=list)
    elapsed_seconds: int = 0
    state: QuizState = QuizState.ACTIVE
    answered: bool = False
    choices: Optional[list[str]] = None

    @property
    def total(self) -> int:
        return len(self.queue)

    @property
    def current(self) -> Optional[Card]:
        if self.state in (QuizState.ACTIVE, QuizState.FEEDBACK) and self.cursor < len(self.queue):
            return self.queue[self.cursor]
        return None


@dataclass(frozen=True)
class Presentation:
    """What to show for the current question. `choices` is empty in typed mode."""
    card: Card
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnswerResult:
    correct: bool
    correct_answer: str
    explanation: Optional[str] = None


@dataclass(frozen=True)
class QuizResult:
    score: int
    total: int
    percentage: int
    wrong_queue: tuple[Card, ...]
    elapsed_seconds: int
    band: ResultBand


class ResumeState(BaseModel):
    """
    Serialized shape of a quiz in progress.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    queue: list[str] = Field(..., min_length=1, description="Card ids in asking order")
    cursor: int = Field(..., ge=0, description="Index of the current question")
    score: int = Field(..., ge=0)
    wrong_queue: list[str] = Field(default_factory=list, alias="wrongQueue")
    mode: QuizMode
    elapsed_seconds: int = Field(default=0, ge=0, alias="elapsedSeconds")


def _require_state(session: QuizSession, operation: str, *allowed: QuizState) -> None:
    if session.state not in allowed:
        raise InvalidTransition(operation, session.state.value)


def _new_session(
    pool: Sequence[Card],
    size: int,
    mode: QuizMode,
    rng: Optional[random.Random],
    corpus: Sequence[Card]
) -> QuizSession:
    if rng is None:
        rng = random.Random()
    queue = fisher_yates_shuffle(pool, rng)[:min(size, len(pool))]
    return QuizSession(queue=queue, corpus=corpus, mode=QuizMode(mode), rng=rng)


def start_quiz(
    pool: Union[StudyQueue, Sequence[Card]],
    size: Optional[int] = None,
    mode: QuizMode = QuizMode.MULTIPLE_CHOICE,
    rng: Optional[random.Random] = None,
    corpus: Optional[Union[CardStore, Sequence[Card]]] = None
) -> QuizSession:
    """
    Start a quiz over a shuffled, truncated copy of `pool`.

    Distractors are drawn from the whole deck, not just the quiz pool. The
    deck is `corpus` when given, otherwise the corpus behind a StudyQueue
    pool. A plain card list with no `corpus` is its own deck.

    Args:
        pool: Candidate cards, or a (usually filtered) StudyQueue
        size: Maximum number of questions (default from config)
        mode: Multiple choice or typed answers
        rng: Random source for question order, distractors and option order
        corpus: Deck distractors are drawn from (card list or CardStore)

    Returns:
        QuizSession in ACTIVE state at the first question

    Raises:
        InsufficientPool: If the pool holds fewer than 2 cards
    """
    if isinstance(pool, StudyQueue):
        deck = pool.corpus
        pool = [pool.corpus[i] for i in pool.order]
    else:
        deck = pool
    if isinstance(corpus, CardStore):
        deck = corpus.cards
    elif corpus is not None:
        deck = corpus

    if len(pool) < MIN_QUIZ_POOL:
        raise InsufficientPool(
            f"A quiz needs at least {MIN_QUIZ_POOL} cards, got {len(pool)}",
            pool_size=len(pool),
        )
    if size is None:
        size = config.get_default_quiz_size()
    if size < 1:
        raise ValueError(f"Quiz size must be positive, got {size}")

    session = _new_session(pool, size, mode, rng, deck)
    logger.info("Quiz started: %d questions (%s)", session.total, session.mode.value)
    return session


def present_question(session: QuizSession) -> Presentation:
    """
    Build the presentation of the current question.

    Multiple choice: up to 3 distractors plus the correct answer, shuffled.
    Calling again re-rolls the options.

    Raises:
        InvalidTransition: Outside the ACTIVE state
        InsufficientPool: If no distractor at all can be found
    """
    _require_state(session, "present a question", QuizState.ACTIVE)
    card = session.queue[session.cursor]

    if session.mode is QuizMode.TYPED:
        session.choices = None
        return Presentation(card=card)

    distractors = generate_distractors(card, session.corpus, CHOICE_DISTRACTORS, session.rng)
    if not distractors:
        raise InsufficientPool(
            f"No distinct wrong answer available for card {card.id}",
            pool_size=len(session.corpus),
        )
    options = fisher_yates_shuffle(distractors + [card.answer], session.rng)
    session.choices = options
    return Presentation(card=card, choices=tuple(options))


def submit_answer(
    session: QuizSession,
    response: str,
    now: Optional[datetime] = None
) -> AnswerResult:
    """
    Grade the response to the current question.

    A correct answer is reviewed with Grade.GOOD and scores a point; a wrong
    one is reviewed with Grade.AGAIN and joins the wrong queue.

    Raises:
        InvalidTransition: Outside the ACTIVE state (e.g. answering twice)
    """
    _require_state(session, "submit an answer", QuizState.ACTIVE)
    card = session.queue[session.cursor]

    if session.mode is QuizMode.TYPED:
        correct = is_typed_correct(response, card.answer)
    else:
        correct = is_choice_correct(response, card.answer)

    record_review(card, Grade.GOOD if correct else Grade.AGAIN, now)

    if correct:
        session.score += 1
    else:
        session.wrong_queue.append(card)
    session.answered = True
    session.state = QuizState.FEEDBACK

    return AnswerResult(correct=correct, correct_answer=card.answer, explanation=card.explanation)


def next_question(session: QuizSession) -> QuizState:
    """
    Move past the answered question.

    Returns:
        ACTIVE if another question follows, RESULT after the last one
    """
    _require_state(session, "move to the next question", QuizState.FEEDBACK)
    session.cursor += 1
    session.answered = False
    session.choices = None
    if session.cursor >= len(session.queue):
        session.state = QuizState.RESULT
        logger.info(
            "Quiz finished: %d/%d in %ds",
            session.score, session.total, session.elapsed_seconds,
        )
    else:
        session.state = QuizState.ACTIVE
    return session.state


def result_band(percentage: int) -> ResultBand:
    if percentage >= EXCELLENT_PERCENTAGE:
        return ResultBand.EXCELLENT
    if percentage >= GOOD_PERCENTAGE:
        return ResultBand.GOOD
    return ResultBand.KEEP_PRACTICING


def result_summary(session: QuizSession) -> QuizResult:
    _require_state(session, "summarize results", QuizState.RESULT)
    total = session.total
    percentage = round_half_up(session.score / total * 100) if total else 0
    return QuizResult(
        score=session.score,
        total=total,
        percentage=percentage,
        wrong_queue=tuple(session.wrong_queue),
        elapsed_seconds=session.elapsed_seconds,
        band=result_band(percentage),
    )


def abort(session: QuizSession) -> None:
    """Discard the quiz in progress and return to SETUP."""
    _require_state(session, "abort", QuizState.ACTIVE, QuizState.FEEDBACK)
    logger.info("Quiz aborted at question %d/%d", session.cursor + 1, session.total)
    session.queue = []
    session.cursor = 0
    session.score = 0
    session.wrong_queue = []
    session.elapsed_seconds = 0
    session.answered = False
    session.choices = None
    session.state = QuizState.SETUP


def tick(session: QuizSession, seconds: int = 1) -> int:
    """Add caller-measured time to the quiz clock. Returns the new total."""
    _require_state(session, "advance the timer", QuizState.ACTIVE, QuizState.FEEDBACK)
    if seconds < 0:
        raise ValueError(f"Elapsed time cannot go backwards, got {seconds}")
    session.elapsed_seconds += seconds
    return session.elapsed_seconds


def start_review_quiz(session: QuizSession, rng: Optional[random.Random] = None) -> QuizSession:
    """
    Start a new quiz over the cards answered wrongly in a finished one.

    A single wrong card is enough, distractors still come from the full corpus.

    Raises:
        InvalidTransition: Unless the session is in RESULT
        InsufficientPool: If nothing was answered wrongly
    """
    _require_state(session, "start a review quiz", QuizState.RESULT)
    if not session.wrong_queue:
        raise InsufficientPool("No wrong answers to review", pool_size=0)

    review = _new_session(
        session.wrong_queue,
        len(session.wrong_queue),
        session.mode,
        rng if rng is not None else session.rng,
        session.corpus,
    )
    logger.info("Review quiz started: %d questions", review.total)
    return review


def serialize(session: QuizSession) -> str:
    """
    JSON snapshot of a quiz waiting for an answer.

    Keys: queue, cursor, score, wrongQueue, mode, elapsedSeconds.
    """
    _require_state(session, "save", QuizState.ACTIVE)
    state = ResumeState(
        queue=[card.id for card in session.queue],
        cursor=session.cursor,
        score=session.score,
        wrong_queue=[card.id for card in session.wrong_queue],
        mode=session.mode,
        elapsed_seconds=session.elapsed_seconds,
    )
    return state.model_dump_json(by_alias=True)


def deserialize(
    blob: str,
    store: CardStore,
    rng: Optional[random.Random] = None
) -> QuizSession:
    """
    Restore a quiz saved with serialize().

    Card ids are resolved against `store`, whose cards also become the
    distractor corpus. The restored session is ACTIVE and unanswered.

    Raises:
        CorruptResumeState: On malformed JSON, missing fields, unknown card
            ids or a cursor outside the queue
    """
    try:
        state = ResumeState.model_validate_json(blob)
    except ValidationError as exc:
        raise CorruptResumeState(f"Unreadable quiz state: {exc}") from exc

    if state.cursor >= len(state.queue):
        raise CorruptResumeState(
            f"Cursor {state.cursor} outside a queue of {len(state.queue)} questions"
        )
    if state.score + len(state.wrong_queue) != state.cursor:
        raise CorruptResumeState(
            f"Score {state.score} and {len(state.wrong_queue)} wrong answers "
            f"do not add up to {state.cursor} answered questions"
        )

    def resolve(card_ids: list[str]) -> list[Card]:
        cards = []
        for card_id in card_ids:
            card = store.get(card_id)
            if card is None:
                raise CorruptResumeState(f"Unknown card id in quiz state: {card_id!r}")
            cards.append(card)
        return cards

    session = QuizSession(
        queue=resolve(state.queue),
        corpus=store.cards,
        mode=state.mode,
        rng=rng if rng is not None else random.Random(),
        cursor=state.cursor,
        score=state.score,
        wrong_queue=resolve(state.wrong_queue),
        elapsed_seconds=state.elapsed_seconds,
    )
    logger.info("Quiz resumed at question %d/%d", session.cursor + 1, session.total)
    return session
