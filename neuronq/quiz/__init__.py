"""Quiz sessions and distractor generation."""

from neuronq.quiz.categories import DEFAULT_CATEGORIES, DistractorCategory, category_by_name
from neuronq.quiz.distractors import generate_distractors, matching_categories
from neuronq.quiz.matching import is_choice_correct, is_typed_correct
from neuronq.quiz.session import (
    AnswerResult,
    Presentation,
    QuizMode,
    QuizResult,
    QuizSession,
    QuizState,
    ResultBand,
    abort,
    deserialize,
    next_question,
    present_question,
    result_summary,
    serialize,
    start_quiz,
    start_review_quiz,
    submit_answer,
    tick,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "DistractorCategory",
    "category_by_name",
    "generate_distractors",
    "matching_categories",
    "is_choice_correct",
    "is_typed_correct",
    "AnswerResult",
    "Presentation",
    "QuizMode",
    "QuizResult",
    "QuizSession",
    "QuizState",
    "ResultBand",
    "abort",
    "deserialize",
    "next_question",
    "present_question",
    "result_summary",
    "serialize",
    "start_quiz",
    "start_review_quiz",
    "submit_answer",
    "tick",
]
