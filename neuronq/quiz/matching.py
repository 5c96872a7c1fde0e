"""
Answer checking for quiz modes.
"""

from __future__ import annotations

# A typed answer contained in the correct one must cover more than this share of it
PARTIAL_MATCH_RATIO = 0.5


def is_choice_correct(selected: str, correct: str) -> bool:
    """Multiple choice: the selected option is the answer string itself."""
    return selected == correct


def is_typed_correct(response: str, correct: str) -> bool:
    """
    Typed answer check with partial credit.

    Accepted when the trimmed response equals the trimmed answer ignoring
    case, or when it is a case-insensitive substring of the answer and longer
    than half of it ("Transmission Control" for "Transmission Control
    Protocol").
    """
    user = response.strip().lower()
    expected = correct.strip().lower()
    if not user:
        return False
    if user == expected:
        return True
    return user in expected and len(user) > len(expected) * PARTIAL_MATCH_RATIO
