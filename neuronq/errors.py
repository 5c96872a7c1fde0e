"""
Error types raised by the NeuronQ core.

Every error is recoverable by the caller: the operation that raised leaves
cards, queues and sessions exactly as they were before the call.
"""

from __future__ import annotations

from typing import Optional


class NeuronQError(Exception):
    """Base class for all NeuronQ errors."""


class InvalidGrade(NeuronQError):
    """Review quality outside the 0-5 range."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Review quality must be an integer in 0..5, got {quality!r}")


class InsufficientPool(NeuronQError):
    """A quiz or multiple-choice question cannot be built from the available cards."""

    def __init__(self, message: str, pool_size: int = 0):
        self.pool_size = pool_size
        super().__init__(message)


class EmptyFilterResult(NeuronQError):
    """
    A folder or due filter left no cards.

    Raised instead of silently widening the learner's filter. The caller can
    retry with a fallback or empty policy once the learner has decided.
    """

    def __init__(self, folder: Optional[str], due_only: bool):
        self.folder = folder
        self.due_only = due_only
        if due_only:
            where = f"due cards in folder '{folder}'" if folder else "due cards"
        else:
            where = f"cards in folder '{folder}'"
        super().__init__(f"No {where}")


class CorruptResumeState(NeuronQError):
    """A serialized quiz session could not be restored."""


class InvalidTransition(NeuronQError):
    """A quiz operation was called in a state that does not allow it."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while quiz is in state '{state}'")


class InvalidCardRecord(NeuronQError):
    """A stored card record could not be migrated into a Card."""
