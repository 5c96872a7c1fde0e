"""
NeuronQ - flashcard review core.

Spaced-repetition scheduling, study queues, quiz sessions and distractor
generation over a caller-owned card corpus.
"""

__version__ = "0.1.0"
