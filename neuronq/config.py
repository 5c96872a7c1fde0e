"""
Environment-driven configuration.

Values are read from the process environment (and a local .env file) each
time a getter is called, so tests and callers can change them at runtime.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EMPTY_FILTER_POLICIES = ("raise", "fallback", "empty")


def get_log_level() -> int:
    """Logging level name from NEURONQ_LOG_LEVEL (default: INFO)."""
    name = os.getenv("NEURONQ_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"NEURONQ_LOG_LEVEL has unknown level '{name}'")
    return level


def get_default_quiz_size() -> int:
    """Number of questions in a quiz when the caller does not choose."""
    raw = os.getenv("NEURONQ_QUIZ_SIZE", "10")
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f"NEURONQ_QUIZ_SIZE must be an integer, got '{raw}'") from None
    if size < 1:
        raise ValueError(f"NEURONQ_QUIZ_SIZE must be positive, got {size}")
    return size


def get_empty_filter_policy() -> str:
    """
    What build_queue does when a filter leaves no cards.

    One of "raise" (default), "fallback" or "empty".
    """
    policy = os.getenv("NEURONQ_EMPTY_FILTER_POLICY", "raise").strip().lower()
    if policy not in EMPTY_FILTER_POLICIES:
        raise ValueError(
            f"NEURONQ_EMPTY_FILTER_POLICY must be one of {', '.join(EMPTY_FILTER_POLICIES)}, "
            f"got '{policy}'"
        )
    return policy


def get_default_folder() -> str:
    """Folder assigned to stored cards that have none."""
    return os.getenv("NEURONQ_DEFAULT_FOLDER", "メイン")


def configure_logging() -> None:
    """
    Configure root logging for applications embedding the core.

    The library itself never installs handlers.
    """
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
