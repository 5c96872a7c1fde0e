"""
Pydantic models for flashcard records.

The Card model is the validated shape of one stored flashcard. Field names are
snake_case in Python and camelCase in the persisted record.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from neuronq import config
from neuronq.errors import InvalidCardRecord
from neuronq.srs.constants import DEFAULT_EASE_FACTOR, EASE_FLOOR, MAX_MASTERY
from neuronq.srs.scheduler import as_utc


# Older record layouts -> current persisted field names
LEGACY_FIELD_NAMES = {
    "interval": "intervalDays",
    "nextReview": "nextReviewAt",
    "lastReviewed": "lastReviewedAt",
    "created": "createdAt",
}

TIMESTAMP_FIELDS = ("lastReviewedAt", "nextReviewAt", "createdAt")


class Card(BaseModel):
    """
    A single reviewable flashcard.

    Only the scheduling fields are ever changed by the core.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(..., min_length=1, description="Opaque identifier, stable across sessions")
    question: str = Field(..., description="Question (front) text")
    answer: str = Field(..., description="Answer (back) text")
    explanation: Optional[str] = Field(default=None, description="Supplementary text shown after answering")
    image: Optional[str] = Field(default=None, description="Image reference, opaque to the core")
    folder: str = Field(default_factory=config.get_default_folder, description="Single category label")
    tags: list[str] = Field(default_factory=list, description="Free-form labels (passed through)")

    # Scheduling state
    interval_days: int = Field(default=0, ge=0, alias="intervalDays")
    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=EASE_FLOOR, alias="easeFactor")
    review_count: int = Field(default=0, ge=0, alias="reviewCount")
    correct_count: int = Field(default=0, ge=0, alias="correctCount")
    mastery: int = Field(default=0, ge=0, le=MAX_MASTERY)
    last_reviewed_at: Optional[datetime] = Field(default=None, alias="lastReviewedAt")
    next_review_at: Optional[datetime] = Field(default=None, alias="nextReviewAt")

    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("last_reviewed_at", "next_review_at", "created_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are stored as UTC
        return as_utc(value)

    def to_record(self) -> dict:
        """Persisted camelCase shape of this card (JSON-compatible)."""
        return self.model_dump(mode="json", by_alias=True)


def _epoch_ms_to_datetime(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    return value


def migrate_card(raw: Mapping[str, Any]) -> Card:
    """
    Turn a stored card record of any known layout into a validated Card.

    Handles:
    - legacy field names (interval, nextReview, lastReviewed, created)
    - the nested "srs" block of the oldest layout (interval, reps, ef, nextReview)
    - timestamps stored as epoch milliseconds
    - missing or null optional fields, missing folder and numeric ids
    - ease factors below the floor and out-of-range mastery

    Args:
        raw: Record as loaded by the caller

    Returns:
        Validated Card

    Raises:
        InvalidCardRecord: If the record cannot be made valid
    """
    if not isinstance(raw, Mapping):
        raise InvalidCardRecord(f"Card record must be a mapping, got {type(raw).__name__}")

    record = {key: value for key, value in raw.items() if value is not None}

    srs = record.pop("srs", None)
    if isinstance(srs, Mapping):
        record.setdefault("intervalDays", srs.get("interval"))
        record.setdefault("reviewCount", srs.get("reps"))
        record.setdefault("easeFactor", srs.get("ef"))
        record.setdefault("nextReviewAt", srs.get("nextReview"))
        record = {key: value for key, value in record.items() if value is not None}

    for old_name, new_name in LEGACY_FIELD_NAMES.items():
        if old_name in record:
            value = record.pop(old_name)
            record.setdefault(new_name, value)

    for name in TIMESTAMP_FIELDS:
        if name in record:
            record[name] = _epoch_ms_to_datetime(record[name])

    if record.get("id") in (None, ""):
        record["id"] = uuid.uuid4().hex
    else:
        record["id"] = str(record["id"])

    if not record.get("folder"):
        record["folder"] = config.get_default_folder()

    if "easeFactor" in record and isinstance(record["easeFactor"], (int, float)):
        record["easeFactor"] = max(EASE_FLOOR, float(record["easeFactor"]))
    if "mastery" in record and isinstance(record["mastery"], (int, float)):
        record["mastery"] = max(0, min(MAX_MASTERY, int(record["mastery"])))

    try:
        return Card.model_validate(record)
    except ValidationError as exc:
        raise InvalidCardRecord(f"Invalid card record {record.get('id')!r}: {exc}") from exc
