"""Pydantic schemas for verified training examples and end-user feedback."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from donor_parser.schemas.donor import ParsedRecord

# An example counts as correct when more than this share of fields match.
CORRECTNESS_THRESHOLD = 0.7


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.utcnow()


class TrainingExample(BaseModel):
    """A raw fragment paired with the record a verifier attests is correct.

    ``parsed_output`` and ``confidence`` are cached at creation/update time;
    build and edit instances through ``donor_parser.learning.examples`` so the
    cache is recomputed whenever ``raw_text`` changes.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    raw_text: str = Field(alias="rawText", min_length=1)
    expected_output: ParsedRecord = Field(alias="expectedOutput")
    parsed_output: ParsedRecord = Field(default_factory=ParsedRecord, alias="parsedOutput")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=_utcnow, alias="updatedAt")

    @computed_field(alias="isCorrect")
    @property
    def is_correct(self) -> bool:
        return self.confidence > CORRECTNESS_THRESHOLD


class Feedback(BaseModel):
    """End-user verdict on a live parse, queued for admin review."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    raw_text: str = Field(alias="rawText", min_length=1)
    parsed_output: ParsedRecord = Field(alias="parsedOutput")
    is_correct: bool = Field(alias="isCorrect")
    comment: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    reviewed: bool = Field(default=False, alias="reviewedByAdmin")
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
