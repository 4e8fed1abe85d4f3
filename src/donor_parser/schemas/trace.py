"""Schemas for the extraction reasoning trail."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TraceAction(str, Enum):
    """What happened at a single step of a parse."""

    MATCHED = "matched"      # a rule produced a value
    SKIPPED = "skipped"      # a rule did not apply
    REJECTED = "rejected"    # a rule matched but its value failed validation
    DEFAULTED = "defaulted"  # no rule fired, field keeps its default
    DROPPED = "dropped"      # a whole segment was discarded


class TraceStep(BaseModel):
    """One recorded decision made while parsing a span."""

    stage: str = Field(description="Field or pipeline stage, e.g. 'blood_group', 'segmenter'")
    action: TraceAction
    reasoning: str = Field(description="Short human-readable explanation")
    rule: Optional[str] = Field(default=None, description="Rule name within the cascade")
    value: Optional[str] = Field(default=None, description="Value produced, if any")
    detail: Optional[Dict[str, Any]] = None
