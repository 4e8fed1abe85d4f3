"""Pydantic schemas for parsed donor records.

Field names are snake_case in Python; serialized JSON uses the camelCase
vocabulary shared with the submission API and the pattern store
(``bloodGroup``, ``hallName``).
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from donor_parser.schemas.trace import TraceStep

UNKNOWN = "Unknown"

# Order matters: it is the column order used by reports and example scoring.
RECORD_FIELDS: Tuple[str, ...] = (
    "name",
    "blood_group",
    "batch",
    "hospital",
    "phone",
    "date",
    "referrer",
    "hall_name",
)

# Python field name -> wire name
FIELD_ALIASES: Dict[str, str] = {
    "blood_group": "bloodGroup",
    "hall_name": "hallName",
}


def wire_name(field_name: str) -> str:
    """Return the camelCase wire name for a record field."""
    return FIELD_ALIASES.get(field_name, field_name)


def python_name(field_name: str) -> str:
    """Return the Python attribute name for a wire or Python field name."""
    for py_name, alias in FIELD_ALIASES.items():
        if field_name == alias:
            return py_name
    return field_name


class ParsedRecord(BaseModel):
    """A single normalized donor record.

    Immutable once constructed. ``batch`` and ``hospital`` default to
    ``"Unknown"``; every other field defaults to an empty string.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    name: str = Field(default="", description="Donor's own name")
    blood_group: str = Field(
        default="", alias="bloodGroup", description="Canonical code (A+, O-, ...) or empty"
    )
    batch: str = Field(default=UNKNOWN, description="Department/session batch")
    hospital: str = Field(default=UNKNOWN, description="Hospital where the donation happened")
    phone: str = Field(default="", description="11-digit local number starting with 01")
    date: str = Field(default="", description="Donation date as DD-MM-YYYY")
    referrer: str = Field(default="", description="Person who managed the donation")
    hall_name: str = Field(default="", alias="hallName", description="Residential hall")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_none(cls, v: Any) -> Any:
        """Treat missing JSON values as empty strings."""
        return "" if v is None else v

    @property
    def is_usable(self) -> bool:
        """A record needs at least a name or a blood group to be worth keeping."""
        return bool(self.name or self.blood_group)

    def get(self, field_name: str) -> str:
        """Look up a field by Python or wire name."""
        return getattr(self, python_name(field_name), "")

    def to_wire(self) -> Dict[str, str]:
        """Serialize using the camelCase wire names."""
        return self.model_dump(by_alias=True)


class ParseResult(BaseModel):
    """A parsed record together with the engine's confidence in it."""

    record: ParsedRecord
    confidence: float = Field(ge=0.0, le=1.0)
    source_text: str = Field(default="", description="Sanitized span the record was parsed from")
    trace: List[TraceStep] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        """Flatten into the ``{...record, confidence}`` shape used by clients."""
        payload: Dict[str, Any] = self.record.to_wire()
        payload["confidence"] = round(self.confidence, 4)
        return payload


# =============================================================================
# Submission validation
# =============================================================================

_SUBMISSION_PHONE_PATTERNS = (
    re.compile(r"^01\d{9}$"),
    re.compile(r"^\+8801\d{9}$"),
    re.compile(r"^8801\d{9}$"),
)
_SUBMISSION_DATE_PATTERNS = (
    re.compile(r"^\d{1,2}[.-]\d{1,2}[.-]\d{2,4}$"),
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$"),
)


class DonorSubmission(BaseModel):
    """Validated donor record as accepted by the persistence layer.

    Blood group is normalized before it is checked, so ``B(+ve)`` is accepted
    and stored as ``B+``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=2)
    blood_group: str = Field(..., alias="bloodGroup")
    batch: Optional[str] = None
    phone: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    referrer: Optional[str] = None
    hall_name: Optional[str] = Field(default=None, alias="hallName")

    @field_validator("blood_group")
    @classmethod
    def validate_blood_group(cls, v: str) -> str:
        from donor_parser.extraction.normalizers import (
            is_canonical_blood_group,
            normalize_blood_group,
        )

        normalized = normalize_blood_group(v)
        if not is_canonical_blood_group(normalized):
            raise ValueError(
                "Invalid blood group. Accepted formats: A+, A-, B+, B-, AB+, AB-, O+, O- "
                "or B(+ve), B(positive), etc."
            )
        return normalized

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        cleaned = re.sub(r"[^\d+]", "", v)
        if not any(p.match(cleaned) for p in _SUBMISSION_PHONE_PATTERNS):
            raise ValueError(
                "Phone number must be in Bangladesh format (01XXXXXXXXX or +8801XXXXXXXXX)"
            )
        return v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        if not any(p.match(v) for p in _SUBMISSION_DATE_PATTERNS):
            raise ValueError(
                "Date must be in DD-MM-YY, DD-MM-YYYY, DD.MM.YY, DD.MM.YYYY, M/D/YY, or M/D/YYYY format"
            )
        return v


def validate_donor(
    data: Dict[str, Any],
) -> Tuple[bool, Optional[DonorSubmission], Optional[str]]:
    """Validate raw submission data.

    Returns:
        ``(True, submission, None)`` on success, otherwise
        ``(False, None, message)`` with the first validation message.
    """
    try:
        return True, DonorSubmission.model_validate(data), None
    except ValidationError as exc:
        errors = exc.errors()
        if not errors:
            return False, None, "Validation failed"
        message = str(errors[0].get("msg", "Validation failed"))
        # pydantic prefixes custom messages with "Value error, "
        return False, None, message.removeprefix("Value error, ")
