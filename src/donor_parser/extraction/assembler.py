"""Record assembler: runs every extractor over one span and scores the result."""

import logging
from typing import Dict, Optional

from donor_parser.extraction.extractors import (
    extract_batch,
    extract_blood_group,
    extract_date,
    extract_hall,
    extract_hospital,
    extract_names,
    extract_phone,
    extract_referrer,
)
from donor_parser.extraction.sanitizer import clean_text
from donor_parser.extraction.trace import NullTrace, ParseTrace
from donor_parser.schemas.donor import UNKNOWN, ParsedRecord, ParseResult
from donor_parser.schemas.trace import TraceAction

logger = logging.getLogger(__name__)

# Weight earned by each field when it resolves to a non-default value
FIELD_WEIGHTS: Dict[str, float] = {
    "name": 1.0,
    "blood_group": 1.0,
    "phone": 1.0,
    "date": 1.0,
    "batch": 0.5,
    "hospital": 0.5,
}

# Sum of FIELD_WEIGHTS: the four core fields alone score 0.8, and only a
# record that also resolves batch and hospital reaches 1.0.
MAX_WEIGHT = 5.0


def score_record(record: ParsedRecord) -> float:
    """Confidence in [0, 1] from the fields the record resolved."""
    achieved = 0.0
    for field_name, weight in FIELD_WEIGHTS.items():
        value = getattr(record, field_name)
        if value and value != UNKNOWN:
            achieved += weight
    return achieved / MAX_WEIGHT


def parse_one(text: str, trace: Optional[ParseTrace] = None) -> ParseResult:
    """Extract one donor record from ``text``.

    Never raises. A record with neither name nor blood group is still
    returned; callers filter on ``record.is_usable``.

    Args:
        text: Raw or already sanitized text describing a single donor.
        trace: Optional tracer; when given, its steps are also attached to
            the returned result.
    """
    active = trace if trace is not None else NullTrace()
    cleaned = clean_text(text)

    names = extract_names(cleaned, active)
    referrer = names.referrer
    if not referrer:
        referrer = extract_referrer(cleaned, active)
    else:
        active.add(
            "referrer",
            TraceAction.MATCHED,
            "taken from the two-name rule",
            rule="two_name",
            value=referrer,
        )

    record = ParsedRecord(
        name=names.donor_name,
        blood_group=extract_blood_group(cleaned, active),
        batch=extract_batch(cleaned, active),
        hospital=extract_hospital(cleaned, active),
        phone=extract_phone(cleaned, active),
        date=extract_date(cleaned, active),
        referrer=referrer,
        hall_name=extract_hall(cleaned, active),
    )
    confidence = score_record(record)
    logger.debug(
        "Parsed record name=%r blood_group=%r confidence=%.2f",
        record.name,
        record.blood_group,
        confidence,
    )
    return ParseResult(
        record=record,
        confidence=confidence,
        source_text=cleaned,
        trace=active.build(),
    )
