"""Building and editing verified training examples.

``parsed_output`` and ``confidence`` are a cache of what the engine
currently produces for ``raw_text``; every constructor here recomputes them
so a stored example never disagrees with its own text.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from donor_parser.extraction.assembler import parse_one
from donor_parser.schemas.donor import RECORD_FIELDS, ParsedRecord
from donor_parser.schemas.training import TrainingExample

logger = logging.getLogger(__name__)

RecordLike = Union[ParsedRecord, Dict[str, Any]]
Parser = Callable[[str], ParsedRecord]


def _default_parser(text: str) -> ParsedRecord:
    return parse_one(text).record


def _as_record(value: RecordLike) -> ParsedRecord:
    if isinstance(value, ParsedRecord):
        return value
    return ParsedRecord.model_validate(value)


def score_against_expected(parsed: RecordLike, expected: RecordLike) -> float:
    """Share of record fields where parsed and expected agree.

    A field agrees when both values are non-empty and equal ignoring case
    and surrounding whitespace. All eight fields count toward the total.
    """
    parsed_record = _as_record(parsed)
    expected_record = _as_record(expected)

    matches = 0
    for field_name in RECORD_FIELDS:
        got = (getattr(parsed_record, field_name) or "").strip()
        want = (getattr(expected_record, field_name) or "").strip()
        if got and want and got.lower() == want.lower():
            matches += 1
    return matches / len(RECORD_FIELDS)


def build_example(
    raw_text: str,
    expected_output: RecordLike,
    parser: Optional[Parser] = None,
) -> TrainingExample:
    """Create a training example, parsing ``raw_text`` and scoring it."""
    parse = parser or _default_parser
    expected = _as_record(expected_output)
    parsed = parse(raw_text)
    confidence = score_against_expected(parsed, expected)
    logger.debug("Built example: confidence=%.3f", confidence)
    return TrainingExample(
        raw_text=raw_text,
        expected_output=expected,
        parsed_output=parsed,
        confidence=confidence,
    )


def update_example(
    example: TrainingExample,
    raw_text: Optional[str] = None,
    expected_output: Optional[RecordLike] = None,
    parser: Optional[Parser] = None,
) -> TrainingExample:
    """Return an edited copy of ``example`` with its cache recomputed.

    The text is re-parsed when ``raw_text`` changes; confidence is rescored
    whenever either the text or the expected output changes.
    """
    new_text = raw_text if raw_text else example.raw_text
    expected = _as_record(expected_output) if expected_output is not None else example.expected_output

    parsed = example.parsed_output
    if new_text != example.raw_text:
        parsed = (parser or _default_parser)(new_text)

    return example.model_copy(
        update={
            "raw_text": new_text,
            "expected_output": expected,
            "parsed_output": parsed,
            "confidence": score_against_expected(parsed, expected),
            "updated_at": datetime.utcnow(),
        }
    )


def rescore_example(example: TrainingExample, parser: Optional[Parser] = None) -> TrainingExample:
    """Re-parse with the current engine, e.g. after extractor changes."""
    parsed = (parser or _default_parser)(example.raw_text)
    return example.model_copy(
        update={
            "parsed_output": parsed,
            "confidence": score_against_expected(parsed, example.expected_output),
            "updated_at": datetime.utcnow(),
        }
    )
