"""Pydantic schemas for donor records, training data and mined patterns."""

from donor_parser.schemas.donor import (
    RECORD_FIELDS,
    UNKNOWN,
    DonorSubmission,
    ParsedRecord,
    ParseResult,
    validate_donor,
    wire_name,
)
from donor_parser.schemas.patterns import (
    LearnedPattern,
    MiningResult,
    MiningStatistics,
    PatternType,
)
from donor_parser.schemas.trace import TraceAction, TraceStep
from donor_parser.schemas.training import Feedback, TrainingExample

__all__ = [
    "RECORD_FIELDS",
    "UNKNOWN",
    "DonorSubmission",
    "ParsedRecord",
    "ParseResult",
    "validate_donor",
    "wire_name",
    "LearnedPattern",
    "MiningResult",
    "MiningStatistics",
    "PatternType",
    "TraceAction",
    "TraceStep",
    "Feedback",
    "TrainingExample",
]
