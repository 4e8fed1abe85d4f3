"""Rule-based extraction engine.

Pipeline: ``clean_text`` -> ``split_entries`` -> per span the field
extractors -> ``parse_one`` assembles a record and its confidence.
"""

from donor_parser.extraction.assembler import FIELD_WEIGHTS, parse_one, score_record
from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.labeled import parse_labeled, parse_labeled_many
from donor_parser.extraction.sanitizer import clean_text
from donor_parser.extraction.segmenter import parse_many, split_entries
from donor_parser.extraction.trace import NullTrace, ParseTrace

__all__ = [
    "FIELD_WEIGHTS",
    "parse_one",
    "parse_many",
    "score_record",
    "split_entries",
    "parse_labeled",
    "parse_labeled_many",
    "clean_text",
    "Rule",
    "RuleCascade",
    "ParseTrace",
    "NullTrace",
]
