"""
Donor Parser - extraction of blood donor records from pasted chat text.

Provides a rule-based extraction engine (sanitizer, field extractors,
record assembler, entry segmenter) and a pattern-mining engine that scores
extraction rules against a corpus of human-verified examples.
"""

__version__ = "0.1.0"

from donor_parser.extraction import parse_one, parse_many
from donor_parser.learning import mine_patterns

__all__ = [
    "parse_one",
    "parse_many",
    "mine_patterns",
]
