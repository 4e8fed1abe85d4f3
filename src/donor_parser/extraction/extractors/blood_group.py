"""Blood-group extraction.

The line-level rule runs first since most fragments carry one datum per line.
When no line holds a blood group on its own, the whole text is scanned
with progressively looser shapes (the word "platelet" is removed first:
it often sits right next to the blood group in requests).
"""

import logging
import re
from typing import Iterable, Optional, Pattern

from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.extractors.common import BLOOD_BASE, split_lines
from donor_parser.extraction.normalizers import is_canonical_blood_group, normalize_blood_group
from donor_parser.extraction.trace import ParseTrace

logger = logging.getLogger(__name__)

_PLATELET_RE = re.compile(r"\bplatelets?\b", re.IGNORECASE)

# Line-level shapes (anchored at the start of a line)
_LINE_STANDALONE_RE = re.compile(rf"^{BLOOD_BASE}\s*[+-]$", re.IGNORECASE)
_LINE_PAREN_RE = re.compile(
    rf"^{BLOOD_BASE}\s*(?:\(\s*[+-]?\s*(?:ve|positive|negative)\s*\)|\(\s*[+-]\s*\)\s*(?:ve\b)?)",
    re.IGNORECASE,
)
_LINE_SUFFIX_RE = re.compile(rf"^{BLOOD_BASE}\s*[+-]?\s*(?:ve|positive|negative)$", re.IGNORECASE)
_LINE_PATTERNS = (_LINE_STANDALONE_RE, _LINE_PAREN_RE, _LINE_SUFFIX_RE)

# Whole-text shapes, in descending priority
_TEXT_PAREN_AFTER_NAME_RE = re.compile(rf"\(\s*({BLOOD_BASE}\s*[+-]?\s*(?:ve)?)\s*\)", re.IGNORECASE)
_TEXT_STANDALONE_RE = re.compile(rf"^({BLOOD_BASE}\s*[+-])$", re.IGNORECASE | re.MULTILINE)
_TEXT_SPACE_SIGN_RE = re.compile(rf"\b({BLOOD_BASE}\s*[+-])(?!\d)", re.IGNORECASE)
_TEXT_PAREN_QUALIFIER_RE = re.compile(
    rf"\b({BLOOD_BASE}\s*\(\s*[+-]?\s*(?:ve|positive|negative)\s*\)"
    rf"|{BLOOD_BASE}\s*\(\s*[+-]\s*\)\s*(?:ve\b)?)",
    re.IGNORECASE,
)
_TEXT_VE_SUFFIX_RE = re.compile(rf"\b({BLOOD_BASE}\s*[+-]?\s*ve)\b", re.IGNORECASE)


def _canonical(candidates: Iterable[str]) -> Optional[str]:
    """First candidate that normalizes to a canonical code."""
    for candidate in candidates:
        normalized = normalize_blood_group(candidate.strip())
        if is_canonical_blood_group(normalized):
            return normalized
    return None


def _line_by_line(text: str) -> Optional[str]:
    # Every shape is tried on a line before moving on, so the earliest
    # line holding a blood group wins.
    for line in split_lines(text):
        found = _canonical(
            match.group(0)
            for match in (pattern.match(line) for pattern in _LINE_PATTERNS)
            if match
        )
        if found:
            return found
    return None


def _text_rule(pattern: Pattern[str]):
    def extract(text: str) -> Optional[str]:
        cleaned = _PLATELET_RE.sub("", text)
        return _canonical(match.group(1) for match in pattern.finditer(cleaned))

    return extract


BLOOD_GROUP_CASCADE: RuleCascade[str] = RuleCascade(
    "blood_group",
    [
        Rule("line_by_line", _line_by_line, "blood group alone or with a sign qualifier on a line"),
        Rule("paren_after_name", _text_rule(_TEXT_PAREN_AFTER_NAME_RE), "blood group in parentheses after a name"),
        Rule("standalone_sign", _text_rule(_TEXT_STANDALONE_RE), "blood group with sign"),
        Rule("space_then_sign", _text_rule(_TEXT_SPACE_SIGN_RE), "blood group followed by a sign"),
        Rule("paren_qualifier", _text_rule(_TEXT_PAREN_QUALIFIER_RE), "blood group with parenthesized qualifier"),
        Rule("ve_suffix", _text_rule(_TEXT_VE_SUFFIX_RE), "blood group with trailing ve"),
    ],
    default="",
)


def extract_blood_group(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the canonical blood group found in ``text`` or an empty string."""
    return BLOOD_GROUP_CASCADE.run(text, trace)
