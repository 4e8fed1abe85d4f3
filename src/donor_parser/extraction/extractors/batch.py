"""Batch (department + session) extraction.

Phone numbers and dates are full of short digit runs that look like year
ranges, so their spans are masked out with placeholder characters of the
same length before any batch rule runs.
"""

import logging
import re
from functools import lru_cache
from typing import Optional, Pattern

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.extractors.common import (
    DATE_RE,
    INTERNATIONAL_PHONE_RE,
    LOCAL_PHONE_RE,
    split_lines,
)
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.donor import UNKNOWN

logger = logging.getLogger(__name__)

MASK_CHAR = "X"

_YEAR_RANGE_RE = re.compile(r"(?<!\d)(\d{2})[ -](\d{2})(?!\d)")
_LABELED_BATCH_RE = re.compile(r"^batch\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)

# Session years are written as two-digit pairs at most this far apart.
MAX_SESSION_SPAN = 5

# A year range with this many digits within three characters of it is a
# fragment of some longer number.
MAX_CONTEXT_DIGITS = 2


def mask_phone_and_date(text: str) -> str:
    """Replace phone and date spans with ``X`` runs of equal length."""
    masked = text
    for pattern in (INTERNATIONAL_PHONE_RE, LOCAL_PHONE_RE, DATE_RE):
        masked = pattern.sub(lambda m: MASK_CHAR * len(m.group(0)), masked)
    return masked


@lru_cache(maxsize=4)
def _department_patterns(alternation: str) -> tuple[Pattern[str], Pattern[str]]:
    # Parentheses around the years come as a pair or not at all
    years = r"\d{2,4}[\s-]?\d{2,4}"
    with_years = re.compile(
        rf"\b(?:{alternation})(?:\s*\(\s*{years}\s*\)|\s*{years})",
        re.IGNORECASE,
    )
    bare = re.compile(rf"^(?:{alternation})$", re.IGNORECASE)
    return with_years, bare


def _department_with_years(text: str) -> Optional[str]:
    with_years, _ = _department_patterns(get_vocabulary().department_alternation())
    match = with_years.search(mask_phone_and_date(text))
    return match.group(0).strip() if match else None


def is_session_range(first: int, second: int) -> bool:
    """Two-digit years in 20-99 with the second at most five years later."""
    return 20 <= first <= 99 and 20 <= second <= 99 and 0 < second - first <= MAX_SESSION_SPAN


def _year_range(text: str) -> Optional[str]:
    masked = mask_phone_and_date(text)
    for match in _YEAR_RANGE_RE.finditer(masked):
        if not is_session_range(int(match.group(1)), int(match.group(2))):
            continue
        token = match.group(0)
        context = masked[max(0, match.start() - 3):match.end() + 3].replace(token, "", 1)
        if sum(ch.isdigit() for ch in context) > MAX_CONTEXT_DIGITS:
            continue
        return token
    return None


def _department_only(text: str) -> Optional[str]:
    _, bare = _department_patterns(get_vocabulary().department_alternation())
    for line in split_lines(text):
        if bare.match(line):
            return line
    return None


def _labeled(text: str) -> Optional[str]:
    match = _LABELED_BATCH_RE.search(text)
    return match.group(1).strip() if match else None


BATCH_CASCADE: RuleCascade[str] = RuleCascade(
    "batch",
    [
        Rule("department_year_range", _department_with_years, "department followed by session years"),
        Rule("year_range", _year_range, "bare session year range"),
        Rule("department_only", _department_only, "department name alone on a line"),
        Rule("labeled", _labeled, "Batch: label"),
    ],
    default=UNKNOWN,
)


def extract_batch(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the batch code or ``"Unknown"``."""
    return BATCH_CASCADE.run(text, trace)
