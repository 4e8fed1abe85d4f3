"""Hall and hospital lookup against the vocabulary gazetteers.

Each gazetteer entry is an ordered regex alternation; the first entry that
matches anywhere in the text wins. Values are returned as written in the
text, trimmed.
"""

import logging
import re
from typing import List, Optional, Pattern

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.donor import UNKNOWN

logger = logging.getLogger(__name__)

# Up to two words on the same line before "hall" / "hospital"
_GENERIC_HALL_RE = re.compile(r"\b((?:[A-Za-z.]+ ){1,2}hall)\b", re.IGNORECASE)
_GENERIC_HOSPITAL_RE = re.compile(r"\b((?:[A-Za-z.]+ ){1,2}hospital)\b", re.IGNORECASE)

_LABELED_HALL_RE = re.compile(r"^hall(?:\s+name)?\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_LABELED_HOSPITAL_RE = re.compile(r"^hospital\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE)


def _first_hit(patterns: List[Pattern[str]], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def _regex_rule(pattern: Pattern[str]):
    def extract(text: str) -> Optional[str]:
        match = pattern.search(text)
        return match.group(1).strip() if match else None

    return extract


def _hall_gazetteer(text: str) -> Optional[str]:
    return _first_hit(get_vocabulary().hall_patterns(), text)


def _hospital_gazetteer(text: str) -> Optional[str]:
    return _first_hit(get_vocabulary().hospital_patterns(), text)


def _hospital_location(text: str) -> Optional[str]:
    lowered = text.lower()
    for location in get_vocabulary().hospital_locations:
        if location.lower() in lowered:
            return location
    return None


HALL_CASCADE: RuleCascade[str] = RuleCascade(
    "hall_name",
    [
        Rule("gazetteer", _hall_gazetteer, "known hall name"),
        Rule("generic_hall", _regex_rule(_GENERIC_HALL_RE), "words followed by 'hall'"),
        Rule("labeled", _regex_rule(_LABELED_HALL_RE), "Hall: label"),
    ],
    default="",
)

HOSPITAL_CASCADE: RuleCascade[str] = RuleCascade(
    "hospital",
    [
        Rule("gazetteer", _hospital_gazetteer, "known hospital name"),
        Rule("generic_hospital", _regex_rule(_GENERIC_HOSPITAL_RE), "words followed by 'hospital'"),
        Rule("location", _hospital_location, "known hospital location"),
        Rule("labeled", _regex_rule(_LABELED_HOSPITAL_RE), "Hospital: label"),
    ],
    default=UNKNOWN,
)


def extract_hall(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the residential hall or an empty string."""
    return HALL_CASCADE.run(text, trace)


def extract_hospital(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the hospital or ``"Unknown"``."""
    return HOSPITAL_CASCADE.run(text, trace)
