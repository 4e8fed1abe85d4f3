"""Donor name and referrer extraction: the two-name rule.

Pasted fragments often open with the referrer's name on the first line and
the donor's own name on the second, with no label on either. The cascade
below decides from position and shape alone:

1. ``two_name``: line 1 is name-like and line 2 is name-like or carries a
   name plus a blood group; line 1 becomes the referrer and the name taken
   from line 2 becomes the donor. Only fires when a donor name can actually
   be taken from line 2.
2. ``name_with_blood_group``: line 1 is ``Name(B+)`` or ``Name B+``.
3. ``single_name``: line 1 is name-like.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.extractors.common import (
    BARE_BLOOD_GROUP_RE,
    BARE_DATE_RE,
    BLOOD_BASE,
    BLOOD_QUALIFIER,
    BLOOD_TOKEN,
    COMPACT_PHONE_RE,
    looks_like_name,
    split_lines,
)
from donor_parser.extraction.trace import ParseTrace

logger = logging.getLogger(__name__)

TWO_NAME_RULE_ID = "first_line_referrer_second_line_donor"

_PAREN_BLOOD_RE = re.compile(
    rf"^(?P<name>.+?)\s*\(\s*{BLOOD_BASE}(?:\s*[+-]\s*(?:ve)?|{BLOOD_QUALIFIER})\s*\)$",
    re.IGNORECASE,
)
_SPACE_BLOOD_RE = re.compile(rf"^(?P<name>.+?)\s+{BLOOD_TOKEN}\s*$", re.IGNORECASE)
_MANAGED_BY_PREFIX_RE = re.compile(r"^manage(?:d)?\s+by\b", re.IGNORECASE)


@dataclass(frozen=True)
class NameResult:
    """Donor name plus the referrer inferred alongside it (possibly empty)."""

    donor_name: str = ""
    referrer: str = ""

    def __bool__(self) -> bool:
        return bool(self.donor_name)

    def __str__(self) -> str:
        if self.referrer:
            return f"{self.donor_name} (referrer: {self.referrer})"
        return self.donor_name


def is_name_like(line: str) -> bool:
    """True if ``line`` could be a bare person name.

    Rejects phone numbers, dates, bare blood-group tokens, labeled fields
    ("Mobile: ...") and "Managed by ..." lines, then requires 2-50
    letters/spaces/periods.
    """
    if COMPACT_PHONE_RE.match(re.sub(r"[\s-]", "", line)):
        return False
    if BARE_DATE_RE.match(line):
        return False
    if BARE_BLOOD_GROUP_RE.match(line):
        return False
    if get_vocabulary().field_label_pattern().match(line):
        return False
    if _MANAGED_BY_PREFIX_RE.match(line):
        return False
    return looks_like_name(line)


def name_from_blood_group_line(line: str) -> str:
    """Extract the name from ``"Riaz(A+)"`` or ``"Abdur Rahman B+"``.

    Returns an empty string when the line is not a name followed by a
    blood group; the blood-group suffix is never part of the result.
    """
    for pattern in (_PAREN_BLOOD_RE, _SPACE_BLOOD_RE):
        match = pattern.match(line)
        if match:
            name = match.group("name").strip()
            if looks_like_name(name):
                return name
    return ""


def _two_name(text: str) -> Optional[NameResult]:
    lines = split_lines(text)
    if len(lines) < 2:
        return None
    first, second = lines[0], lines[1]
    if not is_name_like(first):
        return None

    donor_name = name_from_blood_group_line(second)
    if not donor_name and is_name_like(second):
        donor_name = second
    if not donor_name:
        return None
    return NameResult(donor_name=donor_name, referrer=first)


def _first_line_with_blood_group(text: str) -> Optional[NameResult]:
    lines = split_lines(text)
    if not lines:
        return None
    name = name_from_blood_group_line(lines[0])
    return NameResult(donor_name=name) if name else None


def _first_line_name(text: str) -> Optional[NameResult]:
    lines = split_lines(text)
    if lines and is_name_like(lines[0]):
        return NameResult(donor_name=lines[0])
    return None


NAME_CASCADE: RuleCascade[NameResult] = RuleCascade(
    "name",
    [
        Rule("two_name", _two_name, "line 1 is the referrer, line 2 the donor"),
        Rule("name_with_blood_group", _first_line_with_blood_group, "name followed by blood group on line 1"),
        Rule("single_name", _first_line_name, "line 1 is the donor name"),
    ],
    default=NameResult(),
)


def extract_names(text: str, trace: Optional[ParseTrace] = None) -> NameResult:
    """Return the donor name and, when the two-name rule applies, the referrer."""
    return NAME_CASCADE.run(text, trace)
