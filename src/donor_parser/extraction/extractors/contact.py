"""Phone number and donation date extraction."""

import logging
import re
from typing import Optional, Pattern

from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.extractors.common import (
    DATE_RE,
    INTERNATIONAL_PHONE_RE,
    LOCAL_PHONE_RE,
    SPACED_DATE_RE,
)
from donor_parser.extraction.normalizers import (
    is_canonical_date,
    is_canonical_phone,
    normalize_date,
    normalize_phone,
)
from donor_parser.extraction.trace import ParseTrace

logger = logging.getLogger(__name__)


def _phone_rule(pattern: Pattern[str]):
    def extract(text: str) -> Optional[str]:
        for match in pattern.finditer(text):
            phone = normalize_phone(match.group(0))
            if is_canonical_phone(phone):
                return phone
        return None

    return extract


def _date_rule(pattern: Pattern[str]):
    def extract(text: str) -> Optional[str]:
        for match in pattern.finditer(text):
            date = normalize_date(re.sub(r"\s+", "", match.group(0)))
            if is_canonical_date(date):
                return date
        return None

    return extract


PHONE_CASCADE: RuleCascade[str] = RuleCascade(
    "phone",
    [
        Rule("international", _phone_rule(INTERNATIONAL_PHONE_RE), "+880/880 mobile number"),
        Rule("local", _phone_rule(LOCAL_PHONE_RE), "01XXXXXXXXX mobile number"),
    ],
    default="",
)

DATE_CASCADE: RuleCascade[str] = RuleCascade(
    "date",
    [
        Rule("numeric", _date_rule(DATE_RE), "d-m-y date"),
        Rule("spaced_numeric", _date_rule(SPACED_DATE_RE), "d - m - y date with spaces"),
    ],
    default="",
)


def extract_phone(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the first mobile number as ``01XXXXXXXXX`` or an empty string."""
    return PHONE_CASCADE.run(text, trace)


def extract_date(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the first valid date as ``DD-MM-YYYY`` or an empty string."""
    return DATE_CASCADE.run(text, trace)
