"""Secondary referrer extraction from "managed by" style labels.

Only consulted when the two-name rule did not already supply a referrer.
"""

import logging
import re
from functools import lru_cache
from typing import Optional, Pattern

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.extractors.common import looks_like_name, split_lines
from donor_parser.extraction.trace import ParseTrace

logger = logging.getLogger(__name__)

_LABELED_REFERRER_RE = re.compile(r"^(?:referrer|referred\s+by)\s*:\s*(.+)$", re.IGNORECASE)


@lru_cache(maxsize=4)
def _managed_by_pattern(labels: str) -> Pattern[str]:
    # The name runs to the end of the line or to the next "Label:" on it
    return re.compile(
        rf"manage(?:d)?\s+by\s*:?\s*(?P<name>.+?)\s*(?=\b(?:{labels})\s*:|$)",
        re.IGNORECASE,
    )


def _clean_name(raw: str) -> Optional[str]:
    # Anything from the first parenthesis on is a batch annotation
    name = raw.split("(", 1)[0].strip(" .,:-")
    name = re.sub(r"\s+", " ", name)
    return name if looks_like_name(name) else None


def _managed_by(text: str) -> Optional[str]:
    labels = "|".join(re.escape(label) for label in get_vocabulary().field_labels)
    pattern = _managed_by_pattern(labels)
    for line in split_lines(text):
        match = pattern.search(line)
        if match:
            name = _clean_name(match.group("name"))
            if name:
                return name
    return None


def _labeled(text: str) -> Optional[str]:
    for line in split_lines(text):
        match = _LABELED_REFERRER_RE.match(line)
        if match:
            name = _clean_name(match.group(1))
            if name:
                return name
    return None


REFERRER_CASCADE: RuleCascade[str] = RuleCascade(
    "referrer",
    [
        Rule("managed_by", _managed_by, "'Managed by' label"),
        Rule("labeled", _labeled, "Referrer: label"),
    ],
    default="",
)


def extract_referrer(text: str, trace: Optional[ParseTrace] = None) -> str:
    """Return the referrer named by a label or an empty string."""
    return REFERRER_CASCADE.run(text, trace)
