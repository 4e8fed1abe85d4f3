"""Candidate rules scored by the pattern miner.

Three rule families are measured against the verified corpus:

* regex: surface shapes per field, built from the same building blocks
  and gazetteers the extractors use,
* positional: the two-name rule,
* keyword: literal field labels checked for containment.

Fields are named with their wire names (``bloodGroup``, ``hallName``) so
stored patterns line up with the records they describe.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Pattern, Tuple

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.extraction.extractors.common import (
    BLOOD_BASE,
    BLOOD_TOKEN,
    DATE_RE,
    INTERNATIONAL_PHONE_RE,
    LOCAL_PHONE_RE,
)
from donor_parser.extraction.extractors.names import TWO_NAME_RULE_ID


@dataclass(frozen=True)
class RegexCandidate:
    """One regex rule: the stored ``pattern`` is the regex source."""

    field: str
    pattern: str
    flags: int = re.IGNORECASE

    def compile(self) -> Pattern[str]:
        return re.compile(self.pattern, self.flags)


@lru_cache(maxsize=1)
def regex_catalogue() -> Tuple[RegexCandidate, ...]:
    """The regex family, in a stable order."""
    vocabulary = get_vocabulary()
    departments = vocabulary.department_alternation()

    candidates: List[RegexCandidate] = [
        # Blood group
        RegexCandidate("bloodGroup", rf"\b{BLOOD_TOKEN}"),
        RegexCandidate("bloodGroup", rf"\b{BLOOD_BASE}\s*[+-]"),
        RegexCandidate("bloodGroup", rf"\b{BLOOD_BASE}\s*\(\s*[+-]?\s*ve\s*\)"),
        # Phone
        RegexCandidate("phone", INTERNATIONAL_PHONE_RE.pattern, 0),
        RegexCandidate("phone", LOCAL_PHONE_RE.pattern, 0),
        # Date
        RegexCandidate("date", DATE_RE.pattern, 0),
        # Batch
        RegexCandidate("batch", rf"\b(?:{departments})\s*\(?\s*\d{{2,4}}[\s-]?\d{{2,4}}\s*\)?"),
        RegexCandidate("batch", r"(?<!\d)\d{2}[ -]\d{2}(?!\d)", 0),
    ]
    # Hall: each gazetteer entry, then the generic "<words> hall" shape
    candidates.extend(RegexCandidate("hallName", entry) for entry in vocabulary.halls)
    candidates.append(RegexCandidate("hallName", r"\b(?:[A-Za-z.]+ ){1,2}hall\b"))
    # Referrer via "managed by"
    candidates.append(RegexCandidate("referrer", r"manage(?:d)?\s+by\s*:?\s*[^\W\d_][^\n]*"))
    return tuple(candidates)


POSITIONAL_CATALOGUE: Tuple[Tuple[str, str], ...] = ((TWO_NAME_RULE_ID, "name"),)

# (literal keyword, field); matched case-insensitively
KEYWORD_CATALOGUE: Tuple[Tuple[str, str], ...] = (
    ("Blood Group:", "bloodGroup"),
    ("Phone:", "phone"),
    ("Mobile:", "phone"),
    ("Date:", "date"),
    ("Batch:", "batch"),
    ("Hospital:", "hospital"),
    ("Referrer:", "referrer"),
    ("Hall Name:", "hallName"),
    ("Managed by", "referrer"),
)
