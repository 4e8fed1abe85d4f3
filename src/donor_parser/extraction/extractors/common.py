"""Regex building blocks shared by the field extractors."""

import re
from typing import List

# Letters (any script), spaces and periods. Bengali vowel signs are
# combining marks rather than letters, so the block is listed explicitly.
NAME_CHARS = r"(?:[^\W\d_]|[\u0980-\u09FF]|[ .])"
NAME_RE = re.compile(rf"^{NAME_CHARS}{{2,50}}$")

BLOOD_BASE = r"(?:AB|A|B|O)"

# Sign/qualifier that may follow a blood-group base:
# "+", "-ve", "(+ve)", "(-)ve", "(positive)", " negative", "+ve"
BLOOD_QUALIFIER = (
    r"(?:\s*\(\s*[+-]\s*\)\s*(?:ve\b)?"
    r"|\s*\(\s*[+-]?\s*(?:ve|positive|negative)\s*\)"
    r"|\s*[+-]\s*(?:ve\b)?"
    r"|\s*(?:ve|positive|negative)\b)"
)

BLOOD_TOKEN = BLOOD_BASE + BLOOD_QUALIFIER

BARE_BLOOD_GROUP_RE = re.compile(rf"^{BLOOD_BASE}{BLOOD_QUALIFIER}?\s*$", re.IGNORECASE)

# Bangladeshi mobile numbers, international (+880 / 880 / +88 0...) and local forms,
# with optional space/dash separators between digits.
INTERNATIONAL_PHONE_RE = re.compile(r"\+?88[\s-]?0[\s-]?1[3-9](?:[\s-]?\d){8}(?!\d)")
LOCAL_PHONE_RE = re.compile(r"(?<![\d+])01[3-9](?:[\s-]?\d){8}(?!\d)")
COMPACT_PHONE_RE = re.compile(r"^(?:\+?880|0)?1[3-9]\d{8}$")

DATE_RE = re.compile(r"(?<!\d)\d{1,2}[-./]\d{1,2}[-./]\d{2,4}(?!\d)")
SPACED_DATE_RE = re.compile(r"(?<!\d)\d{1,2}\s*[-./]\s*\d{1,2}\s*[-./]\s*\d{2,4}(?!\d)")
BARE_DATE_RE = re.compile(r"^\d{1,2}[-./]\d{1,2}[-./]\d{2,4}$")


def split_lines(text: str) -> List[str]:
    """Non-empty, trimmed lines of ``text``."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def looks_like_name(value: str) -> bool:
    """Letters, spaces and periods only, 2-50 characters."""
    return bool(NAME_RE.match(value))
