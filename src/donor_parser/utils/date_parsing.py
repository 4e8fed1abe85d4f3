"""Date parsing utilities for donation dates.

Donation dates arrive as day-first numeric dates with ``-``, ``.`` or ``/``
separators and 2- or 4-digit years. Everything is normalized to the
canonical ``DD-MM-YYYY`` form used for storage.
"""

import re
from datetime import date
from typing import Any, Optional

CANONICAL_DATE_RE = re.compile(r"^\d{2}-\d{2}-\d{4}$")

_MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def _expand_year(year: int) -> int:
    """Expand 2-digit year to 4-digit (assume 2000-2099)."""
    if year < 100:
        return 2000 + year
    return year


def _split_day_month(first: int, second: int, slash: bool) -> tuple[int, int]:
    """Decide which of the first two numbers is the day.

    Dash and dot dates are always day-first. Slash dates may be US-style
    month-first, which is only detectable when one number exceeds 12; when
    both are <= 12 (or both exceed 12) day-first wins.
    """
    if slash and first <= 12 < second:
        return second, first
    return first, second


def normalize_date(value: Any) -> str:
    """Normalize a numeric date string to ``DD-MM-YYYY``.

    Examples:
        ``18-9-25`` -> ``18-09-2025``; ``02.01.2026`` -> ``02-01-2026``;
        ``1/25/2026`` -> ``25-01-2026``; ``25/1/2026`` -> ``25-01-2026``.

    Args:
        value: Date string (or None/non-string).

    Returns:
        Canonical date string, or the input unchanged when it has no three
        numeric parts or the month/day are out of range.
    """
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)

    if "/" in text:
        separator = "/"
    elif "." in text:
        separator = "."
    else:
        separator = "-"

    parts = text.split(separator)
    if len(parts) != 3:
        return text

    try:
        first, second, year = (int(p) for p in parts)
    except ValueError:
        return text

    day, month = _split_day_month(first, second, slash=separator == "/")
    year = _expand_year(year)

    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return text

    return f"{day:02d}-{month:02d}-{year}"


def is_canonical_date(value: Any) -> bool:
    """True if value is already in ``DD-MM-YYYY`` form."""
    return isinstance(value, str) and bool(CANONICAL_DATE_RE.match(value))


def parse_canonical_date(value: Any) -> Optional[date]:
    """Convert a canonical ``DD-MM-YYYY`` string to a ``date``.

    Returns None for non-canonical strings and for calendar-invalid days
    such as ``31-02-2026`` (which normalization lets through).
    """
    if not is_canonical_date(value):
        return None
    day, month, year = (int(p) for p in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date_for_display(value: str) -> str:
    """Render ``DD-MM-YYYY`` as ``DD Mon YYYY``; other input is returned as-is."""
    parts = value.split("-")
    if len(parts) != 3:
        return value
    day, month, year = parts
    try:
        month_index = int(month) - 1
    except ValueError:
        return value
    if not 0 <= month_index <= 11:
        return value
    return f"{day} {_MONTH_ABBREVIATIONS[month_index]} {year}"
