"""Field value normalizers and validators.

Each normalizer maps any accepted surface form of a value onto one
canonical form. Normalizers never raise: when a value cannot be confidently
transformed the input is returned unchanged, and callers use the
validators to decide whether the result is canonical.
"""

import re
from typing import Any, Callable, Optional

from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.utils.date_parsing import is_canonical_date, normalize_date

CANONICAL_BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

CANONICAL_PHONE_RE = re.compile(r"^01\d{9}$")

_BASE_RE = re.compile(r"^([ABO]+)")
_POSITIVE_WORD_RE = re.compile(r"POSITIVE|POS\b")
_NEGATIVE_WORD_RE = re.compile(r"NEGATIVE|NEG|MINUS")


def safe_string(value: Any) -> str:
    """
    Convert any value to string safely.

    Args:
        value: Any value (str, list, None, etc.)

    Returns:
        Stripped string representation of the value
    """
    if value is None:
        return ""
    if isinstance(value, list):
        if len(value) == 0:
            return ""
        if len(value) == 1:
            return str(value[0]).strip()
        return " ".join(str(v) for v in value).strip()
    return str(value).strip()


# =============================================================================
# BLOOD GROUP
# =============================================================================

def _resolve_sign(normalized: str) -> str:
    """Pick the Rh sign from the synonyms present in an uppercased token.

    ``+`` and "positive" count as positive; a bare "ve" suffix is an implicit
    positive unless a negative indicator is also present. ``-``, "negative",
    "neg" and "minus" count as negative. With both or neither present the
    trailing character decides, and ``+`` is the final default.
    """
    negative = "-" in normalized or bool(_NEGATIVE_WORD_RE.search(normalized))
    positive = "+" in normalized or bool(_POSITIVE_WORD_RE.search(normalized))
    if not negative and "VE" in normalized:
        positive = True

    if positive != negative:
        return "+" if positive else "-"
    if normalized.endswith("-"):
        return "-"
    return "+"


def normalize_blood_group(value: Any) -> str:
    """Normalize blood group spellings such as ``B(+ve)``, ``b positive``,
    ``O-ve`` or ``AB(-)`` to one of the eight canonical codes.

    Returns the input unchanged if no canonical code can be formed.
    """
    if not value:
        return value if isinstance(value, str) else ""
    original = value if isinstance(value, str) else str(value)

    normalized = re.sub(r"\s+", "", original.upper())
    base_match = _BASE_RE.match(normalized)
    if not base_match:
        return original

    result = base_match.group(1) + _resolve_sign(normalized[len(base_match.group(1)):])
    if result in CANONICAL_BLOOD_GROUPS:
        return result
    return original


def is_canonical_blood_group(value: Any) -> bool:
    return value in CANONICAL_BLOOD_GROUPS


# =============================================================================
# PHONE
# =============================================================================

def normalize_phone(value: Any) -> str:
    """Normalize a Bangladeshi mobile number to local ``01XXXXXXXXX`` form.

    Strips everything except digits and ``+`` and rewrites a leading
    ``+880``/``880`` country code to ``0``. Length is not checked here.
    """
    cleaned = re.sub(r"[^\d+]", "", safe_string(value))
    if cleaned.startswith("+880"):
        return "0" + cleaned[4:]
    if cleaned.startswith("880"):
        return "0" + cleaned[3:]
    return cleaned


def is_canonical_phone(value: Any) -> bool:
    return isinstance(value, str) and bool(CANONICAL_PHONE_RE.match(value))


# =============================================================================
# REFERRER NAMES
# =============================================================================

def normalize_referrer(value: Any) -> Optional[str]:
    """Normalize a referrer name so spelling variants aggregate together.

    ``"md rowshon"``, ``"Md. Rowshon"`` and ``"Rowshon"`` all become
    ``"Rowshon"``. Honorific prefixes are stripped, each word is title-cased
    except kinship suffixes (``vai``, ``apu``, ...) which stay lowercase, and
    trailing periods are removed.

    Returns:
        The normalized name, or None when nothing is left.
    """
    normalized = re.sub(r"\s+", " ", safe_string(value))
    if not normalized:
        return None

    vocabulary = get_vocabulary()
    for prefix in vocabulary.honorific_patterns():
        normalized = prefix.sub("", normalized)

    words = []
    for word in normalized.split(" "):
        if not word:
            continue
        lower_word = word.lower()
        if lower_word in vocabulary.kinship_suffixes:
            words.append(lower_word)
        else:
            words.append(word[0].upper() + word[1:].lower())

    normalized = re.sub(r"\.+$", "", " ".join(words)).strip()
    return normalized or None


# =============================================================================
# VALIDATORS
# =============================================================================

def validate_non_empty(value: Any) -> bool:
    """Validate that value is not empty after conversion to string."""
    return bool(safe_string(value))


# =============================================================================
# REGISTRY
# =============================================================================

NORMALIZERS: dict[str, Callable[[Any], str]] = {
    "blood_group": normalize_blood_group,
    "phone": normalize_phone,
    "date": normalize_date,
    "referrer": lambda v: normalize_referrer(v) or "",
    "trim": safe_string,
    "none": safe_string,
}

VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "blood_group": is_canonical_blood_group,
    "phone": is_canonical_phone,
    "date": is_canonical_date,
    "non_empty": validate_non_empty,
}


def get_normalizer(name: str) -> Callable[[Any], str]:
    """Get normalizer function by name, defaulting to ``safe_string``."""
    return NORMALIZERS.get(name, safe_string)


def get_validator(name: str) -> Callable[[Any], bool]:
    """Get validator function by name, defaulting to ``validate_non_empty``."""
    return VALIDATORS.get(name, validate_non_empty)


__all__ = [
    "CANONICAL_BLOOD_GROUPS",
    "safe_string",
    "normalize_blood_group",
    "is_canonical_blood_group",
    "normalize_phone",
    "is_canonical_phone",
    "normalize_date",
    "is_canonical_date",
    "normalize_referrer",
    "validate_non_empty",
    "get_normalizer",
    "get_validator",
]
