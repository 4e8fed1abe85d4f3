"""Parser for bot-formatted donor blocks.

Some submissions arrive already labeled, one field per line::

    Donor Name: Badhon
    Blood Group: B(+ve)
    Phone: 01518-961476
    Date: 02.01.2026

Each label maps to a record field and the normalizer applied to its value.
Values that do not normalize to a canonical form are left empty so the
record invariants hold.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from donor_parser.extraction.normalizers import get_normalizer, get_validator
from donor_parser.extraction.sanitizer import clean_text
from donor_parser.extraction.trace import NullTrace, ParseTrace
from donor_parser.schemas.donor import UNKNOWN, ParsedRecord
from donor_parser.schemas.trace import TraceAction

logger = logging.getLogger(__name__)

# field -> (label regex, normalizer name, validator name or None)
LABELS: Dict[str, Tuple[str, str, Optional[str]]] = {
    "name": (r"Donor\s+Name", "trim", None),
    "blood_group": (r"Blood\s+Group", "blood_group", "blood_group"),
    "batch": (r"Batch", "trim", None),
    "hospital": (r"Hospital", "trim", None),
    "phone": (r"Phone", "phone", "phone"),
    "date": (r"Date", "date", "date"),
    "referrer": (r"Referrer", "trim", None),
    "hall_name": (r"Hall\s+Name", "trim", None),
}

_LABEL_RES = {
    field: re.compile(rf"^{label}[ \t]*:[ \t]*(.*)$", re.IGNORECASE | re.MULTILINE)
    for field, (label, _, _) in LABELS.items()
}
_ENTRY_HEADER_RE = re.compile(r"^Donor\s+Name\s*:", re.IGNORECASE | re.MULTILINE)


def parse_labeled(text: str, trace: Optional[ParseTrace] = None) -> ParsedRecord:
    """Parse one labeled block into a record. Never raises."""
    trace = trace if trace is not None else NullTrace()
    cleaned = clean_text(text)
    values: Dict[str, str] = {}

    for field, (_, normalizer_name, validator_name) in LABELS.items():
        match = _LABEL_RES[field].search(cleaned)
        if not match or not match.group(1).strip():
            continue
        raw = match.group(1).strip()
        if field == "phone":
            raw = raw.replace("_", "")
        value = get_normalizer(normalizer_name)(raw)
        if validator_name and not get_validator(validator_name)(value):
            trace.add(field, TraceAction.REJECTED, f"{raw!r} is not canonical", rule="labeled", value=raw)
            continue
        trace.add(field, TraceAction.MATCHED, "labeled field", rule="labeled", value=value)
        values[field] = value

    values.setdefault("batch", UNKNOWN)
    values.setdefault("hospital", UNKNOWN)
    return ParsedRecord(**values)


def split_labeled_entries(text: str) -> List[str]:
    """Split on blank lines, else on repeated ``Donor Name:`` headers."""
    cleaned = clean_text(text)
    if not cleaned:
        return []
    blocks = [b.strip() for b in cleaned.split("\n\n") if b.strip()]
    if len(blocks) > 1:
        return blocks

    starts = [m.start() for m in _ENTRY_HEADER_RE.finditer(cleaned)]
    if len(starts) <= 1:
        return [cleaned]
    bounds = starts[1:] + [len(cleaned)]
    return [cleaned[s:e].strip() for s, e in zip(starts, bounds) if cleaned[s:e].strip()]


def parse_labeled_many(text: str, trace: Optional[ParseTrace] = None) -> List[ParsedRecord]:
    """Parse every labeled block, dropping records without name and blood group."""
    records = []
    for index, entry in enumerate(split_labeled_entries(text)):
        record = parse_labeled(entry, trace)
        if record.is_usable:
            records.append(record)
        else:
            logger.info("Dropping labeled entry %d: no name or blood group", index + 1)
            if trace is not None:
                trace.add("segment", TraceAction.DROPPED, "neither name nor blood group", detail={"index": index})
    return records
