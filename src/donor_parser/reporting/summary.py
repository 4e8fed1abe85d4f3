"""Aggregate summaries over parsed donor records.

Referrers are grouped by their normalized form so spelling variants of
the same person ("md rowshon", "Md. Rowshon") count together.
"""

import logging
from collections import Counter
from datetime import date
from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from donor_parser.extraction.normalizers import CANONICAL_BLOOD_GROUPS, normalize_referrer
from donor_parser.schemas.donor import UNKNOWN, ParsedRecord
from donor_parser.utils.date_parsing import parse_canonical_date

logger = logging.getLogger(__name__)

TOP_REFERRERS = 10
TOP_HOSPITALS = 5


class CountEntry(BaseModel):
    label: str
    count: int


class RecordSummary(BaseModel):
    """Totals, per-blood-group counts, top referrers/hospitals and daily counts."""

    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(default=0, alias="totalDonations")
    blood_group_breakdown: Dict[str, int] = Field(default_factory=dict, alias="bloodGroupBreakdown")
    top_referrers: List[CountEntry] = Field(default_factory=list, alias="topReferrers")
    top_hospitals: List[CountEntry] = Field(default_factory=list, alias="topHospitals")
    daily_trends: List[CountEntry] = Field(default_factory=list, alias="dailyTrends")


def _top(counter: Counter, limit: int) -> List[CountEntry]:
    # Ties keep first-seen order
    return [CountEntry(label=label, count=count) for label, count in counter.most_common(limit)]


def summarize_records(records: Iterable[ParsedRecord]) -> RecordSummary:
    """Build a report over ``records``.

    The blood group breakdown lists all eight canonical groups (zero when
    absent); records with an empty blood group are not counted there. Daily
    trends are ordered chronologically; records without a valid date are
    left out of them.
    """
    blood_groups: Counter = Counter({group: 0 for group in CANONICAL_BLOOD_GROUPS})
    referrers: Counter = Counter()
    hospitals: Counter = Counter()
    days: Dict[str, date] = {}
    day_counts: Counter = Counter()
    total = 0

    for record in records:
        total += 1
        if record.blood_group:
            blood_groups[record.blood_group] += 1

        referrer = normalize_referrer(record.referrer)
        if referrer:
            referrers[referrer] += 1

        if record.hospital and record.hospital != UNKNOWN:
            hospitals[record.hospital] += 1

        parsed_day = parse_canonical_date(record.date)
        if parsed_day is not None:
            days[record.date] = parsed_day
            day_counts[record.date] += 1

    daily = [
        CountEntry(label=label, count=day_counts[label])
        for label in sorted(days, key=lambda d: days[d])
    ]
    logger.debug("Summarized %d records", total)
    return RecordSummary(
        total_records=total,
        blood_group_breakdown=dict(blood_groups),
        top_referrers=_top(referrers, TOP_REFERRERS),
        top_hospitals=_top(hospitals, TOP_HOSPITALS),
        daily_trends=daily,
    )
