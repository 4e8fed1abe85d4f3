"""Field extractors: one rule cascade per record field."""

from donor_parser.extraction.extractors.batch import BATCH_CASCADE, extract_batch, mask_phone_and_date
from donor_parser.extraction.extractors.blood_group import BLOOD_GROUP_CASCADE, extract_blood_group
from donor_parser.extraction.extractors.contact import (
    DATE_CASCADE,
    PHONE_CASCADE,
    extract_date,
    extract_phone,
)
from donor_parser.extraction.extractors.gazetteer import (
    HALL_CASCADE,
    HOSPITAL_CASCADE,
    extract_hall,
    extract_hospital,
)
from donor_parser.extraction.extractors.names import (
    NAME_CASCADE,
    TWO_NAME_RULE_ID,
    NameResult,
    extract_names,
    is_name_like,
    name_from_blood_group_line,
)
from donor_parser.extraction.extractors.referrer import REFERRER_CASCADE, extract_referrer

# Field name -> cascade, used for auditing which rules exist per field
CASCADES = {
    "name": NAME_CASCADE,
    "blood_group": BLOOD_GROUP_CASCADE,
    "phone": PHONE_CASCADE,
    "date": DATE_CASCADE,
    "batch": BATCH_CASCADE,
    "hospital": HOSPITAL_CASCADE,
    "hall_name": HALL_CASCADE,
    "referrer": REFERRER_CASCADE,
}

__all__ = [
    "CASCADES",
    "TWO_NAME_RULE_ID",
    "NameResult",
    "extract_names",
    "is_name_like",
    "name_from_blood_group_line",
    "extract_blood_group",
    "extract_phone",
    "extract_date",
    "extract_batch",
    "mask_phone_and_date",
    "extract_hall",
    "extract_hospital",
    "extract_referrer",
]
