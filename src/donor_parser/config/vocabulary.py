"""Vocabulary asset: canonical codes and gazetteers used by the extractors.

The vocabulary ships as ``vocabulary.yaml`` next to this module and can be
replaced by pointing ``DONOR_PARSER_VOCABULARY_PATH`` at another YAML file with
the same schema.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Pattern

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_VOCABULARY_PATH = Path(__file__).with_name("vocabulary.yaml")


class Vocabulary(BaseModel):
    """Fixed vocabularies the extraction engine depends on.

    Attributes:
        version: Asset version, bumped whenever a list changes.
        blood_groups: The canonical blood-group codes.
        field_labels: Keywords that introduce a labeled field ("Mobile:").
        departments: Regex fragments naming departments used in batch codes.
        halls: Ordered regex alternations for hall names.
        hospitals: Ordered regex alternations for hospital names.
        hospital_locations: Literal place names accepted as a hospital.
        honorific_prefixes: Regex fragments stripped from referrer names.
        kinship_suffixes: Words kept lowercase when title-casing names.
    """

    version: int = 1
    blood_groups: List[str] = Field(min_length=1)
    field_labels: List[str] = Field(default_factory=list)
    departments: List[str] = Field(default_factory=list)
    halls: List[str] = Field(default_factory=list)
    hospitals: List[str] = Field(default_factory=list)
    hospital_locations: List[str] = Field(default_factory=list)
    honorific_prefixes: List[str] = Field(default_factory=list)
    kinship_suffixes: List[str] = Field(default_factory=list)

    @field_validator("departments", "halls", "hospitals", "honorific_prefixes")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Validate that every entry is a valid regex."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern '{pattern}': {e}")
        return v

    @field_validator("kinship_suffixes")
    @classmethod
    def lowercase_suffixes(cls, v: List[str]) -> List[str]:
        return [s.lower() for s in v]

    # -------------------------------------------------------------------------
    # Compiled views
    # -------------------------------------------------------------------------

    def department_alternation(self) -> str:
        return "|".join(self.departments)

    def field_label_pattern(self) -> Pattern[str]:
        """``^(Mobile|Date|...)\\s*:`` matching a labeled line."""
        labels = "|".join(re.escape(label) for label in self.field_labels)
        return re.compile(rf"^(?:{labels})\s*:", re.IGNORECASE)

    def hall_patterns(self) -> List[Pattern[str]]:
        return [re.compile(f"(?:{p})", re.IGNORECASE) for p in self.halls]

    def hospital_patterns(self) -> List[Pattern[str]]:
        return [re.compile(f"(?:{p})", re.IGNORECASE) for p in self.hospitals]

    def honorific_patterns(self) -> List[Pattern[str]]:
        return [re.compile(rf"^{p}\s+", re.IGNORECASE) for p in self.honorific_prefixes]


def load_vocabulary(path: Path) -> Vocabulary:
    """Load and validate a vocabulary YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid YAML or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    vocabulary = Vocabulary.model_validate(data)
    logger.debug("Loaded vocabulary v%s from %s", vocabulary.version, path)
    return vocabulary


@lru_cache(maxsize=1)
def get_vocabulary(path: Optional[str] = None) -> Vocabulary:
    """Return the active vocabulary (cached).

    Args:
        path: Optional override. When omitted, ``DONOR_PARSER_VOCABULARY_PATH`` is
            consulted, then the packaged default.
    """
    if path is None:
        from donor_parser.config.settings import get_settings

        path = get_settings().vocabulary_path
    return load_vocabulary(Path(path) if path else DEFAULT_VOCABULARY_PATH)
