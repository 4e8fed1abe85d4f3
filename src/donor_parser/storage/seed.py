"""Packaged seed corpus of verified examples."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from donor_parser.schemas.donor import ParsedRecord

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed_examples.yaml"

SeedPair = Tuple[str, ParsedRecord]


def load_seed_examples(path: Optional[Path] = None) -> List[SeedPair]:
    """Load ``(raw_text, expected_output)`` pairs from the seed YAML.

    Turning the pairs into training examples (which parses them) is left to
    ``donor_parser.learning.build_example``.

    Raises:
        FileNotFoundError: If the seed file does not exist.
        ValueError: If the file is not valid YAML.
    """
    path = Path(path) if path else DEFAULT_SEED_PATH
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    pairs: List[SeedPair] = []
    for entry in data.get("examples", []):
        raw_text = entry.get("rawText", "")
        if not raw_text:
            logger.warning("Skipping seed entry without rawText")
            continue
        pairs.append((raw_text, ParsedRecord.model_validate(entry.get("expectedOutput", {}))))
    logger.debug("Loaded %d seed examples from %s", len(pairs), path)
    return pairs
