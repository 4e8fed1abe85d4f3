"""Configuration: environment settings and the extraction vocabulary."""

from donor_parser.config.settings import Settings, get_settings
from donor_parser.config.vocabulary import (
    DEFAULT_VOCABULARY_PATH,
    Vocabulary,
    get_vocabulary,
    load_vocabulary,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_VOCABULARY_PATH",
    "Vocabulary",
    "get_vocabulary",
    "load_vocabulary",
]
