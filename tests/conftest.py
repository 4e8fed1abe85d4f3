"""Pytest fixtures shared by the donor_parser test suite."""

import pytest

from donor_parser.config.settings import get_settings
from donor_parser.config.vocabulary import get_vocabulary
from donor_parser.learning.catalogue import regex_catalogue
from donor_parser.schemas import ParsedRecord, TrainingExample
from donor_parser.storage import FileExampleStore, FilePatternStore, InMemoryPatternStore

ENV_VARS = (
    "DONOR_PARSER_DATA_DIR",
    "DONOR_PARSER_VOCABULARY_PATH",
    "DONOR_PARSER_LOG_LEVEL",
    "DONOR_PARSER_PARSE_WORKERS",
)


def _clear_caches():
    get_settings.cache_clear()
    get_vocabulary.cache_clear()
    regex_catalogue.cache_clear()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run every test against default settings and the packaged vocabulary."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()


# =============================================================================
# Sample pastes
# =============================================================================

SINGLE_NAME_TEXT = "Sona mia vai\nO+\n01955-198724\n18-9-25"
TWO_NAME_TEXT = "Tanvir Ahmed\nBadhon\nB(+ve)\nChemistry 23-24\n+8801518961476\n02.01.2026"
NAME_WITH_GROUP_TEXT = (
    "Riaz(A+)\nMobile:01572933123\nManaged by Monowarul Islam\nDate:25-01-2026"
)
MARUF_TEXT = "Maruf\n+8801521712737\nB+\n25/1/2026"


@pytest.fixture
def single_name_text():
    return SINGLE_NAME_TEXT


@pytest.fixture
def two_name_text():
    return TWO_NAME_TEXT


@pytest.fixture
def name_with_group_text():
    return NAME_WITH_GROUP_TEXT


@pytest.fixture
def multi_record_text():
    return f"{SINGLE_NAME_TEXT}\n\n{MARUF_TEXT}"


# =============================================================================
# Training data and stores
# =============================================================================

def make_example(raw_text: str, confidence: float = 1.0, **expected) -> TrainingExample:
    """Training example with an explicit confidence (no parsing involved)."""
    return TrainingExample(
        raw_text=raw_text,
        expected_output=ParsedRecord(**expected),
        confidence=confidence,
    )


@pytest.fixture
def example_factory():
    return make_example


@pytest.fixture
def verified_examples():
    """Three correct examples covering all three rule families."""
    return [
        make_example(
            SINGLE_NAME_TEXT,
            name="Sona mia vai",
            blood_group="O+",
            phone="01955198724",
            date="18-09-2025",
        ),
        make_example(
            TWO_NAME_TEXT,
            name="Badhon",
            blood_group="B+",
            phone="01518961476",
            date="02-01-2026",
            batch="Chemistry 23-24",
            referrer="Tanvir Ahmed",
        ),
        make_example(
            NAME_WITH_GROUP_TEXT,
            name="Riaz",
            blood_group="A+",
            phone="01572933123",
            date="25-01-2026",
            referrer="Monowarul Islam",
        ),
    ]


@pytest.fixture
def memory_pattern_store():
    return InMemoryPatternStore()


@pytest.fixture
def pattern_store(tmp_path):
    return FilePatternStore(tmp_path / "patterns")


@pytest.fixture
def example_store(tmp_path):
    return FileExampleStore(tmp_path / "training")
