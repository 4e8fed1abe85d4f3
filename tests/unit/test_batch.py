"""Tests for batch extraction and phone/date masking."""

import pytest

from donor_parser.extraction.extractors.batch import (
    extract_batch,
    is_session_range,
    mask_phone_and_date,
)
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.donor import UNKNOWN


class TestMasking:

    def test_masks_phone_and_date(self):
        assert mask_phone_and_date("01711111111 on 02.01.2026") == "XXXXXXXXXXX on XXXXXXXXXX"

    def test_preserves_length(self):
        text = "+8801518961476\nChemistry 23-24"
        masked = mask_phone_and_date(text)
        assert len(masked) == len(text)
        assert masked.endswith("Chemistry 23-24")


class TestSessionRange:

    @pytest.mark.parametrize("first,second", [(23, 24), (20, 25), (98, 99)])
    def test_valid(self, first, second):
        assert is_session_range(first, second)

    @pytest.mark.parametrize("first,second", [(24, 23), (21, 21), (20, 26), (18, 25), (15, 16)])
    def test_invalid(self, first, second):
        assert not is_session_range(first, second)


class TestDepartmentRules:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Badhon\nChemistry 23-24", "Chemistry 23-24"),
            ("PHR(24-25)", "PHR(24-25)"),
            ("Mathematics 22-23", "Mathematics 22-23"),
            ("Applied math 21-22", "Applied math 21-22"),
            ("Managed by: Rowshon vai (Math 22-23) Date: 1.1.26", "Math 22-23"),
            ("Math 22-23)", "Math 22-23"),
        ],
    )
    def test_department_with_years(self, text, expected):
        assert extract_batch(text) == expected

    def test_department_alone(self):
        trace = ParseTrace()
        assert extract_batch("Nazmus\nBotany\nB-", trace) == "Botany"
        assert trace.build()[-1].rule == "department_only"

    def test_department_inside_a_name_line_is_ignored(self):
        assert extract_batch("Botany dept er Rahim") == UNKNOWN


class TestYearRange:

    @pytest.mark.parametrize("text", ["Safwan\n24-25", "Safwan 24 25"])
    def test_bare_range(self, text):
        assert extract_batch(text).replace(" ", "-") == "24-25"

    @pytest.mark.parametrize("text", ["21-21", "18-25", "15-16", "20-26"])
    def test_implausible_ranges(self, text):
        assert extract_batch(text) == UNKNOWN

    def test_range_inside_phone_is_masked(self):
        assert extract_batch("017 23 24 5678") == UNKNOWN

    def test_range_inside_date_is_masked(self):
        assert extract_batch("24-25-26") == UNKNOWN

    def test_digit_heavy_context_rejected(self):
        assert extract_batch("12x24-25x3") == UNKNOWN


class TestLabeledAndDefault:

    def test_labeled(self):
        assert extract_batch("Batch: 2019") == "2019"

    def test_default(self):
        trace = ParseTrace()
        assert extract_batch("Rahim\nB+", trace) == UNKNOWN
        assert trace.build()[-1].value == UNKNOWN
