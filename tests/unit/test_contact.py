"""Tests for phone and date extraction."""

import pytest

from donor_parser.extraction.extractors.contact import extract_date, extract_phone
from donor_parser.extraction.trace import ParseTrace


class TestExtractPhone:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("+8801518961476", "01518961476"),
            ("8801518961476", "01518961476"),
            ("88 01712 345678", "01712345678"),
            ("01955-198724", "01955198724"),
            ("Mobile:01572933123", "01572933123"),
            ("call 01711 111 111 now", "01711111111"),
        ],
    )
    def test_formats(self, text, expected):
        assert extract_phone(text) == expected

    def test_international_rule_runs_first(self):
        trace = ParseTrace()
        assert extract_phone("01711111111\n+8801822222222", trace) == "01822222222"
        assert trace.for_stage("phone")[0].rule == "international"

    def test_first_local_number(self):
        assert extract_phone("01711111111\n01822222222") == "01711111111"

    def test_short_number_rejected(self):
        assert extract_phone("+880193308916") == ""

    def test_non_mobile_prefix_rejected(self):
        assert extract_phone("01211111111") == ""

    def test_no_phone(self):
        assert extract_phone("Rahim\nB+") == ""


class TestExtractDate:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("18-9-25", "18-09-2025"),
            ("02.01.2026", "02-01-2026"),
            ("25/1/2026", "25-01-2026"),
            ("1/25/2026", "25-01-2026"),
            ("Date:25-01-2026", "25-01-2026"),
        ],
    )
    def test_formats(self, text, expected):
        assert extract_date(text) == expected

    def test_spaced_date(self):
        trace = ParseTrace()
        assert extract_date("25 - 01 - 2026", trace) == "25-01-2026"
        assert trace.for_stage("date")[-1].rule == "spaced_numeric"

    def test_out_of_range_skipped(self):
        assert extract_date("32-13-2025\n05-02-2026") == "05-02-2026"

    def test_phone_digits_are_not_a_date(self):
        assert extract_date("01955-198724") == ""

    def test_no_date(self):
        assert extract_date("Rahim") == ""
