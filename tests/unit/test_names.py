"""Tests for the name/referrer extractor (two-name rule)."""

import pytest

from donor_parser.extraction.extractors.names import (
    NAME_CASCADE,
    NameResult,
    extract_names,
    is_name_like,
    name_from_blood_group_line,
)
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.trace import TraceAction


class TestIsNameLike:

    @pytest.mark.parametrize("line", ["Tanvir Ahmed", "Badhon", "Md. Ismail Hossen", "Sona mia vai", "সানি ভাই"])
    def test_names(self, line):
        assert is_name_like(line)

    @pytest.mark.parametrize(
        "line",
        [
            "01955-198724",
            "+8801521712737",
            "18-9-25",
            "B+",
            "AB(+)ve",
            "O negative",
            "Mobile: 01572933123",
            "Date:25-01-2026",
            "Riaz(A+)",
            "A",
            "Chemistry 23-24",
            "Managed by Monowarul Islam",
            "manage by Rowshon vai",
        ],
    )
    def test_not_names(self, line):
        assert not is_name_like(line)


class TestNameFromBloodGroupLine:

    def test_parenthesized_group(self):
        assert name_from_blood_group_line("Riaz(A+)") == "Riaz"

    def test_group_after_space(self):
        assert name_from_blood_group_line("Abdur Rahman B+") == "Abdur Rahman"

    def test_group_with_qualifier(self):
        assert name_from_blood_group_line("Karim O(+ve)") == "Karim"

    def test_plain_name_yields_nothing(self):
        assert name_from_blood_group_line("Abdur Rahman") == ""

    def test_bare_group_yields_nothing(self):
        assert name_from_blood_group_line("O+") == ""


class TestExtractNames:

    def test_two_name_rule(self, two_name_text):
        assert extract_names(two_name_text) == NameResult(donor_name="Badhon", referrer="Tanvir Ahmed")

    def test_two_name_rule_with_group_on_second_line(self):
        result = extract_names("Abdur\nAbdur Rahman B+\n01540749949")
        assert result == NameResult(donor_name="Abdur Rahman", referrer="Abdur")

    def test_single_name(self, single_name_text):
        assert extract_names(single_name_text) == NameResult(donor_name="Sona mia vai")

    def test_name_with_group_on_first_line(self, name_with_group_text):
        assert extract_names(name_with_group_text) == NameResult(donor_name="Riaz")

    def test_referrer_not_swallowed_when_second_line_is_not_a_name(self):
        result = extract_names("Tanvir Ahmed\nO+\n01711111111")
        assert result.donor_name == "Tanvir Ahmed"
        assert result.referrer == ""

    def test_managed_by_line_is_not_the_donor(self):
        result = extract_names("Riaz\nManaged by Monowarul Islam\nA+\n01572933123")
        assert result == NameResult(donor_name="Riaz")

    def test_no_name(self):
        result = extract_names("01711111111\nB+")
        assert not result
        assert result == NameResult()

    def test_empty_text(self):
        assert extract_names("") == NameResult()


class TestNameTrace:

    def test_two_name_rule_is_traced(self, two_name_text):
        trace = ParseTrace()
        extract_names(two_name_text, trace)
        steps = trace.for_stage("name")
        assert steps[0].action == TraceAction.MATCHED
        assert steps[0].rule == "two_name"

    def test_fallthrough_is_traced(self, single_name_text):
        trace = ParseTrace()
        extract_names(single_name_text, trace)
        actions = [(s.rule, s.action) for s in trace.for_stage("name")]
        assert actions == [
            ("two_name", TraceAction.SKIPPED),
            ("name_with_blood_group", TraceAction.SKIPPED),
            ("single_name", TraceAction.MATCHED),
        ]

    def test_cascade_order(self):
        assert NAME_CASCADE.rule_names == ["two_name", "name_with_blood_group", "single_name"]
