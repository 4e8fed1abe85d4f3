"""Tests for "managed by" referrer extraction."""

import pytest

from donor_parser.extraction.extractors.referrer import REFERRER_CASCADE, extract_referrer


class TestManagedBy:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Riaz(A+)\nManaged by Monowarul Islam", "Monowarul Islam"),
            ("manage by Karim", "Karim"),
            ("Managed by: Likhon.", "Likhon"),
        ],
    )
    def test_managed_by(self, text, expected):
        assert extract_referrer(text) == expected

    def test_stops_at_next_label(self):
        assert extract_referrer("Managed by Rasel vai Mobile: 01711111111") == "Rasel vai"

    def test_parenthetical_is_dropped(self):
        text = "Managed by: Rasel vai (Chemistry 21-22) Mobile: 01711111111"
        assert extract_referrer(text) == "Rasel vai"

    def test_non_name_rejected(self):
        assert extract_referrer("Managed by 01711111111") == ""


class TestLabeledReferrer:

    def test_referrer_label(self):
        assert extract_referrer("Rahim\nReferrer: Md. Rowshon") == "Md. Rowshon"

    def test_referred_by_label(self):
        assert extract_referrer("Referred by: Likhon") == "Likhon"


def test_no_referrer():
    assert extract_referrer("Rahim\nB+\n01711111111") == ""


def test_cascade_order():
    assert REFERRER_CASCADE.rule_names == ["managed_by", "labeled"]
