"""Tests for chat-noise removal."""

import pytest

from donor_parser.extraction.sanitizer import clean_text


class TestCleanText:

    def test_edit_marker_removed(self):
        assert clean_text("Sumon · Edited\nB+") == "Sumon\nB+"
        assert clean_text("Edited\n+8801617336889\nA-") == "+8801617336889\nA-"

    def test_message_timestamp_removed(self):
        assert clean_text("6 Jan 2026, 00:54\nRiaz") == "Riaz"

    def test_dated_message_prefix_removed(self):
        assert clean_text("21/12/2025, Rahim\nO+") == "Rahim\nO+"

    def test_reply_header_removed(self):
        assert clean_text("Saifullah replied to Sumon\nbubel\nab+") == "Saifullah\nbubel\nab+"

    def test_deleted_message_removed(self):
        assert clean_text("You deleted a message\nRahim") == "You\nRahim"

    def test_bullets_removed(self):
        assert clean_text("• Riaz\n● A+") == "Riaz\nA+"

    def test_horizontal_whitespace_collapsed(self):
        assert clean_text("Abdur    Rahman\t B+") == "Abdur Rahman B+"

    def test_blank_line_runs_collapse_to_one(self):
        assert clean_text("A\n\n\n\nB") == "A\n\nB"
        assert clean_text("A\n  \n \t\nB") == "A\n\nB"

    def test_line_structure_preserved(self):
        text = "Sona mia vai\nO+\n01955-198724\n18-9-25"
        assert clean_text(text) == text

    def test_crlf_normalized(self):
        assert clean_text("Riaz\r\nA+") == "Riaz\nA+"

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_never_raises(self, value):
        assert clean_text(value) == ""
