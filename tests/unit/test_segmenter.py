"""Tests for multi-record splitting and parsing."""

from donor_parser.extraction import parse_many, split_entries
from donor_parser.extraction.trace import ParseTrace
from donor_parser.schemas.trace import TraceAction


class TestSplitEntries:

    def test_blank_line_separates_records(self, multi_record_text):
        segments = split_entries(multi_record_text)
        assert len(segments) == 2
        assert segments[1].startswith("Maruf")

    def test_single_block(self):
        assert split_entries("Rahim\nB+") == ["Rahim\nB+"]

    def test_extra_blank_lines_collapse(self):
        assert split_entries("Rahim\nB+\n\n\n\nKarim\nO-") == ["Rahim\nB+", "Karim\nO-"]

    def test_empty(self):
        assert split_entries("") == []
        assert split_entries(" \n \n") == []


class TestParseMany:

    def test_two_records_in_order(self, multi_record_text):
        results = parse_many(multi_record_text)
        assert [r.record.name for r in results] == ["Sona mia vai", "Maruf"]
        maruf = results[1].record
        assert maruf.phone == "01521712737"
        assert maruf.date == "25-01-2026"
        assert maruf.blood_group == "B+"

    def test_threaded_parsing_keeps_order(self):
        names = ["Rahim", "Karim", "Jamal", "Kamal", "Salam"]
        text = "\n\n".join(f"{name}\nO+" for name in names)
        results = parse_many(text, workers=3)
        assert [r.record.name for r in results] == names

    def test_workers_from_settings(self, monkeypatch, multi_record_text):
        from donor_parser.config.settings import get_settings

        monkeypatch.setenv("DONOR_PARSER_PARSE_WORKERS", "4")
        get_settings.cache_clear()
        assert len(parse_many(multi_record_text)) == 2

    def test_unusable_segment_dropped(self):
        trace = ParseTrace()
        results = parse_many("Sona mia vai\nO+\n\n01711111111\n12-12-2025", trace)
        assert len(results) == 1
        dropped = trace.for_stage("segment")
        assert len(dropped) == 1
        assert dropped[0].action == TraceAction.DROPPED
        assert dropped[0].detail == {"index": 1}

    def test_segment_traces_are_merged(self, multi_record_text):
        trace = ParseTrace()
        results = parse_many(multi_record_text, trace)
        assert len(trace) == sum(len(r.trace) for r in results)

    def test_nothing_extractable(self):
        assert parse_many("") == []
        assert parse_many("01711111111") == []
