"""Tests for rule cascades and parse tracing."""

import pytest

from donor_parser.extraction.cascade import Rule, RuleCascade
from donor_parser.extraction.trace import NullTrace, ParseTrace
from donor_parser.schemas.trace import TraceAction


def _cascade():
    return RuleCascade(
        "colour",
        [
            Rule("red", lambda text: "red" if "red" in text else None, "mentions red"),
            Rule("blue", lambda text: "blue" if "blue" in text else ""),
        ],
        default="none",
    )


class TestRuleCascade:

    def test_first_rule_wins(self):
        assert _cascade().run("red and blue") == "red"

    def test_falls_through(self):
        trace = ParseTrace()
        assert _cascade().run("blue", trace) == "blue"
        assert [s.action for s in trace.build()] == [TraceAction.SKIPPED, TraceAction.MATCHED]

    def test_default(self):
        trace = ParseTrace()
        assert _cascade().run("green", trace) == "none"
        last = trace.build()[-1]
        assert last.action == TraceAction.DEFAULTED
        assert last.value == "none"

    def test_falsy_rule_value_is_no_match(self):
        rule = Rule("empty", lambda text: "")
        assert rule.apply("anything") is None

    def test_matched_step_uses_description(self):
        trace = ParseTrace()
        _cascade().run("red", trace)
        assert trace.build()[0].reasoning == "mentions red"
        assert trace.build()[0].value == "red"

    def test_get(self):
        assert _cascade().get("blue").name == "blue"

    def test_get_unknown_rule(self):
        with pytest.raises(KeyError, match="No rule 'green'"):
            _cascade().get("green")

    def test_rule_names(self):
        assert _cascade().rule_names == ["red", "blue"]


class TestParseTrace:

    def test_for_stage(self):
        trace = ParseTrace()
        trace.add("name", TraceAction.MATCHED, "ok").add("phone", TraceAction.SKIPPED, "no")
        assert len(trace) == 2
        assert [s.stage for s in trace.for_stage("phone")] == ["phone"]

    def test_extend(self):
        first, second = ParseTrace(), ParseTrace()
        second.add("date", TraceAction.DEFAULTED, "none")
        first.extend(second.build()).extend(None)
        assert len(first) == 1

    def test_build_returns_copy(self):
        trace = ParseTrace()
        trace.add("name", TraceAction.MATCHED, "ok")
        trace.build().clear()
        assert len(trace) == 1

    def test_null_trace_discards(self):
        trace = NullTrace()
        trace.add("name", TraceAction.MATCHED, "ok")
        trace.extend(ParseTrace().add("x", TraceAction.SKIPPED, "y").build())
        assert trace.build() == []
