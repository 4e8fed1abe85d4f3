"""Tests for pattern mining and the learner."""

import pytest

from donor_parser.extraction.extractors.common import INTERNATIONAL_PHONE_RE, LOCAL_PHONE_RE
from donor_parser.extraction.extractors.names import TWO_NAME_RULE_ID
from donor_parser.learning import PatternLearner, mine_patterns
from donor_parser.learning.pattern_miner import (
    mine_keyword_patterns,
    mine_positional_patterns,
    mine_regex_patterns,
)
from donor_parser.schemas import MiningStatistics


def _find(patterns, pattern, field=None):
    for p in patterns:
        if p.pattern == pattern and (field is None or p.field == field):
            return p
    raise AssertionError(f"pattern {pattern!r} not mined")


class TestMinePatterns:

    def test_empty_corpus(self):
        patterns, statistics = mine_patterns([])
        assert patterns == []
        assert statistics == MiningStatistics()

    def test_only_correct_examples_are_used(self, example_factory):
        examples = [example_factory("Rahim\nO+", confidence=0.5, name="Rahim", blood_group="O+")]
        patterns, statistics = mine_patterns(examples)
        assert patterns == []
        assert statistics.total_examples == 0

    def test_statistics(self, verified_examples):
        patterns, statistics = mine_patterns(verified_examples)
        assert statistics.total_examples == 3
        assert statistics.positional_patterns == 1
        assert statistics.keyword_patterns == 3
        assert statistics.regex_patterns == len([p for p in patterns if p.pattern_type == "regex"])
        assert statistics.average_confidence == pytest.approx(
            sum(p.confidence for p in patterns) / len(patterns)
        )

    def test_mining_is_deterministic(self, verified_examples):
        first, _ = mine_patterns(verified_examples)
        second, _ = mine_patterns(verified_examples)
        assert [p.key for p in first] == [p.key for p in second]


class TestRegexFamily:

    def test_phone_shapes(self, verified_examples):
        patterns = mine_regex_patterns(verified_examples)
        local = _find(patterns, LOCAL_PHONE_RE.pattern)
        assert local.usage_count == 2
        assert local.success_rate == 1.0
        assert _find(patterns, INTERNATIONAL_PHONE_RE.pattern).usage_count == 1

    def test_rules_that_never_fire_are_not_reported(self, verified_examples):
        patterns = mine_regex_patterns(verified_examples)
        assert all(p.usage_count > 0 for p in patterns)
        assert not [p for p in patterns if p.field == "hallName"]

    def test_rule_firing_on_empty_field_is_disabled(self, example_factory):
        examples = [example_factory("Rahim\nSH hall\nB+", name="Rahim", blood_group="B+")]
        halls = [p for p in mine_regex_patterns(examples) if p.field == "hallName"]
        assert halls
        assert all(p.success_rate == 0.0 and not p.is_enabled for p in halls)


class TestPositionalFamily:

    def test_two_name_rule(self, verified_examples):
        (pattern,) = mine_positional_patterns(verified_examples)
        assert pattern.pattern == TWO_NAME_RULE_ID
        assert pattern.field == "name"
        assert pattern.usage_count == 1
        assert pattern.success_rate == 1.0

    def test_wrong_assignment_counts_as_failure(self, example_factory):
        examples = [
            example_factory("Tanvir Ahmed\nBadhon\nB+", name="Tanvir Ahmed", referrer="Badhon")
        ]
        (pattern,) = mine_positional_patterns(examples)
        assert pattern.success_rate == 0.0

    def test_overlap_ignores_case(self, example_factory):
        examples = [example_factory("tanvir\nbadhon\nB+", name="Badhon", referrer="Tanvir Ahmed")]
        (pattern,) = mine_positional_patterns(examples)
        assert pattern.success_rate == 1.0

    def test_no_two_name_paste(self, example_factory):
        examples = [example_factory("Rahim\nO+", name="Rahim", blood_group="O+")]
        assert mine_positional_patterns(examples) == []


class TestKeywordFamily:

    def test_managed_by(self, verified_examples):
        pattern = _find(mine_keyword_patterns(verified_examples), "Managed by")
        assert pattern.field == "referrer"
        assert pattern.usage_count == 1
        assert pattern.is_enabled

    def test_containment_ignores_case(self, example_factory):
        examples = [example_factory("rahim\nMOBILE: 01711111111", name="rahim", phone="01711111111")]
        assert _find(mine_keyword_patterns(examples), "Mobile:").success_rate == 1.0

    @pytest.mark.parametrize("filled,enabled", [(3, False), (4, True)])
    def test_enable_threshold(self, example_factory, filled, enabled):
        examples = [
            example_factory(f"Rahim{i}\nReferrer: Karim", name="Rahim", referrer="Karim" if i < filled else "")
            for i in range(10)
        ]
        pattern = _find(mine_keyword_patterns(examples), "Referrer:")
        assert pattern.success_rate == pytest.approx(filled / 10)
        assert pattern.is_enabled is enabled


class TestPatternLearner:

    def test_learn_persists_patterns(self, verified_examples, memory_pattern_store):
        result = PatternLearner(lambda: verified_examples, memory_pattern_store).learn()
        assert result.patterns_learned == len(memory_pattern_store)
        assert result.statistics.total_examples == 3

    def test_relearning_updates_in_place(self, verified_examples, memory_pattern_store):
        learner = PatternLearner(lambda: verified_examples, memory_pattern_store)
        first = learner.learn()
        second = learner.learn()
        assert len(memory_pattern_store) == first.patterns_learned
        assert {p.id for p in first.patterns} == {p.id for p in second.patterns}

    def test_relearning_resets_manual_override(self, verified_examples, memory_pattern_store):
        learner = PatternLearner(lambda: verified_examples, memory_pattern_store)
        learner.learn()
        managed_by = _find(memory_pattern_store.list(), "Managed by")
        memory_pattern_store.set_enabled(managed_by.id, False)
        learner.learn()
        assert memory_pattern_store.get(managed_by.id).is_enabled

    def test_empty_corpus(self, memory_pattern_store):
        result = PatternLearner(lambda: [], memory_pattern_store).learn()
        assert result.patterns_learned == 0
        assert len(memory_pattern_store) == 0
