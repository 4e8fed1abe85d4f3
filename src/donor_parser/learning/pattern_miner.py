"""Pattern mining: score candidate extraction rules against verified examples.

For every candidate rule the miner counts how many examples it fires on
(``usage_count``) and, of those, how many have the rule's field filled in
the verified output (``success_rate``). Rules that never fire are not
reported. Mining is a pure function of the corpus; persisting the result
is delegated to an injected pattern store.
"""

import logging
from typing import Callable, Iterable, List, Sequence, Tuple

from donor_parser.extraction.extractors.names import NAME_CASCADE
from donor_parser.extraction.sanitizer import clean_text
from donor_parser.learning.catalogue import (
    KEYWORD_CATALOGUE,
    POSITIONAL_CATALOGUE,
    regex_catalogue,
)
from donor_parser.schemas.patterns import (
    ENABLE_THRESHOLD,
    LearnedPattern,
    MiningResult,
    MiningStatistics,
    PatternType,
)
from donor_parser.schemas.training import TrainingExample
from donor_parser.storage.protocol import PatternStore

logger = logging.getLogger(__name__)

ExampleSource = Callable[[], Iterable[TrainingExample]]


def _has_expected(example: TrainingExample, field: str) -> bool:
    return bool(example.expected_output.get(field).strip())


def _make_pattern(
    pattern_type: PatternType, pattern: str, field: str, fired: int, correct: int
) -> LearnedPattern:
    success_rate = correct / fired
    return LearnedPattern(
        pattern_type=pattern_type,
        pattern=pattern,
        field=field,
        confidence=success_rate,
        success_rate=success_rate,
        usage_count=fired,
        is_enabled=success_rate > ENABLE_THRESHOLD,
    )


def mine_regex_patterns(examples: Sequence[TrainingExample]) -> List[LearnedPattern]:
    patterns = []
    for candidate in regex_catalogue():
        compiled = candidate.compile()
        fired = correct = 0
        for example in examples:
            if compiled.search(example.raw_text):
                fired += 1
                if _has_expected(example, candidate.field):
                    correct += 1
        if fired:
            patterns.append(
                _make_pattern(PatternType.REGEX, candidate.pattern, candidate.field, fired, correct)
            )
    return patterns


def _overlaps(observed: str, expected: str) -> bool:
    """Either string contains the other, ignoring case."""
    observed, expected = observed.strip().lower(), expected.strip().lower()
    return bool(observed and expected) and (expected in observed or observed in expected)


def mine_positional_patterns(examples: Sequence[TrainingExample]) -> List[LearnedPattern]:
    two_name = NAME_CASCADE.get("two_name")
    patterns = []
    for rule_id, field in POSITIONAL_CATALOGUE:
        fired = correct = 0
        for example in examples:
            inferred = two_name.apply(clean_text(example.raw_text))
            if not inferred:
                continue
            fired += 1
            expected = example.expected_output
            if _overlaps(inferred.referrer, expected.referrer) and _overlaps(
                inferred.donor_name, expected.name
            ):
                correct += 1
        if fired:
            patterns.append(_make_pattern(PatternType.POSITIONAL, rule_id, field, fired, correct))
    return patterns


def mine_keyword_patterns(examples: Sequence[TrainingExample]) -> List[LearnedPattern]:
    patterns = []
    for keyword, field in KEYWORD_CATALOGUE:
        needle = keyword.lower()
        fired = correct = 0
        for example in examples:
            if needle in example.raw_text.lower():
                fired += 1
                if _has_expected(example, field):
                    correct += 1
        if fired:
            patterns.append(_make_pattern(PatternType.KEYWORD, keyword, field, fired, correct))
    return patterns


def mine_patterns(
    examples: Iterable[TrainingExample],
) -> Tuple[List[LearnedPattern], MiningStatistics]:
    """Mine scored patterns from a corpus of training examples.

    Only examples marked correct are considered. An empty corpus yields no
    patterns and all-zero statistics.
    """
    correct_examples = [e for e in examples if e.is_correct]
    if not correct_examples:
        logger.info("No correct training examples; nothing to mine")
        return [], MiningStatistics()

    regex = mine_regex_patterns(correct_examples)
    positional = mine_positional_patterns(correct_examples)
    keyword = mine_keyword_patterns(correct_examples)
    patterns = regex + positional + keyword

    average = sum(p.confidence for p in patterns) / len(patterns) if patterns else 0.0
    statistics = MiningStatistics(
        total_examples=len(correct_examples),
        regex_patterns=len(regex),
        positional_patterns=len(positional),
        keyword_patterns=len(keyword),
        average_confidence=average,
    )
    logger.info(
        "Mined %d patterns from %d examples (avg confidence %.2f)",
        len(patterns),
        len(correct_examples),
        average,
    )
    return patterns, statistics


class PatternLearner:
    """Runs a mining pass over an injected corpus and persists the result.

    Args:
        example_source: Callable returning the training examples to mine.
            Usually ``ExampleStore.correct_examples``.
        pattern_store: Store receiving one upsert per mined pattern.
    """

    def __init__(self, example_source: ExampleSource, pattern_store: PatternStore) -> None:
        self.example_source = example_source
        self.pattern_store = pattern_store

    def learn(self) -> MiningResult:
        patterns, statistics = mine_patterns(self.example_source())
        stored: List[LearnedPattern] = []
        for pattern in patterns:
            stored.append(self.pattern_store.upsert(pattern))
        logger.info("Stored %d patterns", len(stored))
        return MiningResult(
            patterns_learned=len(stored),
            statistics=statistics,
            patterns=stored,
        )

