"""Pattern-mining engine and training-example helpers."""

from donor_parser.learning.examples import (
    build_example,
    rescore_example,
    score_against_expected,
    update_example,
)
from donor_parser.learning.pattern_miner import PatternLearner, mine_patterns

__all__ = [
    "PatternLearner",
    "mine_patterns",
    "build_example",
    "rescore_example",
    "score_against_expected",
    "update_example",
]
