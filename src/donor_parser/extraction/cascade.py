"""Ordered rule cascades.

Every field extractor is a prioritized list of independent rules. A rule
either returns a value or None; the cascade evaluates rules in order and
stops at the first rule that produces a truthy value. Keeping each rule
separate makes the cascade auditable (``rule_names``) and lets tests target
one rule at a time.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from donor_parser.extraction.trace import NullTrace, ParseTrace
from donor_parser.schemas.trace import TraceAction

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A single named extraction attempt."""

    name: str
    extract: Callable[[str], Optional[T]]
    description: str = ""

    def apply(self, text: str) -> Optional[T]:
        value = self.extract(text)
        return value or None


class RuleCascade(Generic[T]):
    """Evaluates rules in priority order, short-circuiting on first success."""

    def __init__(self, field: str, rules: Sequence[Rule[T]], default: T) -> None:
        self.field = field
        self.rules: List[Rule[T]] = list(rules)
        self.default = default

    @property
    def rule_names(self) -> List[str]:
        return [r.name for r in self.rules]

    def get(self, name: str) -> Rule[T]:
        """Look up a rule by name.

        Raises:
            KeyError: If the cascade has no rule with that name.
        """
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(f"No rule '{name}' in {self.field} cascade. Available: {self.rule_names}")

    def run(self, text: str, trace: Optional[ParseTrace] = None) -> T:
        """Return the first value produced by a rule, or the default.

        Args:
            text: Sanitized span to extract from.
            trace: Optional tracer receiving one step per rule attempted.
        """
        trace = trace if trace is not None else NullTrace()
        for rule in self.rules:
            value = rule.apply(text)
            if value:
                trace.add(
                    self.field,
                    TraceAction.MATCHED,
                    rule.description or f"{rule.name} matched",
                    rule=rule.name,
                    value=str(value),
                )
                return value
            trace.add(self.field, TraceAction.SKIPPED, "no match", rule=rule.name)

        trace.add(
            self.field,
            TraceAction.DEFAULTED,
            f"no rule fired, using default {str(self.default)!r}",
            value=str(self.default),
        )
        return self.default
