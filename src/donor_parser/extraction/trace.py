"""Structured reasoning trail for a parse.

A ``ParseTrace`` is passed explicitly through the extractors so callers and
tests can inspect why each field got its value. Every step is also sent to
the module logger at DEBUG level.
"""

import logging
from typing import Any, Dict, List, Optional

from donor_parser.schemas.trace import TraceAction, TraceStep

logger = logging.getLogger(__name__)


class ParseTrace:
    """Accumulates trace steps for one parse call."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._steps: List[TraceStep] = []
        self._log = log or logger

    def add(
        self,
        stage: str,
        action: TraceAction,
        reasoning: str,
        rule: Optional[str] = None,
        value: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ) -> "ParseTrace":
        """Append a trace step."""
        step = TraceStep(
            stage=stage,
            action=action,
            reasoning=reasoning,
            rule=rule,
            value=value,
            detail=detail,
        )
        self._steps.append(step)
        self._log.debug("[%s] %s %s: %s", stage, action.value, rule or "-", reasoning)
        return self

    def extend(self, steps: Optional[List[TraceStep]]) -> "ParseTrace":
        """Merge steps from another trace (e.g. one per segment)."""
        if steps:
            self._steps.extend(steps)
        return self

    def for_stage(self, stage: str) -> List[TraceStep]:
        return [s for s in self._steps if s.stage == stage]

    def build(self) -> List[TraceStep]:
        """Return the accumulated trace steps."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)


class NullTrace(ParseTrace):
    """Trace that discards everything (the default when no trace is requested)."""

    def add(self, stage, action, reasoning, rule=None, value=None, detail=None) -> "ParseTrace":
        return self

    def extend(self, steps) -> "ParseTrace":
        return self
