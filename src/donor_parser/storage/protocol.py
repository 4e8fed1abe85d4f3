"""Storage protocols for the collaborators the mining engine depends on.

The engine itself does no I/O: corpus reads and pattern writes go through
objects satisfying these protocols. File-backed and in-memory
implementations live alongside; a database-backed one can be dropped in
without changing consuming code.
"""

from typing import List, Optional, Protocol, runtime_checkable

from donor_parser.schemas.patterns import LearnedPattern
from donor_parser.schemas.training import Feedback, TrainingExample


@runtime_checkable
class PatternStore(Protocol):
    """Keyed table of mined patterns with upsert semantics."""

    def upsert(self, pattern: LearnedPattern) -> LearnedPattern:
        """Insert or update by (pattern_type, pattern, field).

        Returns:
            The stored row. An existing row keeps its id.
        """
        ...

    def get(self, pattern_id: str) -> Optional[LearnedPattern]:
        """Get a pattern by id, or None if not found."""
        ...

    def list(
        self,
        field: Optional[str] = None,
        pattern_type: Optional[str] = None,
        enabled_only: bool = False,
    ) -> List[LearnedPattern]:
        """List patterns, best success rate first, then most used."""
        ...

    def set_enabled(self, pattern_id: str, enabled: bool) -> LearnedPattern:
        """Override the enabled flag.

        Raises:
            PatternNotFoundError: If the id is unknown.
        """
        ...

    def delete(self, pattern_id: str) -> None:
        """Remove a pattern.

        Raises:
            PatternNotFoundError: If the id is unknown.
        """
        ...


@runtime_checkable
class ExampleStore(Protocol):
    """Corpus of verified training examples and user feedback."""

    def add_example(self, example: TrainingExample) -> TrainingExample:
        ...

    def get_example(self, example_id: str) -> Optional[TrainingExample]:
        ...

    def update_example(self, example: TrainingExample) -> TrainingExample:
        """Replace a stored example.

        Raises:
            ExampleNotFoundError: If the id is unknown.
        """
        ...

    def delete_example(self, example_id: str) -> None:
        ...

    def list_examples(self) -> List[TrainingExample]:
        """All examples, newest first."""
        ...

    def correct_examples(self) -> List[TrainingExample]:
        """Examples with ``is_correct`` set: the mining corpus."""
        ...

    def add_feedback(self, feedback: Feedback) -> Feedback:
        ...

    def list_feedback(self, reviewed: Optional[bool] = None) -> List[Feedback]:
        ...

    def mark_reviewed(self, feedback_id: str) -> Feedback:
        ...
