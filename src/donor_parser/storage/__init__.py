"""Reference storage for patterns, training examples and feedback."""

from donor_parser.storage.errors import ExampleNotFoundError, PatternNotFoundError, StorageError
from donor_parser.storage.example_store import FileExampleStore, InMemoryExampleStore
from donor_parser.storage.pattern_store import FilePatternStore, InMemoryPatternStore
from donor_parser.storage.protocol import ExampleStore, PatternStore
from donor_parser.storage.seed import load_seed_examples

__all__ = [
    "StorageError",
    "PatternNotFoundError",
    "ExampleNotFoundError",
    "ExampleStore",
    "PatternStore",
    "FileExampleStore",
    "InMemoryExampleStore",
    "FilePatternStore",
    "InMemoryPatternStore",
    "load_seed_examples",
]
