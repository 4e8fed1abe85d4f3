"""Storage exceptions."""


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class PatternNotFoundError(StorageError):
    """Raised when a pattern id is not in the store."""

    pass


class ExampleNotFoundError(StorageError):
    """Raised when a training example or feedback id is not in the store."""

    pass
