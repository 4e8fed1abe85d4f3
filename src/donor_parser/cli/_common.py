"""Shared helpers for CLI commands."""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.logging import RichHandler

from donor_parser.config.settings import get_settings
from donor_parser.startup import ensure_initialized as _ensure_initialized
from donor_parser.storage import FileExampleStore, FilePatternStore

logger = logging.getLogger(__name__)


def ensure_initialized() -> None:
    """Load ``.env`` and settings."""
    _ensure_initialized()


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler.

    Without -v/-q the level comes from ``DONOR_PARSER_LOG_LEVEL``.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, get_settings().log_level, logging.INFO)

    from donor_parser.cli._console import console

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def read_text(source: Optional[str]) -> str:
    """Read input from a file path, or stdin when ``source`` is None or ``-``.

    Raises:
        SystemExit: If the file does not exist.
    """
    if source is None or source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        from donor_parser.cli._console import print_err

        print_err(f"File not found: {path}")
        raise SystemExit(1)
    return path.read_text(encoding="utf-8")


def open_pattern_store(data_dir: Optional[str]) -> FilePatternStore:
    """Pattern store under ``--data-dir`` or ``DONOR_PARSER_DATA_DIR``."""
    root = Path(data_dir) / "patterns" if data_dir else get_settings().patterns_dir
    logger.debug("Pattern store: %s", root)
    return FilePatternStore(root)


def open_example_store(data_dir: Optional[str]) -> FileExampleStore:
    root = Path(data_dir) / "training" if data_dir else get_settings().examples_dir
    logger.debug("Example store: %s", root)
    return FileExampleStore(root)


def resolve_id(ids: Iterable[str], prefix: str) -> Optional[str]:
    """Full id for ``prefix`` (lists show 12-char prefixes), or None if not unique."""
    matches = [i for i in ids if i.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None
