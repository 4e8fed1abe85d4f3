"""Centralized initialization for donor_parser entry points.

Loads ``.env`` from the project root exactly once so that settings picked
up by ``donor_parser.config.settings`` see the same environment whether the
engine is driven from the CLI or embedded in another service.
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Module-level state
_initialized: bool = False


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for pyproject.toml or .env.

    Args:
        start_path: Starting path for search. Defaults to the working directory.

    Returns:
        Project root directory.
    """
    current = (start_path or Path.cwd()).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists() or (parent / ".env").exists():
            return parent
    return current


def ensure_initialized(start_path: Optional[Path] = None) -> bool:
    """Load environment variables from ``.env`` once per process.

    Existing environment variables win over values in the file.

    Returns:
        True if a .env file was loaded by this call, False otherwise.
    """
    global _initialized
    if _initialized:
        return False
    _initialized = True

    project_root = _find_project_root(start_path)
    env_path = project_root / ".env"
    if not env_path.exists():
        logger.debug("No .env found at %s", env_path)
        return False

    load_dotenv(env_path, override=False)
    logger.debug("Loaded .env from %s", env_path)

    # Settings are cached; make sure they reflect the freshly loaded env.
    from donor_parser.config.settings import get_settings
    from donor_parser.config.vocabulary import get_vocabulary

    get_settings.cache_clear()
    get_vocabulary.cache_clear()
    return True


def reset_for_tests() -> None:
    """Forget initialization state (tests only)."""
    global _initialized
    _initialized = False
