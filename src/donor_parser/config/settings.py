"""Runtime settings read from the environment.

All settings use the ``DONOR_PARSER_`` prefix and may be placed in a
``.env`` file at the project root (loaded by ``donor_parser.startup``).
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "DONOR_PARSER_"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """Process-wide configuration.

    Attributes:
        data_dir: Root directory of the file-backed pattern and example stores.
        vocabulary_path: Optional vocabulary YAML overriding the packaged one.
        log_level: Default log level when the CLI is not given -v/-q.
        parse_workers: Thread count used by ``parse_many`` (1 = sequential).
    """

    data_dir: Path = Field(default=Path("output"))
    vocabulary_path: Optional[str] = None
    log_level: str = "INFO"
    parse_workers: int = Field(default=1, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{v}'. Valid levels: {sorted(VALID_LOG_LEVELS)}"
            )
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``DONOR_PARSER_*`` environment variables."""
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls.model_validate(values)

    @property
    def patterns_dir(self) -> Path:
        return self.data_dir / "patterns"

    @property
    def examples_dir(self) -> Path:
        return self.data_dir / "training"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings built from the current environment."""
    settings = Settings.from_env()
    logger.debug("Settings: %s", settings.model_dump())
    return settings
