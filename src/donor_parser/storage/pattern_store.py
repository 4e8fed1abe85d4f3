"""Learned-pattern stores.

Patterns form a keyed table: (pattern_type, pattern, field) identifies a
row and re-mining updates it in place. Read-modify-write cycles run under
a lock so concurrent mining passes in one process cannot lose updates.
"""

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from donor_parser.schemas.patterns import LearnedPattern, PatternKey
from donor_parser.storage.errors import PatternNotFoundError, StorageError

logger = logging.getLogger(__name__)

# Fields refreshed by a mining pass; id and key are preserved.
_MINED_FIELDS = ("confidence", "success_rate", "usage_count", "is_enabled")


def _sort_key(pattern: LearnedPattern):
    return (-pattern.success_rate, -pattern.usage_count)


class InMemoryPatternStore:
    """Pattern table held in a dict. Subclasses add persistence."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: Dict[str, LearnedPattern] = {}

    # -------------------------------------------------------------------------
    # Persistence hooks
    # -------------------------------------------------------------------------

    def _load(self) -> Dict[str, LearnedPattern]:
        return self._rows

    def _save(self, rows: Dict[str, LearnedPattern]) -> None:
        self._rows = rows

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def upsert(self, pattern: LearnedPattern) -> LearnedPattern:
        with self._lock:
            rows = dict(self._load())
            by_key: Dict[PatternKey, LearnedPattern] = {p.key: p for p in rows.values()}
            existing = by_key.get(pattern.key)
            if existing is None:
                stored = pattern.model_copy(update={"updated_at": datetime.utcnow()})
                logger.debug("Inserted pattern %s", stored.key)
            else:
                update = {name: getattr(pattern, name) for name in _MINED_FIELDS}
                update["updated_at"] = datetime.utcnow()
                stored = existing.model_copy(update=update)
                logger.debug("Updated pattern %s", stored.key)
            rows[stored.id] = stored
            self._save(rows)
            return stored

    def get(self, pattern_id: str) -> Optional[LearnedPattern]:
        return self._load().get(pattern_id)

    def list(
        self,
        field: Optional[str] = None,
        pattern_type: Optional[str] = None,
        enabled_only: bool = False,
    ) -> List[LearnedPattern]:
        rows = [
            p
            for p in self._load().values()
            if (field is None or p.field == field)
            and (pattern_type is None or p.key[0] == pattern_type)
            and (not enabled_only or p.is_enabled)
        ]
        return sorted(rows, key=_sort_key)

    def set_enabled(self, pattern_id: str, enabled: bool) -> LearnedPattern:
        with self._lock:
            rows = dict(self._load())
            if pattern_id not in rows:
                raise PatternNotFoundError(f"Pattern not found: {pattern_id}")
            stored = rows[pattern_id].model_copy(
                update={"is_enabled": enabled, "updated_at": datetime.utcnow()}
            )
            rows[pattern_id] = stored
            self._save(rows)
            logger.info("Pattern %s %s", pattern_id, "enabled" if enabled else "disabled")
            return stored

    def delete(self, pattern_id: str) -> None:
        with self._lock:
            rows = dict(self._load())
            if rows.pop(pattern_id, None) is None:
                raise PatternNotFoundError(f"Pattern not found: {pattern_id}")
            self._save(rows)
            logger.info("Deleted pattern %s", pattern_id)

    def __len__(self) -> int:
        return len(self._load())


class FilePatternStore(InMemoryPatternStore):
    """Pattern table persisted as one JSON document.

    Layout::

        {root}/patterns.json

    Every write goes to a temp file first and replaces the document
    atomically.
    """

    FILENAME = "patterns.json"

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = Path(root)
        self.path = self.root / self.FILENAME

    def _load(self) -> Dict[str, LearnedPattern]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (json.JSONDecodeError, IOError) as exc:
            logger.warning("Failed to load patterns from %s: %s", self.path, exc)
            return {}

        rows: Dict[str, LearnedPattern] = {}
        for item in payload.get("patterns", []):
            try:
                pattern = LearnedPattern.model_validate(item)
            except ValidationError as exc:
                logger.warning("Skipping invalid pattern row in %s: %s", self.path, exc)
                continue
            rows[pattern.id] = pattern
        return rows

    def _save(self, rows: Dict[str, LearnedPattern]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        payload = {
            "saved_at": datetime.utcnow().isoformat() + "Z",
            "patterns": [
                p.model_dump(mode="json", by_alias=True)
                for p in sorted(rows.values(), key=lambda p: p.key)
            ],
        }
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except IOError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(f"Failed to save patterns: {exc}") from exc
