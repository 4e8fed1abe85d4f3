"""Training-example and feedback stores.

The file-backed store keeps one JSON document per collection and an
append-only ``history.jsonl`` recording every change for audit.
"""

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from donor_parser.schemas.training import Feedback, TrainingExample
from donor_parser.storage.errors import ExampleNotFoundError, StorageError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class InMemoryExampleStore:
    """Examples and feedback held in dicts. Subclasses add persistence."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._collections: Dict[str, Dict[str, Any]] = {"examples": {}, "feedback": {}}

    # -------------------------------------------------------------------------
    # Persistence hooks
    # -------------------------------------------------------------------------

    def _load(self, collection: str, model: Type[M]) -> Dict[str, M]:
        return self._collections[collection]

    def _save(self, collection: str, rows: Dict[str, BaseModel]) -> None:
        self._collections[collection] = rows

    def _record(self, action: str, collection: str, row_id: str, row: Optional[BaseModel]) -> None:
        """Audit hook, a no-op in memory."""

    def _write(self, collection: str, model: Type[M], action: str, row_id: str, row: Optional[M]) -> None:
        with self._lock:
            rows = dict(self._load(collection, model))
            if action != "create" and row_id not in rows:
                raise ExampleNotFoundError(f"{collection} entry not found: {row_id}")
            if row is None:
                del rows[row_id]
            else:
                rows[row_id] = row
            self._save(collection, rows)
            self._record(action, collection, row_id, row)

    # -------------------------------------------------------------------------
    # Training examples
    # -------------------------------------------------------------------------

    def add_example(self, example: TrainingExample) -> TrainingExample:
        self._write("examples", TrainingExample, "create", example.id, example)
        logger.debug("Added example %s (confidence=%.2f)", example.id, example.confidence)
        return example

    def get_example(self, example_id: str) -> Optional[TrainingExample]:
        return self._load("examples", TrainingExample).get(example_id)

    def update_example(self, example: TrainingExample) -> TrainingExample:
        self._write("examples", TrainingExample, "update", example.id, example)
        return example

    def delete_example(self, example_id: str) -> None:
        self._write("examples", TrainingExample, "delete", example_id, None)

    def list_examples(self) -> List[TrainingExample]:
        rows = self._load("examples", TrainingExample).values()
        return sorted(rows, key=lambda e: e.created_at, reverse=True)

    def correct_examples(self) -> List[TrainingExample]:
        return [e for e in self.list_examples() if e.is_correct]

    # -------------------------------------------------------------------------
    # Feedback
    # -------------------------------------------------------------------------

    def add_feedback(self, feedback: Feedback) -> Feedback:
        self._write("feedback", Feedback, "create", feedback.id, feedback)
        return feedback

    def get_feedback(self, feedback_id: str) -> Optional[Feedback]:
        return self._load("feedback", Feedback).get(feedback_id)

    def list_feedback(self, reviewed: Optional[bool] = None) -> List[Feedback]:
        rows = [
            f
            for f in self._load("feedback", Feedback).values()
            if reviewed is None or f.reviewed == reviewed
        ]
        return sorted(rows, key=lambda f: f.created_at, reverse=True)

    def mark_reviewed(self, feedback_id: str) -> Feedback:
        feedback = self.get_feedback(feedback_id)
        if feedback is None:
            raise ExampleNotFoundError(f"feedback entry not found: {feedback_id}")
        reviewed = feedback.model_copy(update={"reviewed": True})
        self._write("feedback", Feedback, "review", feedback_id, reviewed)
        return reviewed


class FileExampleStore(InMemoryExampleStore):
    """Filesystem-backed example store with an audit trail.

    Layout::

        {root}/examples.json
        {root}/feedback.json
        {root}/history.jsonl    # append-only change log
    """

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = Path(root)

    def _path(self, collection: str) -> Path:
        return self.root / f"{collection}.json"

    def _load(self, collection: str, model: Type[M]) -> Dict[str, M]:
        path = self._path(collection)
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (json.JSONDecodeError, IOError) as exc:
            logger.warning("Failed to load %s from %s: %s", collection, path, exc)
            return {}

        rows: Dict[str, M] = {}
        for item in payload.get(collection, []):
            try:
                row = model.model_validate(item)
            except ValidationError as exc:
                logger.warning("Skipping invalid %s row in %s: %s", collection, path, exc)
                continue
            rows[row.id] = row
        return rows

    def _save(self, collection: str, rows: Dict[str, BaseModel]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(collection)
        tmp_path = path.with_suffix(".json.tmp")
        payload = {collection: [r.model_dump(mode="json", by_alias=True) for r in rows.values()]}
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except IOError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(f"Failed to save {collection}: {exc}") from exc

    def _record(self, action: str, collection: str, row_id: str, row: Optional[BaseModel]) -> None:
        entry = {
            "at": datetime.utcnow().isoformat() + "Z",
            "action": action,
            "collection": collection,
            "id": row_id,
            "payload": row.model_dump(mode="json", by_alias=True) if row is not None else None,
        }
        history_path = self.root / "history.jsonl"
        try:
            with open(history_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except IOError as exc:
            logger.warning("Failed to append to example history: %s", exc)

    def history(self) -> List[dict]:
        """All recorded changes, oldest first."""
        history_path = self.root / "history.jsonl"
        if not history_path.exists():
            return []
        entries = []
        try:
            with open(history_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        entries.append(json.loads(line))
        except (json.JSONDecodeError, IOError) as exc:
            logger.warning("Failed to load example history: %s", exc)
        return entries
