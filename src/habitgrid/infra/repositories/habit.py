"""JSON file implementation of Habit repository."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ...logging_config import get_logger
from ...models.habit import HabitData

logger = get_logger(__name__)


def _read_document(path: Path) -> HabitData:
    """Parse a habits document; an empty file is an empty document."""

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return HabitData()
    try:
        return HabitData.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"error decoding JSON from {path}: {exc}") from exc


def _write_document(path: Path, data: HabitData) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data.model_dump(mode="json"), indent=2, ensure_ascii=False)
    with path.open("w", encoding="utf-8") as fh:
        fh.write(payload + "\n")


class JSONHabitRepository:
    """Stores every habit in a single JSON document on local disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> HabitData:
        """Load the document; a missing file means no habits yet."""
        if not self.path.exists():
            return HabitData()
        data = _read_document(self.path)
        logger.debug("Loaded habits", extra={"path": str(self.path), "count": len(data.habits)})
        return data

    def save(self, data: HabitData) -> None:
        _write_document(self.path, data)
        logger.debug("Saved habits", extra={"path": str(self.path), "count": len(data.habits)})

    def export_to(self, path: Path, data: HabitData) -> Path:
        """Write a copy of the document to ``path``."""
        path = Path(path)
        _write_document(path, data)
        logger.info("Habits exported", extra={"path": str(path), "count": len(data.habits)})
        return path

    def read_import(self, path: Path) -> HabitData:
        """Read an exported document; a missing file is an error here."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Import file not found: {path}")
        return _read_document(path)
