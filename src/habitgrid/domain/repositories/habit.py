"""Habit repository protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ...models.habit import HabitData


class HabitRepository(Protocol):
    """Repository for loading and storing the habits document."""

    def exists(self) -> bool:
        """Return True when the backing store has been created."""
        ...

    def load(self) -> HabitData:
        """Load every habit."""
        ...

    def save(self, data: HabitData) -> None:
        """Persist every habit."""
        ...

    def export_to(self, path: Path, data: HabitData) -> Path:
        """Write a copy of the document to ``path``."""
        ...

    def read_import(self, path: Path) -> HabitData:
        """Read a document previously written by ``export_to``."""
        ...
