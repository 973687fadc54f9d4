"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .config import BaseConfig
from .domain.repositories import HabitRepository
from .infra.repositories import JSONHabitRepository
from .terminal.display import DisplayConfig, detect_display


@dataclass
class AppContext:
    """Everything a command needs: configuration, storage, display and the date."""

    config: BaseConfig
    habit_repo: HabitRepository
    display: DisplayConfig
    today: date = field(default_factory=date.today)


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    display: Optional[DisplayConfig] = None,
    today: Optional[date] = None,
) -> AppContext:
    """Wire the JSON repository and terminal settings for one command run."""

    cfg = config or BaseConfig()
    return AppContext(
        config=cfg,
        habit_repo=JSONHabitRepository(cfg.DATA_FILE),
        display=display or detect_display(cfg),
        today=today or date.today(),
    )
