"""Terminal capabilities resolved once per command run."""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from ..config import BaseConfig

DEFAULT_WIDTH = 80

# 256-color background codes for heat-map cells.
CELL_DONE = 22
CELL_LEVEL_1 = 22
CELL_LEVEL_2 = 35
CELL_LEVEL_3 = 118
CELL_EMPTY = 240

# Any of these marks a Windows console that understands ANSI sequences.
_WINDOWS_COLOR_HINTS = ("COLORTERM", "ConEmuANSI", "WT_SESSION", "TERM")


@dataclass(frozen=True)
class DisplayConfig:
    """Immutable rendering options handed to the presentation helpers."""

    use_color: bool = True
    width: int = DEFAULT_WIDTH
    done_bg: int = CELL_DONE
    level_backgrounds: tuple[int, int, int] = (CELL_LEVEL_1, CELL_LEVEL_2, CELL_LEVEL_3)
    empty_bg: int = CELL_EMPTY
    force_color: bool = False

    @classmethod
    def plain(cls, width: int = DEFAULT_WIDTH) -> "DisplayConfig":
        """No escape sequences at all; used for tests and dumb terminals."""
        return cls(use_color=False, width=width)


def _color_supported(env: Mapping[str, str], platform: str) -> bool:
    if platform.startswith("win"):
        return any(hint in env for hint in _WINDOWS_COLOR_HINTS)
    return True


def terminal_width(default: int = DEFAULT_WIDTH) -> int:
    width = shutil.get_terminal_size(fallback=(default, 24)).columns
    return width if width > 0 else default


def detect_display(
    config: BaseConfig,
    *,
    env: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    width: Optional[int] = None,
) -> DisplayConfig:
    """Build the display options from configuration and the environment."""

    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    if config.COLOR_MODE == "never":
        use_color = False
    elif config.COLOR_MODE == "always":
        use_color = True
    else:
        use_color = _color_supported(env, platform)

    return DisplayConfig(
        use_color=use_color,
        width=width if width is not None else terminal_width(),
        force_color=config.COLOR_MODE == "always",
    )
