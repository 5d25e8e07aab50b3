"""Timer preferences with JSON persistence.

Settings are stored at:
    ~/.config/analogtimer/settings.json

Usage::

    settings = load_settings()
    settings.duration_seconds = 90
    save_settings(settings)
    engine = settings.create_engine()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QColor

from .config import (
    DEFAULT_CRITICAL_COLOR,
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_NORMAL_COLOR,
    DEFAULT_WARNING_COLOR,
    DEFAULT_WARNING_THRESHOLD,
    Direction,
    TimerConfigError,
    TimerStyle,
    WarningConfig,
)
from .timer.engine import CountdownEngine

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "analogtimer"
SETTINGS_PATH = CONFIG_DIR / "settings.json"


@dataclass
class TimerSettings:
    """All user-configurable preferences."""

    # ── countdown ─────────────────────────────────────────────────────
    duration_seconds: int = 5 * 60
    warning_threshold: float = DEFAULT_WARNING_THRESHOLD
    critical_threshold: float = DEFAULT_CRITICAL_THRESHOLD

    # ── appearance ────────────────────────────────────────────────────
    normal_color: str = DEFAULT_NORMAL_COLOR
    warning_color: str = DEFAULT_WARNING_COLOR
    critical_color: str = DEFAULT_CRITICAL_COLOR
    enable_warning_colors: bool = True
    direction: str = Direction.CLOCKWISE.value
    size: int = 200

    def warning_config(self) -> WarningConfig:
        return WarningConfig(
            normal_color=QColor(self.normal_color),
            warning_color=QColor(self.warning_color),
            critical_color=QColor(self.critical_color),
            warning_threshold=self.warning_threshold,
            critical_threshold=self.critical_threshold,
        )

    def timer_style(self) -> TimerStyle:
        return TimerStyle(
            size=self.size,
            warning_colors=self.warning_config(),
            enable_warning_colors=self.enable_warning_colors,
        )

    def sweep_direction(self) -> Direction:
        try:
            return Direction(self.direction)
        except ValueError:
            raise TimerConfigError(
                f"unknown direction {self.direction!r}"
            ) from None

    def create_engine(self, parent: QObject | None = None) -> CountdownEngine:
        return CountdownEngine(
            self.duration_seconds,
            warning_threshold=self.warning_threshold,
            critical_threshold=self.critical_threshold,
            parent=parent,
        )


def load_settings(path: Path | None = None) -> TimerSettings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(TimerSettings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return TimerSettings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings at %s: %s", path, exc)
    return TimerSettings()


def save_settings(settings: TimerSettings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
