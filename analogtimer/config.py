"""Shared value types for the analog timer.

Everything here is an immutable value: enums for the engine state, warning
level and sweep direction, plus the colour/threshold configuration that both
the countdown engine and the renderer read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from PyQt6.QtGui import QColor


class TimerConfigError(ValueError):
    """Raised when a timer, threshold or style configuration is invalid."""


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    EXPIRED = "expired"


class WarningLevel(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        """0 for normal, 1 for warning, 2 for critical."""
        return _SEVERITY[self]


_SEVERITY: dict[WarningLevel, int] = {
    WarningLevel.NORMAL: 0,
    WarningLevel.WARNING: 1,
    WarningLevel.CRITICAL: 2,
}


class Direction(Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WARNING_THRESHOLD = 0.5
DEFAULT_CRITICAL_THRESHOLD = 0.2

DEFAULT_NORMAL_COLOR = "#2ECC71"     # green
DEFAULT_WARNING_COLOR = "#F39C12"    # orange
DEFAULT_CRITICAL_COLOR = "#E74C3C"   # red

DurationLike = Union[int, timedelta]


# ── helpers ───────────────────────────────────────────────────────────────


def to_seconds(value: DurationLike) -> int:
    """Whole seconds for an ``int`` or ``timedelta`` duration.

    A ``timedelta`` is truncated to whole seconds.  Anything else,
    floats and strings included, is a configuration error.
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, bool) or not isinstance(value, int):
        raise TimerConfigError(
            f"duration must be whole seconds or a timedelta, got {value!r}"
        )
    return value


def validate_thresholds(warning: float, critical: float) -> None:
    if not 0.0 < warning <= 1.0:
        raise TimerConfigError(
            f"warning threshold must be in (0, 1], got {warning!r}"
        )
    if not 0.0 < critical <= 1.0:
        raise TimerConfigError(
            f"critical threshold must be in (0, 1], got {critical!r}"
        )
    if critical >= warning:
        raise TimerConfigError(
            "critical threshold must be less than warning threshold "
            f"({critical!r} >= {warning!r})"
        )


# ── configuration values ──────────────────────────────────────────────────


@dataclass(frozen=True)
class WarningConfig:
    """Colour stops and the thresholds they are keyed by."""

    normal_color: QColor = field(
        default_factory=lambda: QColor(DEFAULT_NORMAL_COLOR)
    )
    warning_color: QColor = field(
        default_factory=lambda: QColor(DEFAULT_WARNING_COLOR)
    )
    critical_color: QColor = field(
        default_factory=lambda: QColor(DEFAULT_CRITICAL_COLOR)
    )
    warning_threshold: float = DEFAULT_WARNING_THRESHOLD
    critical_threshold: float = DEFAULT_CRITICAL_THRESHOLD

    def __post_init__(self) -> None:
        validate_thresholds(self.warning_threshold, self.critical_threshold)


@dataclass(frozen=True)
class TimerStyle:
    """Everything about the timer face that is not driven by the clock."""

    size: float = 200.0
    circle_color: QColor = field(default_factory=lambda: QColor("#34495E"))
    progress_color: Optional[QColor] = None  # overrides warning colours
    interval_color: QColor = field(default_factory=lambda: QColor("#7F8C8D"))
    major_interval_color: QColor = field(
        default_factory=lambda: QColor("#2C3E50")
    )
    time_text_color: QColor = field(default_factory=lambda: QColor("#2C3E50"))
    time_text_size: float = 24.0
    warning_colors: WarningConfig = field(default_factory=WarningConfig)
    enable_warning_colors: bool = True

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise TimerConfigError(f"size must be positive, got {self.size!r}")
        if self.time_text_size <= 0:
            raise TimerConfigError(
                f"time text size must be positive, got {self.time_text_size!r}"
            )


@dataclass(frozen=True)
class RenderRequest:
    """Snapshot of everything needed to draw one frame."""

    progress: float
    direction: Direction = Direction.CLOCKWISE
    is_active: bool = False
    animation_value: float = 0.0
    warning_level: WarningLevel = WarningLevel.NORMAL
    label: Optional[str] = None
    style: TimerStyle = field(default_factory=TimerStyle)

    def __post_init__(self) -> None:
        if not 0.0 <= self.progress <= 1.0:
            raise TimerConfigError(
                f"progress must be in [0, 1], got {self.progress!r}"
            )
        if not 0.0 <= self.animation_value <= 1.0:
            raise TimerConfigError(
                f"animation value must be in [0, 1], got {self.animation_value!r}"
            )
