"""Countdown state machine for the analog timer.

States
------
IDLE       Fresh or reset — full duration on the clock.
RUNNING    Counting down, one second per tick.
PAUSED     Tick cancelled, remaining time frozen.
STOPPED    Tick cancelled, run flags cleared, remaining kept.
EXPIRED    Clock hit zero.  Terminal until ``reset()``.

Transitions
-----------
IDLE | STOPPED | PAUSED → RUNNING   (start / resume)
RUNNING → PAUSED                     (pause)
Any except EXPIRED → STOPPED         (stop)
RUNNING → EXPIRED                    (tick at zero, or subtract_time)
Any → IDLE                           (reset)

Every mutation finishes with exactly one ``state_changed`` emission, after
the optional callbacks for that mutation have run.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..config import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_WARNING_THRESHOLD,
    DurationLike,
    TimerConfigError,
    TimerState,
    WarningLevel,
    to_seconds,
    validate_thresholds,
)

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
MAX_EXTENSION_FACTOR = 2  # add_time never pushes remaining past 2x total
SECONDS_ONLY_LIMIT = 60   # totals below this format as a bare count

TimerCallback = Callable[[], None]
TickCallback = Callable[[int], None]


# ── engine ────────────────────────────────────────────────────────────────


class CountdownEngine(QObject):
    """Qt-based countdown with warning thresholds and lifecycle callbacks.

    Signals
    -------
    state_changed()
        Emitted once after every mutation (tick, control call, time change).
    tick(remaining_seconds: int)
        Emitted every second while counting down.
    warning_reached()
        Emitted on entering the warning band.
    critical_reached()
        Emitted on entering the critical band.
    expired()
        Emitted once when the countdown reaches its end.

    The ``on_*`` attributes are optional plain callables for hosts that do
    not want to wire up signals.  They run synchronously inside the
    mutation that triggers them and must not call back into the engine.
    """

    state_changed = pyqtSignal()
    tick = pyqtSignal(int)
    warning_reached = pyqtSignal()
    critical_reached = pyqtSignal()
    expired = pyqtSignal()

    def __init__(
        self,
        duration: DurationLike,
        warning_threshold: float = DEFAULT_WARNING_THRESHOLD,
        critical_threshold: float = DEFAULT_CRITICAL_THRESHOLD,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)

        total = to_seconds(duration)
        if total <= 0:
            raise TimerConfigError(f"duration must be positive, got {duration!r}")
        validate_thresholds(warning_threshold, critical_threshold)

        # ── configuration ─────────────────────────────────────────────
        self._warning_threshold: float = warning_threshold
        self._critical_threshold: float = critical_threshold

        # ── countdown state ───────────────────────────────────────────
        self._total: int = total
        self._remaining: int = total
        self._state: TimerState = TimerState.IDLE
        self._warning_level: WarningLevel = WarningLevel.NORMAL
        self._disposed: bool = False

        # ── callbacks ─────────────────────────────────────────────────
        self.on_tick: Optional[TimerCallback] = None
        self.on_tick_with_time: Optional[TickCallback] = None
        self.on_warning: Optional[TimerCallback] = None
        self.on_critical: Optional[TimerCallback] = None
        self.on_expired: Optional[TimerCallback] = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def total_duration(self) -> int:
        """Total seconds the countdown was set for."""
        return self._total

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def progress(self) -> float:
        """1.0 with the full duration left, 0.0 when time is up.

        May exceed 1.0 after ``add_time``.
        """
        return self._remaining / self._total

    @property
    def is_active(self) -> bool:
        """True while counting down (running and not paused)."""
        return self._state == TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    @property
    def has_expired(self) -> bool:
        return self._remaining <= 0

    @property
    def warning_level(self) -> WarningLevel:
        return self._warning_level

    @property
    def warning_threshold(self) -> float:
        return self._warning_threshold

    @property
    def critical_threshold(self) -> float:
        return self._critical_threshold

    @property
    def formatted_time(self) -> str:
        """``"43"`` for totals under a minute, ``"01:30"`` otherwise."""
        seconds = self._remaining
        if self._total < SECONDS_ONLY_LIMIT:
            return str(seconds)
        minutes, seconds = divmod(seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or resume) counting down.  No-op when already running."""
        if self._disposed or self._state in (
            TimerState.RUNNING, TimerState.EXPIRED,
        ):
            return
        logger.debug("countdown started at %ss", self._remaining)
        self._state = TimerState.RUNNING
        self._qt_timer.start()
        self._notify()

    def pause(self) -> None:
        """Freeze the clock.  Only valid while running."""
        if self._state != TimerState.RUNNING:
            return
        self._qt_timer.stop()
        self._state = TimerState.PAUSED
        logger.debug("countdown paused at %ss", self._remaining)
        self._notify()

    def resume(self) -> None:
        """Continue a paused countdown without touching ``remaining``."""
        if self._state != TimerState.PAUSED:
            return
        self.start()

    def stop(self) -> None:
        """Cancel the tick and clear run flags.  Remaining time is kept."""
        self._qt_timer.stop()
        if self._state != TimerState.EXPIRED:
            self._state = TimerState.STOPPED
        logger.debug("countdown stopped at %ss", self._remaining)
        self._notify()

    def reset(self, new_duration: DurationLike | None = None) -> None:
        """Back to IDLE with a full clock, optionally with a new total.

        A rejected *new_duration* leaves the engine untouched.
        """
        total = self._total
        if new_duration is not None:
            total = to_seconds(new_duration)
            if total <= 0:
                raise TimerConfigError(
                    f"duration must be positive, got {new_duration!r}"
                )
        self._qt_timer.stop()
        self._total = total
        self._remaining = self._total
        self._state = TimerState.IDLE
        self._warning_level = WarningLevel.NORMAL
        logger.debug("countdown reset to %ss", self._total)
        self._notify()

    def add_time(self, extra: DurationLike) -> None:
        """Add time, capped at twice the total duration.

        A negative amount is handled as ``subtract_time``.
        """
        seconds = to_seconds(extra)
        if seconds < 0:
            self.subtract_time(-seconds)
            return
        ceiling = self._total * MAX_EXTENSION_FACTOR
        self._remaining = min(self._remaining + seconds, ceiling)
        self._check_warning_level()
        self._notify()

    def subtract_time(self, amount: DurationLike) -> None:
        """Remove time.  Hitting zero expires the countdown immediately.

        A negative amount is handled as ``add_time``.
        """
        seconds = to_seconds(amount)
        if seconds < 0:
            self.add_time(-seconds)
            return
        remaining = self._remaining - seconds
        if remaining <= 0:
            self._remaining = 0
            if self._state == TimerState.EXPIRED:
                self._notify()
            else:
                self._expire()
            return
        self._remaining = remaining
        self._check_warning_level()
        self._notify()

    def dispose(self) -> None:
        """Cancel any pending tick and drop callbacks.  Safe to repeat."""
        self._qt_timer.stop()
        self._disposed = True
        self.on_tick = None
        self.on_tick_with_time = None
        self.on_warning = None
        self.on_critical = None
        self.on_expired = None
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            self._state = TimerState.STOPPED

    def __enter__(self) -> CountdownEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if self._remaining <= 0:
            self._expire()
            return

        self._remaining -= 1
        self._check_warning_level()
        if self.on_tick is not None:
            self.on_tick()
        if self.on_tick_with_time is not None:
            self.on_tick_with_time(self._remaining)
        self.tick.emit(self._remaining)
        self._notify()

    def _expire(self) -> None:
        self._qt_timer.stop()
        self._remaining = 0
        self._state = TimerState.EXPIRED
        logger.info("countdown of %ss expired", self._total)
        if self.on_expired is not None:
            self.on_expired()
        self.expired.emit()
        self._notify()

    def _check_warning_level(self) -> None:
        """Reclassify after ``remaining`` changed.

        Boundary values belong to the more severe band.
        """
        current = self.progress
        if current <= self._critical_threshold:
            if self._warning_level != WarningLevel.CRITICAL:
                self._warning_level = WarningLevel.CRITICAL
                logger.debug("countdown critical at %ss", self._remaining)
                if self.on_critical is not None:
                    self.on_critical()
                self.critical_reached.emit()
        elif current <= self._warning_threshold:
            if self._warning_level != WarningLevel.WARNING:
                self._warning_level = WarningLevel.WARNING
                logger.debug("countdown warning at %ss", self._remaining)
                if self.on_warning is not None:
                    self.on_warning()
                self.warning_reached.emit()
        else:
            self._warning_level = WarningLevel.NORMAL

    def _notify(self) -> None:
        self.state_changed.emit()
