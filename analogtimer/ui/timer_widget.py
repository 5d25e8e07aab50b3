"""Analog timer widget.

Works in two modes:
- Static: call ``set_progress`` / ``set_label`` yourself.
- Bound: ``bind_engine(engine)`` and the face follows the countdown,
  showing ``formatted_time`` in the middle.

The widget owns the glow pulse (a looping 0 → 1 → 0 animation) and runs
it only while the face is glowing.  A repaint is scheduled only when
``should_repaint`` reports a visible change.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from PyQt6.QtCore import QEasingCurve, QVariantAnimation
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QWidget

from ..config import Direction, RenderRequest, TimerStyle, WarningLevel
from ..timer.engine import CountdownEngine
from .painting import paint_primitives
from .render import render, should_repaint

logger = logging.getLogger(__name__)


class AnalogTimerWidget(QWidget):
    """Custom-painted analog countdown face."""

    PULSE_HALF_PERIOD_MS = 2000  # 0 → 1 takes this long, and back again

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        style: TimerStyle | None = None,
        direction: Direction = Direction.CLOCKWISE,
        progress: float = 1.0,
    ) -> None:
        super().__init__(parent)
        self._style: TimerStyle = style or TimerStyle()
        self._engine: Optional[CountdownEngine] = None
        self._request = RenderRequest(
            progress=progress, direction=direction, style=self._style,
        )
        self._pulse_value: float = 0.0
        self._pulsing: bool = False
        self._disposed: bool = False
        self.setMinimumSize(int(self._style.size), int(self._style.size))

        # ── glow pulse ─────────────────────────────────────────────────
        self._pulse = QVariantAnimation(self)
        self._pulse.setDuration(self.PULSE_HALF_PERIOD_MS * 2)
        self._pulse.setStartValue(0.0)
        self._pulse.setKeyValueAt(0.5, 1.0)
        self._pulse.setEndValue(0.0)
        self._pulse.setEasingCurve(QEasingCurve.Type.Linear)
        self._pulse.setLoopCount(-1)
        self._pulse.valueChanged.connect(self._on_pulse)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> Optional[CountdownEngine]:
        return self._engine

    @property
    def timer_style(self) -> TimerStyle:
        return self._style

    def current_request(self) -> RenderRequest:
        """The request the next paint will render."""
        return self._request

    def set_progress(self, value: float) -> None:
        self._apply(progress=max(0.0, min(1.0, value)))

    def set_label(self, text: str | None) -> None:
        self._apply(label=text)

    def set_active(self, active: bool) -> None:
        self._apply(is_active=active)

    def set_warning_level(self, level: WarningLevel) -> None:
        self._apply(warning_level=level)

    def set_direction(self, direction: Direction) -> None:
        self._apply(direction=direction)

    def set_style(self, style: TimerStyle) -> None:
        """Swap the colours/size.  Always repaints."""
        self._style = style
        self._request = replace(self._request, style=style)
        self.setMinimumSize(int(style.size), int(style.size))
        self.update()

    def bind_engine(self, engine: CountdownEngine) -> None:
        """Follow *engine*: progress, run state, level and label."""
        self.unbind_engine()
        self._engine = engine
        engine.state_changed.connect(self._sync_from_engine)
        logger.debug("timer widget bound to %ss countdown", engine.total_duration)
        self._sync_from_engine()

    def unbind_engine(self) -> None:
        if self._engine is None:
            return
        self._engine.state_changed.disconnect(self._sync_from_engine)
        self._engine = None

    def dispose(self) -> None:
        """Stop the pulse and let go of the engine."""
        self._disposed = True
        self._set_pulsing(False)
        self.unbind_engine()

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _sync_from_engine(self) -> None:
        engine = self._engine
        if engine is None:
            return
        self._apply(
            progress=max(0.0, min(1.0, engine.progress)),
            is_active=engine.is_active,
            warning_level=engine.warning_level,
            label=engine.formatted_time,
        )

    def _on_pulse(self, value: object) -> None:
        self._pulse_value = max(0.0, min(1.0, float(value)))  # type: ignore[arg-type]
        self._apply()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _glowing(self, request: RenderRequest) -> bool:
        return request.is_active and request.warning_level != WarningLevel.NORMAL

    def _apply(self, **changes: object) -> None:
        """Build the next request and repaint only if it looks different."""
        candidate = replace(self._request, **changes)
        # The pulse only shows while glowing; pin it otherwise so an idle
        # face does not repaint every animation frame.
        phase = self._pulse_value if self._glowing(candidate) else 0.0
        candidate = replace(candidate, animation_value=phase)
        if should_repaint(self._request, candidate):
            self._request = candidate
            self.update()
        self._set_pulsing(self._glowing(candidate) and not self._disposed)

    def _set_pulsing(self, on: bool) -> None:
        if on == self._pulsing:
            return
        self._pulsing = on
        if on:
            self._pulse.start()
        else:
            self._pulse.stop()
            self._pulse_value = 0.0

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        size = self._style.size
        painter = QPainter(self)
        painter.translate((self.width() - size) / 2, (self.height() - size) / 2)
        paint_primitives(painter, render(self._request))
        painter.end()
