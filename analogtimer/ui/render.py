"""Pure renderer for the analog timer face.

``render(request)`` turns a ``RenderRequest`` into an ordered list of
drawing primitives.  Nothing here touches a paint device, so the same
request always yields the same list:

- 60 interval marks around the rim, every 5th one major.
- Constant-colour outer ring.
- Filled sector from 12 o'clock showing the time left, coloured by
  progress through the warning colour stops.
- Pulsing glow while running in the warning or critical band.
- Thin inner ring, then the label (or a centre dot when there is none).

``paint_primitives`` in ``painting.py`` replays the list on a QPainter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from PyQt6.QtGui import QColor

from ..config import Direction, RenderRequest, TimerStyle, WarningLevel


# ── geometry constants ──────────────────────────────────────────────────────

RIM_MARGIN = 15          # space left outside the ring for interval marks
MARK_OFFSET = 10         # interval marks sit this far outside the ring
FILL_INSET = 3           # fill sector is slightly inside the ring
RING_WIDTH = 6
INNER_RING_WIDTH = 1
GLOW_WIDTH = 8
GLOW_BLUR = 4
CENTER_DOT_RADIUS = 4

MARK_COUNT = 60
MAJOR_EVERY = 5
MINOR_MARK = (4.0, 1.5)  # (length, width)
MAJOR_MARK = (8.0, 2.5)

START_ANGLE = -math.pi / 2  # 12 o'clock, y axis pointing down

Point = tuple[float, float]


# ── primitives ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: QColor
    width: float
    major: bool = False


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    color: QColor
    filled: bool = False
    width: float = 0.0
    blur: float = 0.0


@dataclass(frozen=True)
class Sector:
    """Filled pie slice.  Angles are radians, positive sweep is clockwise."""

    center: Point
    radius: float
    start_angle: float
    sweep_angle: float
    color: QColor


@dataclass(frozen=True)
class Text:
    center: Point
    text: str
    color: QColor
    size: float
    bold: bool = True
    family: str = "monospace"


Primitive = Union[Line, Circle, Sector, Text]


# ── helpers ──────────────────────────────────────────────────────────────────

def _lerp_color(c1: QColor, c2: QColor, t: float) -> QColor:
    """Linearly interpolate between two QColors."""
    t = max(0.0, min(1.0, t))
    return QColor(
        int(c1.red()   + (c2.red()   - c1.red())   * t),
        int(c1.green() + (c2.green() - c1.green()) * t),
        int(c1.blue()  + (c2.blue()  - c1.blue())  * t),
        int(c1.alpha() + (c2.alpha() - c1.alpha()) * t),
    )


def progress_color(progress: float, style: TimerStyle) -> QColor:
    """Fill colour for *progress* under *style*.

    An explicit ``progress_color`` wins, then the plain normal colour when
    warning colours are off.  Otherwise the colour blends across three
    stops keyed by the warning thresholds.
    """
    if style.progress_color is not None:
        return QColor(style.progress_color)

    colors = style.warning_colors
    if not style.enable_warning_colors:
        return QColor(colors.normal_color)

    critical = colors.critical_threshold
    warning = colors.warning_threshold
    if progress < critical:
        return QColor(colors.critical_color)
    if progress < warning:
        t = (progress - critical) / (warning - critical)
        return _lerp_color(colors.critical_color, colors.warning_color, t)
    if warning >= 1.0:
        return QColor(colors.warning_color)
    t = (progress - warning) / (1.0 - warning)
    return _lerp_color(colors.warning_color, colors.normal_color, t)


def sweep_angle(progress: float, direction: Direction) -> float:
    angle = 2 * math.pi * progress
    return angle if direction == Direction.CLOCKWISE else -angle


def _interval_marks(
    center: Point, radius: float, style: TimerStyle,
) -> list[Line]:
    cx, cy = center
    marks: list[Line] = []
    for i in range(MARK_COUNT):
        angle = math.radians(i * 6) + START_ANGLE
        major = i % MAJOR_EVERY == 0
        length, width = MAJOR_MARK if major else MINOR_MARK
        color = style.major_interval_color if major else style.interval_color
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        marks.append(Line(
            start=(cx + (radius - length) * cos_a, cy + (radius - length) * sin_a),
            end=(cx + radius * cos_a, cy + radius * sin_a),
            color=QColor(color),
            width=width,
            major=major,
        ))
    return marks


# ── public API ───────────────────────────────────────────────────────────────


def render(request: RenderRequest) -> list[Primitive]:
    """Primitives for one frame, in paint order."""
    style = request.style
    center = (style.size / 2, style.size / 2)
    radius = style.size / 2 - RIM_MARGIN
    fill_radius = radius - FILL_INSET

    primitives: list[Primitive] = []
    primitives.extend(_interval_marks(center, radius + MARK_OFFSET, style))

    primitives.append(Circle(
        center, radius, QColor(style.circle_color), width=RING_WIDTH,
    ))

    fill_color = progress_color(request.progress, style)
    if request.progress > 0:
        primitives.append(Sector(
            center,
            fill_radius,
            START_ANGLE,
            sweep_angle(request.progress, request.direction),
            fill_color,
        ))

    if request.is_active and request.warning_level != WarningLevel.NORMAL:
        glow = QColor(fill_color)
        glow.setAlphaF(0.3 + 0.3 * request.animation_value)
        primitives.append(Circle(
            center, radius, glow, width=GLOW_WIDTH, blur=GLOW_BLUR,
        ))

    primitives.append(Circle(
        center, fill_radius, QColor(style.circle_color), width=INNER_RING_WIDTH,
    ))

    if request.label:
        primitives.append(Text(
            center,
            request.label,
            QColor(style.time_text_color),
            style.time_text_size,
        ))
    else:
        primitives.append(Circle(
            center, CENTER_DOT_RADIUS, QColor(style.circle_color), filled=True,
        ))

    return primitives


def should_repaint(
    previous: Optional[RenderRequest], current: RenderRequest,
) -> bool:
    """True unless the clock-driven fields of both requests match."""
    if previous is None:
        return True
    return (
        previous.progress != current.progress
        or previous.is_active != current.is_active
        or previous.warning_level != current.warning_level
        or previous.animation_value != current.animation_value
        or previous.label != current.label
        or previous.direction != current.direction
    )
