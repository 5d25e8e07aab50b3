"""UI package."""

from .render import (
    Circle,
    Line,
    Primitive,
    Sector,
    Text,
    progress_color,
    render,
    should_repaint,
)
from .painting import paint_primitives
from .timer_widget import AnalogTimerWidget

__all__ = [
    "AnalogTimerWidget",
    "Circle",
    "Line",
    "Primitive",
    "Sector",
    "Text",
    "paint_primitives",
    "progress_color",
    "render",
    "should_repaint",
]
