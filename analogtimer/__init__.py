"""Analog countdown timer component for PyQt6.

Simple usage with just a progress value::

    widget = AnalogTimerWidget(progress=0.75)

Driven by a countdown::

    engine = CountdownEngine(5 * 60, warning_threshold=0.3,
                             critical_threshold=0.1)
    engine.on_expired = lambda: print("Time expired!")
    widget = AnalogTimerWidget()
    widget.bind_engine(engine)
    engine.start()
"""

from .config import (
    Direction,
    RenderRequest,
    TimerConfigError,
    TimerState,
    TimerStyle,
    WarningConfig,
    WarningLevel,
)
from .timer import CountdownEngine
from .ui import AnalogTimerWidget, paint_primitives, render, should_repaint

__version__ = "0.1.0"

__all__ = [
    "AnalogTimerWidget",
    "CountdownEngine",
    "Direction",
    "RenderRequest",
    "TimerConfigError",
    "TimerState",
    "TimerStyle",
    "WarningConfig",
    "WarningLevel",
    "paint_primitives",
    "render",
    "should_repaint",
]
