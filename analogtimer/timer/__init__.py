"""Timer package."""

from .engine import (
    CountdownEngine,
    TICK_INTERVAL_MS,
    MAX_EXTENSION_FACTOR,
)

__all__ = [
    "CountdownEngine",
    "TICK_INTERVAL_MS",
    "MAX_EXTENSION_FACTOR",
]
