"""Timer package."""

from .completion import Completion
from .engine import (
    CountdownTimer,
    TimerSnapshot,
    TICK_MS,
    floor_duration,
)
from .factory import TimerFactory
from ..modes import TimerMode, TimerStatus, MODE_ALIASES

__all__ = [
    "Completion",
    "CountdownTimer",
    "TimerSnapshot",
    "TimerFactory",
    "TimerMode",
    "TimerStatus",
    "MODE_ALIASES",
    "TICK_MS",
    "floor_duration",
]
