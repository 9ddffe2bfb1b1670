"""Countdown: a drift-correcting one-second timer with token formatting."""

from .errors import (
    CountdownError,
    InvalidInputError,
    InvalidOptionError,
    InvalidStateError,
    MissingRequiredOptionError,
)
from .formatting import DateFields, get_fields, to_string
from .modes import MODE_ALIASES, TimerMode, TimerStatus
from .settings import DEFAULT_OPTIONS, TimerOptions, configure
from .timer import Completion, CountdownTimer, TimerFactory, TimerSnapshot

__version__ = "0.1.0"

__all__ = [
    "CountdownError",
    "InvalidInputError",
    "InvalidOptionError",
    "InvalidStateError",
    "MissingRequiredOptionError",
    "DateFields",
    "get_fields",
    "to_string",
    "MODE_ALIASES",
    "TimerMode",
    "TimerStatus",
    "DEFAULT_OPTIONS",
    "TimerOptions",
    "configure",
    "Completion",
    "CountdownTimer",
    "TimerFactory",
    "TimerSnapshot",
]
