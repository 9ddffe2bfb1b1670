"""Counting modes and lifecycle statuses for the countdown timer."""

from __future__ import annotations

from enum import Enum

from .errors import InvalidOptionError


class TimerStatus(Enum):
    PREPARED = "prepare"
    RUNNING = "processing"
    PAUSED = "stopped"
    FINISHED = "finished"


class TimerMode(Enum):
    INCREASING = "+"
    DECREASING = "-"

    @classmethod
    def parse(cls, value: TimerMode | str) -> TimerMode:
        """Resolve a mode or one of its aliases (see ``MODE_ALIASES``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in MODE_ALIASES:
                return MODE_ALIASES[key]
        raise InvalidOptionError(
            f"unknown timer mode {value!r}, expected one of "
            f"{', '.join(sorted(MODE_ALIASES))}"
        )


# Misspellings are historical option values and stay accepted.
MODE_ALIASES: dict[str, TimerMode] = {
    "+": TimerMode.INCREASING,
    "inc": TimerMode.INCREASING,
    "increse": TimerMode.INCREASING,
    "plus": TimerMode.INCREASING,
    "asc": TimerMode.INCREASING,
    "-": TimerMode.DECREASING,
    "dec": TimerMode.DECREASING,
    "decrese": TimerMode.DECREASING,
    "reduce": TimerMode.DECREASING,
    "desc": TimerMode.DECREASING,
}
