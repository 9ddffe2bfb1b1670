"""Timer options: immutable defaults, merging and JSON persistence.

Options are stored at:
    ~/.config/countdown/options.json

Defaults are a value, not a shared mutable object.  Updating them produces
a new ``TimerOptions``; timers already built keep the options they merged
at construction.

Usage::

    defaults = configure(DEFAULT_OPTIONS, format="hh:mm:ss")
    timer = CountdownTimer(defaults=defaults, time_stamp=90_000)

    save_options(defaults)
    defaults = load_options()
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields, replace
from datetime import timedelta
from pathlib import Path

from .formatting import DEFAULT_FORMAT
from .modes import TimerMode


CONFIG_DIR = Path.home() / ".config" / "countdown"
OPTIONS_PATH = CONFIG_DIR / "options.json"


@dataclass(frozen=True)
class TimerOptions:
    """Everything a ``CountdownTimer`` can be configured with."""

    time_stamp: int | float | str | timedelta | None = None  # ms, required
    format: str = DEFAULT_FORMAT
    mode: TimerMode | str = TimerMode.DECREASING
    debug: bool = False
    name: str = "timer"                  # logger namespace
    record_on_stop: bool = False         # stop() also appends a lap


DEFAULT_OPTIONS = TimerOptions()


def configure(defaults: TimerOptions = DEFAULT_OPTIONS, **overrides) -> TimerOptions:
    """Shallow-merge *overrides* over *defaults* and return the result.

    Unknown option names raise ``TypeError``.
    """
    return replace(defaults, **overrides)


def option_names() -> frozenset[str]:
    return frozenset(f.name for f in fields(TimerOptions))


def load_options(path: Path | None = None) -> TimerOptions:
    """Load options from disk, falling back to defaults."""
    path = path or OPTIONS_PATH
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                # Only use keys that exist in the dataclass
                valid_keys = option_names()
                filtered = {k: v for k, v in data.items() if k in valid_keys}
                return TimerOptions(**filtered)
    except (OSError, ValueError):
        pass
    return DEFAULT_OPTIONS


def save_options(options: TimerOptions, path: Path | None = None) -> None:
    """Write options to disk as JSON."""
    path = path or OPTIONS_PATH
    data = asdict(options)
    if isinstance(options.mode, TimerMode):
        data["mode"] = options.mode.value
    if isinstance(options.time_stamp, timedelta):
        data["time_stamp"] = int(options.time_stamp.total_seconds() * 1000)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
