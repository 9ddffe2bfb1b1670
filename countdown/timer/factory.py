"""Timer factory bound to a baseline of default options."""

from __future__ import annotations

import time
from typing import Callable

from PyQt6.QtCore import QObject

from ..settings import DEFAULT_OPTIONS, TimerOptions, configure
from .engine import CountdownTimer


class TimerFactory:
    """Builds timers from a fixed set of defaults.

    ``configure`` returns a new factory; timers built earlier, and the
    factory they came from, are unaffected.
    """

    def __init__(
        self,
        defaults: TimerOptions = DEFAULT_OPTIONS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._defaults = defaults
        self._clock = clock

    @property
    def defaults(self) -> TimerOptions:
        return self._defaults

    def configure(self, **overrides) -> TimerFactory:
        return TimerFactory(configure(self._defaults, **overrides), clock=self._clock)

    def create(self, parent: QObject | None = None, **options) -> CountdownTimer:
        return CountdownTimer(
            parent, defaults=self._defaults, clock=self._clock, **options
        )
