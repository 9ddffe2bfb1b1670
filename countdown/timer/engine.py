"""Drift-correcting countdown timer.

States
------
PREPARED    Built or reset, waiting for ``start``.
RUNNING     Ticking once per second.
PAUSED      Interrupted by ``stop``; the run is over until ``reset``.
FINISHED    Remaining time reached zero.

Transitions
-----------
PREPARED → RUNNING                (start)
RUNNING → FINISHED                (tick reaches zero)
RUNNING → PAUSED                  (stop)
PAUSED | FINISHED → PREPARED      (reset)

Drift correction
----------------
Every tick re-reads the wall clock.  When more real time has passed than
the tick count accounts for (the host slept, the event loop stalled), the
elapsed and remaining times are recomputed from the clock instead of being
stepped by one second.

Bookkeeping is always "remaining"; ``TimerMode`` only decides whether the
display shows the remaining or the elapsed time.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from ..errors import (
    CountdownError,
    InvalidOptionError,
    InvalidStateError,
    MissingRequiredOptionError,
)
from ..formatting import DateFields
from ..logger import Logger
from ..modes import TimerMode, TimerStatus
from ..settings import DEFAULT_OPTIONS, TimerOptions, configure
from .completion import Completion


# ── constants ─────────────────────────────────────────────────────────────

TICK_MS = 1000


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of a timer, handed to tick callbacks."""

    status: TimerStatus
    remaining_ms: int
    elapsed_ms: int
    datetime: str
    fields: dict[str, str]
    laps: tuple[str, ...]


TickCallback = Callable[[TimerSnapshot], None]


# ── helpers ───────────────────────────────────────────────────────────────


def floor_duration(value: object) -> int:
    """Validate a ``time_stamp`` option and floor it to whole seconds (ms)."""
    if value is None or (not isinstance(value, bool) and not value):
        raise MissingRequiredOptionError("time_stamp")
    if isinstance(value, bool):
        raise InvalidOptionError(f"time_stamp must be a duration, got {value!r}")

    if isinstance(value, timedelta):
        ms: int | float = value.total_seconds() * 1000
    elif isinstance(value, str):
        try:
            ms = float(value.strip())
        except ValueError:
            raise InvalidOptionError(
                f"time_stamp must be numeric milliseconds, got {value!r}"
            ) from None
    elif isinstance(value, (int, float)):
        ms = value
    else:
        raise InvalidOptionError(
            f"time_stamp must be a duration, got {type(value).__name__}"
        )

    if not math.isfinite(ms) or ms < 0:
        raise InvalidOptionError(f"time_stamp must be positive, got {value!r}")

    floored = int(ms) // TICK_MS * TICK_MS
    if floored == 0:
        raise InvalidOptionError(
            f"time_stamp must be at least {TICK_MS}ms, got {value!r}"
        )
    return floored


def _local_utc_offset() -> timedelta:
    return datetime.now().astimezone().utcoffset() or timedelta(0)


# ── timer ─────────────────────────────────────────────────────────────────


class CountdownTimer(QObject):
    """Qt-based countdown/count-up timer with a one-second tick.

    Signals
    -------
    ticked(snapshot: TimerSnapshot)
        Emitted every tick, after the ``on_tick`` callback, unless the
        callback stopped or reset the timer.
    status_changed(new_status: TimerStatus)
        Emitted on every status write.
    recorded(lap: str)
        Emitted when ``record`` appends a lap.
    """

    ticked = pyqtSignal(object)
    status_changed = pyqtSignal(object)
    recorded = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        defaults: TimerOptions = DEFAULT_OPTIONS,
        clock: Callable[[], float] = time.time,
        **options,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._options: TimerOptions = configure(defaults, **options)
        self._logger = Logger(self._options.name, self._options.debug)
        try:
            self._duration_ms: int = floor_duration(self._options.time_stamp)
            self._mode: TimerMode = TimerMode.parse(self._options.mode)
            if not isinstance(self._options.format, str):
                raise InvalidOptionError(
                    f"format must be a string, got {self._options.format!r}"
                )
        except CountdownError as exc:
            self._logger.error(exc)
            raise
        self._clock = clock

        # captured once; the display never depends on it mid-run
        offset = _local_utc_offset()
        self._time_zone_offset_ms: int = int(offset.total_seconds() * 1000)

        # ── run state ─────────────────────────────────────────────────
        self._status: TimerStatus = TimerStatus.PREPARED
        self._remaining_ms: int = self._duration_ms
        self._elapsed_ms: int = 0
        self._laps: list[str] = []
        self._callback: TickCallback | None = None
        self._completion: Completion | None = None

        # ── wall-clock anchors (whole seconds, epoch ms) ──────────────
        self._started_at_ms: int | None = None
        self._paused_at_ms: int | None = None
        self._deadline_ms: int | None = None
        self._last_observed_ms: int | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setSingleShot(True)
        self._qt_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._qt_timer.setInterval(TICK_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        self._display: DateFields = self._format_display()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def options(self) -> TimerOptions:
        return self._options

    @property
    def status(self) -> TimerStatus:
        return self._status

    @property
    def datetime(self) -> str:
        """The current display string, e.g. ``"04:59"``."""
        return str(self._display)

    @property
    def fields(self) -> dict[str, str]:
        """The current display split into fields (only those in ``format``)."""
        return self._display.fields

    @property
    def time_stamp(self) -> object:
        """The duration exactly as configured."""
        return self._options.time_stamp

    @property
    def duration_ms(self) -> int:
        """The configured duration floored to whole seconds."""
        return self._duration_ms

    @property
    def format(self) -> str:
        return self._options.format

    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def debug(self) -> bool:
        return self._logger.debug

    @property
    def remaining_ms(self) -> int:
        return self._remaining_ms

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    @property
    def laps(self) -> tuple[str, ...]:
        return tuple(self._laps)

    @property
    def started_at_ms(self) -> int | None:
        return self._started_at_ms

    @property
    def paused_at_ms(self) -> int | None:
        return self._paused_at_ms

    @property
    def deadline_ms(self) -> int | None:
        return self._deadline_ms

    @property
    def last_observed_ms(self) -> int | None:
        return self._last_observed_ms

    @property
    def time_zone_offset_ms(self) -> int:
        return self._time_zone_offset_ms

    @property
    def is_running(self) -> bool:
        return self._status == TimerStatus.RUNNING

    @property
    def is_scheduled(self) -> bool:
        """True while a tick is pending."""
        return self._qt_timer.isActive()

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            status=self._status,
            remaining_ms=self._remaining_ms,
            elapsed_ms=self._elapsed_ms,
            datetime=self.datetime,
            fields=self.fields,
            laps=self.laps,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, on_tick: TickCallback | None = None) -> Completion:
        """Start counting.  Only valid from PREPARED.

        *on_tick* is called with a :class:`TimerSnapshot` once per tick.
        The returned :class:`Completion` resolves with FINISHED, or is
        rejected with the interrupting status after ``stop``/``reset``.
        """
        if self._status != TimerStatus.PREPARED:
            raise InvalidStateError("start", self._status.name)
        if on_tick is not None and not callable(on_tick):
            raise TypeError(f"on_tick must be callable, got {on_tick!r}")

        self._callback = on_tick
        self._completion = Completion()

        # anchored on the second the first tick will land on
        self._started_at_ms = self._timestamp() + TICK_MS
        self._deadline_ms = self._started_at_ms + self._remaining_ms

        self._set_status(TimerStatus.RUNNING)
        self._qt_timer.start()
        self._logger.log("started, deadline", self._deadline_ms)
        return self._completion

    def record(self) -> CountdownTimer:
        """Append the current display string to ``laps``."""
        lap = self.datetime
        self._laps.append(lap)
        self.recorded.emit(lap)
        return self

    def stop(self) -> CountdownTimer:
        """Interrupt the run.  Safe to call in any status."""
        self._qt_timer.stop()
        self._set_status(TimerStatus.PAUSED)
        self._paused_at_ms = self._timestamp()
        if self._options.record_on_stop:
            self.record()
        self._reject_pending()
        return self

    def reset(self) -> CountdownTimer:
        """Return to PREPARED with the full duration and no laps."""
        self._qt_timer.stop()
        self._laps.clear()
        self._callback = None
        self._set_status(TimerStatus.PREPARED)

        self._remaining_ms = self._duration_ms
        self._elapsed_ms = 0
        self._started_at_ms = None
        self._paused_at_ms = None
        self._deadline_ms = None
        self._last_observed_ms = None

        self._display = self._format_display()
        self._reject_pending()
        return self

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if self._status != TimerStatus.RUNNING:
            self._reject_pending()
            return

        now = self._timestamp()
        self._last_observed_ms = now
        self._logger.log("elapsed", f"{self._elapsed_ms // TICK_MS + 1}s")

        if now > self._started_at_ms + self._elapsed_ms:
            self._logger.log(
                "clock ran ahead by",
                f"{now - self._started_at_ms - self._elapsed_ms}ms,",
                "resyncing from wall clock",
            )
            self._elapsed_ms = now - self._started_at_ms + TICK_MS
            self._remaining_ms = self._duration_ms - self._elapsed_ms
        else:
            self._remaining_ms -= TICK_MS
            self._elapsed_ms += TICK_MS

        if self._remaining_ms < 0:
            self._remaining_ms = 0
            self._elapsed_ms = self._deadline_ms - self._started_at_ms

        self._display = self._format_display()

        snapshot = self.snapshot()
        if self._callback is not None:
            try:
                self._callback(snapshot)
            except BaseException:
                # the run goes on; the error is the host's to handle
                if self._status == TimerStatus.RUNNING:
                    self._advance(now)
                raise

        # the callback may have stopped or reset us
        if self._status != TimerStatus.RUNNING:
            return
        self.ticked.emit(snapshot)

        if self._status == TimerStatus.RUNNING:
            self._advance(now)

    def _advance(self, now: int) -> None:
        """Finish the run, or schedule the next tick."""
        if self._remaining_ms == 0 or now >= self._deadline_ms - TICK_MS:
            self._finish()
        else:
            self._qt_timer.start()

    def _finish(self) -> None:
        self._qt_timer.stop()
        self._set_status(TimerStatus.FINISHED)
        self._logger.log("finished")
        if self._completion is not None:
            self._completion.resolve(TimerStatus.FINISHED)

    def _reject_pending(self) -> None:
        if self._completion is not None:
            self._completion.reject(self._status)

    def _format_display(self) -> DateFields:
        if self._mode == TimerMode.INCREASING:
            value = self._duration_ms - self._remaining_ms
        else:
            value = self._remaining_ms
        # viewed in UTC: the local view shifted back by the host offset,
        # with Y/M/D counted from 1970-01-01 in every zone
        return DateFields(value, self._options.format, timezone.utc)

    def _timestamp(self) -> int:
        """Wall-clock now in epoch ms, truncated to the second."""
        return int(self._clock() * 1000) // TICK_MS * TICK_MS

    def _set_status(self, new_status: TimerStatus) -> None:
        self._status = new_status
        self.status_changed.emit(new_status)

    def __repr__(self) -> str:
        return (
            f"<CountdownTimer {self._status.name} {self.datetime!r} "
            f"remaining={self._remaining_ms}ms>"
        )
