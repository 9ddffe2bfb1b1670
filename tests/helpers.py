"""Shared test helpers for Countdown."""

from countdown.timer.engine import CountdownTimer


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    @property
    def last(self):
        return self.items[-1] if self.items else None


class FakeClock:
    """Callable wall clock in epoch seconds, moved only by ``advance``."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


class SteppingClock(FakeClock):
    """Clock that moves forward one second every time it is read."""

    def __call__(self) -> float:
        now = self.now
        self.now += 1.0
        return now


def tick(timer: CountdownTimer, clock: FakeClock, seconds: float = 1.0) -> None:
    """Let *seconds* of wall time pass, then fire the pending tick."""
    clock.advance(seconds)
    # fire by hand: the single-shot timer is consumed as if it had timed out
    timer._qt_timer.stop()
    timer._on_tick()


def run_to_end(timer: CountdownTimer, clock: FakeClock, limit: int = 1000) -> int:
    """Tick once per second until the timer stops running; return tick count."""
    count = 0
    while timer.is_running and count < limit:
        tick(timer, clock)
        count += 1
    return count
