"""Shared pytest fixtures for Countdown tests."""

import sys
import time
import pytest

from PyQt6.QtCore import QCoreApplication

from countdown.timer.engine import CountdownTimer

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def host_zone(monkeypatch):
    """Switch the process-local time zone by name for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def set_zone(name):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield set_zone
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def clock():
    """Wall clock frozen on a whole second; advance it by hand."""
    return FakeClock()


@pytest.fixture
def timer(qapp, clock):
    """Fresh 10 s countdown in mm:ss, decreasing."""
    t = CountdownTimer(time_stamp=10_000, clock=clock)
    yield t
    t.reset()


@pytest.fixture
def timer_up(qapp, clock):
    """Fresh 3 s count-up timer rendering seconds only."""
    t = CountdownTimer(time_stamp=3_000, format="ss", mode="inc", clock=clock)
    yield t
    t.reset()
