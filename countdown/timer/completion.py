"""One-shot completion handle returned by ``CountdownTimer.start``.

A ``Completion`` settles exactly once: resolved with
``TimerStatus.FINISHED`` when the countdown runs out, or rejected with the
status that interrupted it (``PAUSED`` after ``stop()``, ``PREPARED`` after
``reset()``).  Later ``resolve``/``reject`` calls are ignored.

Signals
-------
resolved(status)   the run finished.
rejected(status)   the run was interrupted.
settled(status)    emitted after either of the above.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QEventLoop, QObject, QTimer, pyqtSignal

from ..modes import TimerStatus

StatusCallback = Callable[[TimerStatus], None]


class Completion(QObject):

    resolved = pyqtSignal(object)
    rejected = pyqtSignal(object)
    settled = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._done: bool = False
        self._succeeded: bool = False
        self._status: TimerStatus | None = None

    @property
    def done(self) -> bool:
        return self._done

    @property
    def succeeded(self) -> bool:
        """True only once resolved; False while pending or if rejected."""
        return self._succeeded

    @property
    def status(self) -> TimerStatus | None:
        """The status the completion settled with, ``None`` while pending."""
        return self._status

    def resolve(self, status: TimerStatus) -> bool:
        """Settle positively.  Returns False if already settled."""
        if self._done:
            return False
        self._settle(status, succeeded=True)
        self.resolved.emit(status)
        self.settled.emit(status)
        return True

    def reject(self, status: TimerStatus) -> bool:
        """Settle negatively.  Returns False if already settled."""
        if self._done:
            return False
        self._settle(status, succeeded=False)
        self.rejected.emit(status)
        self.settled.emit(status)
        return True

    def then(
        self,
        on_resolved: StatusCallback | None = None,
        on_rejected: StatusCallback | None = None,
    ) -> Completion:
        """Run a callback on settlement, right away if already settled."""
        if self._done:
            callback = on_resolved if self._succeeded else on_rejected
            if callback is not None:
                callback(self._status)
            return self
        if on_resolved is not None:
            self.resolved.connect(on_resolved)
        if on_rejected is not None:
            self.rejected.connect(on_rejected)
        return self

    def wait(self, timeout_ms: int | None = None) -> TimerStatus | None:
        """Spin a local event loop until settled or *timeout_ms* elapses.

        Returns the settled status, or ``None`` on timeout.
        """
        if self._done:
            return self._status

        loop = QEventLoop()
        quit_loop = lambda _status: loop.quit()  # noqa: E731
        self.settled.connect(quit_loop)
        guard: QTimer | None = None
        if timeout_ms is not None:
            guard = QTimer()
            guard.setSingleShot(True)
            guard.timeout.connect(loop.quit)
            guard.start(timeout_ms)
        try:
            loop.exec()
        finally:
            self.settled.disconnect(quit_loop)
            if guard is not None:
                guard.stop()
        return self._status

    def _settle(self, status: TimerStatus, *, succeeded: bool) -> None:
        self._done = True
        self._succeeded = succeeded
        self._status = status

    def __repr__(self) -> str:
        if not self._done:
            return "<Completion pending>"
        outcome = "resolved" if self._succeeded else "rejected"
        return f"<Completion {outcome} {self._status.name}>"
