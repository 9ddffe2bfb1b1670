"""Console countdown: python -m countdown 5m --format mm:ss"""

from __future__ import annotations

import argparse
import logging
import re
import signal
import sys
from pathlib import Path

from PyQt6.QtCore import QCoreApplication, QTimer

from . import __version__ as VERSION
from .errors import CountdownError
from .modes import MODE_ALIASES
from .settings import configure, load_options
from .timer.engine import CountdownTimer, TimerSnapshot

_DURATION_RE = re.compile(r"^(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s?)?$")


def parse_duration(text: str) -> int:
    """``"90"``, ``"90s"``, ``"5m"``, ``"1h30m"`` or ``"2500ms"`` → milliseconds."""
    text = text.strip().lower()
    if text.endswith("ms") and text[:-2].isdigit():
        return int(text[:-2])
    matched = _DURATION_RE.match(text)
    if not text or matched is None:
        raise argparse.ArgumentTypeError(f"invalid duration: {text!r}")
    hours, minutes, seconds = (int(matched.group(k) or 0) for k in ("h", "m", "s"))
    return ((hours * 60 + minutes) * 60 + seconds) * 1000


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="countdown", description="Count down (or up) in the terminal.")
    p.add_argument("duration", type=parse_duration,
                   help="Duration: 90, 90s, 5m, 1h30m or 2500ms")
    p.add_argument("--format", type=str, default=None,
                   help="Display template using Y M D h m s S tokens (default: mm:ss)")
    p.add_argument("--mode", type=str, default=None, choices=sorted(MODE_ALIASES),
                   help="Count direction (default: -, counting down)")
    p.add_argument("--config", type=Path, default=None,
                   help="JSON options file used as defaults")
    p.add_argument("--debug", action="store_true", help="Log every tick")
    p.add_argument("--version", action="version", version=f"countdown {VERSION}")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    defaults = load_options(args.config)
    overrides = {k: v for k, v in (("format", args.format), ("mode", args.mode)) if v is not None}
    if args.debug:
        overrides["debug"] = True
    defaults = configure(defaults, **overrides)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    try:
        timer = CountdownTimer(defaults=defaults, time_stamp=args.duration)
    except CountdownError as exc:
        print(f"countdown: {exc}", file=sys.stderr)
        return 2

    def show(snapshot: TimerSnapshot) -> None:
        print(f"\r{snapshot.datetime}", end="", flush=True)

    outcome: dict[str, int] = {}

    def done(code: int, label: str) -> None:
        print(f"\n{label}", flush=True)
        outcome["code"] = code
        app.quit()

    # Python only sees SIGINT while the interpreter runs, so wake it up
    previous_handler = signal.signal(signal.SIGINT, lambda *_: timer.stop())
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(200)

    print(timer.datetime, end="", flush=True)
    timer.start(show).then(
        lambda _status: done(0, "finished"),
        lambda _status: done(1, "interrupted"),
    )
    app.exec()
    heartbeat.stop()
    signal.signal(signal.SIGINT, previous_handler)
    return outcome.get("code", 1)


if __name__ == "__main__":
    sys.exit(main())
