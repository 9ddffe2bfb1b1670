"""Namespaced debug logger shared by the timer and the formatter.

``Logger.log`` is chatty tracing and only reaches the ``logging`` tree when
the instance's debug flag is on; ``Logger.error`` always does.
"""

from __future__ import annotations

import logging

ROOT_NAMESPACE = "countdown"


class Logger:
    def __init__(self, name: str = "timer", debug: bool = False) -> None:
        self._name = name
        self._debug = bool(debug)
        self._logger = logging.getLogger(f"{ROOT_NAMESPACE}.{name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = bool(value)

    def log(self, *args: object) -> None:
        if not self._debug:
            return
        self._logger.debug(" ".join(str(a) for a in args))

    def error(self, *args: object) -> None:
        self._logger.error(" ".join(str(a) for a in args))
