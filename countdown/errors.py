"""Exception types raised by the countdown package."""

from __future__ import annotations


class CountdownError(Exception):
    """Base class for every error raised by this package."""


class MissingRequiredOptionError(CountdownError, ValueError):
    """Raised when a timer is built without its ``time_stamp`` option."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"require {option} option param, please check")


class InvalidOptionError(CountdownError, ValueError):
    """Raised when an option is present but cannot be used."""


class InvalidInputError(CountdownError, TypeError):
    """Raised when the formatter is handed something that is not a time."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"cannot format {type(value).__name__} value {value!r} as a date"
        )


class InvalidStateError(CountdownError, RuntimeError):
    """Raised on an operation the timer's current status does not allow."""

    def __init__(self, operation: str, status: object) -> None:
        self.operation = operation
        self.status = status
        super().__init__(f"cannot {operation}() while timer is {status}")
