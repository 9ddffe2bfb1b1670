"""Token-based date field formatting.

A value is read as a moment measured from epoch zero, so a plain duration
in milliseconds comes out with calendar-style fields: ``90_000`` with
``"mm:ss"`` viewed in UTC renders as ``"01:30"``.

Tokens
------
Y  years since epoch zero      h  hour
M  months since epoch zero     m  minute
D  days since epoch zero       s  second
                               S  millisecond

Y, M and D subtract the matching field of epoch zero seen in the same
zone, so ``0`` has zero Y/M/D everywhere.  h, m, s and S are read as is.

A token may repeat (``hh``, ``SSS``).  The run length is a minimum width:
shorter values are left-padded with ``0``, longer values are never cut.
Only the leftmost run of each token is substituted.  Any other character
is copied through unchanged.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone, tzinfo

from ..errors import InvalidInputError
from ..logger import Logger

DEFAULT_FORMAT = "mm:ss"

# token letter → field name, in substitution order
DATETIME_PATTERN: dict[str, str] = {
    "Y": "year",
    "M": "month",
    "D": "date",
    "h": "hour",
    "m": "minute",
    "s": "second",
    "S": "millisecond",
}

_TOKEN_RUNS: dict[str, re.Pattern[str]] = {
    token: re.compile(re.escape(token) + "+") for token in DATETIME_PATTERN
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_logger = Logger("format-date")


def _as_datetime(value: object, tz: tzinfo | None) -> datetime:
    """Return *value* as a datetime whose wall-clock fields are in *tz*.

    ``tz=None`` means the host's local zone.
    """
    if isinstance(value, bool) or not isinstance(
        value, (int, float, str, datetime, date, timedelta)
    ):
        _logger.error("require date option param, please check:", repr(value))
        raise InvalidInputError(value)

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            _logger.error("unparseable date string:", repr(value))
            raise InvalidInputError(value) from exc

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value if tz is None else value.replace(tzinfo=tz)
        return value.astimezone(tz)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)

    try:
        if isinstance(value, timedelta):
            moment = _EPOCH + value
        else:
            if not math.isfinite(value):
                raise InvalidInputError(value)
            moment = _EPOCH + timedelta(milliseconds=value)
        return moment.astimezone(tz)
    except (OverflowError, OSError) as exc:
        _logger.error("date value out of range:", repr(value))
        raise InvalidInputError(value) from exc


def get_fields(
    value: object,
    fmt: str = DEFAULT_FORMAT,
    tz: tzinfo | None = None,
) -> dict[str, str]:
    """Split *value* into the padded fields that *fmt* asks for.

    Returns a mapping of field name (``"minute"``, ``"second"``, ...) to
    its string form.  Fields whose token is not in *fmt* are left out.

    Raises :class:`InvalidInputError` if *value* is not a number (epoch
    ms), ISO string, ``datetime``/``date`` or ``timedelta``.
    """
    moment = _as_datetime(value, tz)
    epoch = _EPOCH.astimezone(tz)
    raw = {
        "Y": moment.year - epoch.year,
        "M": moment.month - epoch.month,
        "D": moment.day - epoch.day,
        "h": moment.hour,
        "m": moment.minute,
        "s": moment.second,
        "S": moment.microsecond // 1000,
    }

    fields: dict[str, str] = {}
    for token, name in DATETIME_PATTERN.items():
        matched = _TOKEN_RUNS[token].search(fmt)
        if matched is None:
            continue
        # rjust never truncates: an overflowing value keeps all its digits
        fields[name] = str(raw[token]).rjust(len(matched.group()), "0")
    return fields


def to_string(
    value_or_fields: object,
    fmt: str = DEFAULT_FORMAT,
    tz: tzinfo | None = None,
) -> str:
    """Render *fmt* with the fields of *value_or_fields*.

    A mapping is taken as an already computed field map (see
    :func:`get_fields`); anything else is converted first.
    """
    if isinstance(value_or_fields, Mapping):
        fields = value_or_fields
    else:
        fields = get_fields(value_or_fields, fmt, tz)

    text = fmt
    for token, name in DATETIME_PATTERN.items():
        if name not in fields:
            continue
        replacement = str(fields[name])
        text = _TOKEN_RUNS[token].sub(lambda _m: replacement, text, count=1)
    return text


class DateFields:
    """A value bound to a format, with its fields computed once."""

    def __init__(
        self,
        value: object,
        fmt: str = DEFAULT_FORMAT,
        tz: tzinfo | None = None,
    ) -> None:
        self._value = value
        self._format = fmt
        self._tz = tz
        self._fields = get_fields(value, fmt, tz)

    @property
    def value(self) -> object:
        return self._value

    @property
    def format(self) -> str:
        return self._format

    @property
    def fields(self) -> dict[str, str]:
        return dict(self._fields)

    def __str__(self) -> str:
        return to_string(self._fields, self._format)

    def __repr__(self) -> str:
        return f"DateFields({self._value!r}, {self._format!r}) -> {str(self)!r}"
