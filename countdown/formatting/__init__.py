"""Date field formatting package."""

from .date_fields import (
    DateFields,
    get_fields,
    to_string,
    DATETIME_PATTERN,
    DEFAULT_FORMAT,
)

__all__ = [
    "DateFields",
    "get_fields",
    "to_string",
    "DATETIME_PATTERN",
    "DEFAULT_FORMAT",
]
