from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base error."""


class FieldOutOfRange(CalendarError, ValueError):
    """A field value lies outside the range declared by the calendar."""

    def __init__(self, field: Any, value: int, valid_range: Any, message: str | None = None):
        self.field = field
        self.value = value
        self.valid_range = valid_range
        if message is None:
            message = f"Invalid value for {field}: {value} (valid values {valid_range})"
        super().__init__(message)


class ConflictingFields(CalendarError):
    """Two different effective values were derived for the same field."""

    def __init__(self, field: Any, first: int, second: int):
        self.field = field
        self.first = first
        self.second = second
        super().__init__(f"Conflict found: {field} {first} differs from {field} {second}")


class AmbiguousComposition(CalendarError):
    """STRICT resolution of aligned weeks landed in a different month or year."""

    def __init__(self, field: Any, expected: int, actual: int):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Strict mode rejected resolved date as it is in a different {field}: "
            f"expected {expected}, got {actual}"
        )


class ConfigurationError(CalendarError):
    """Raised when tabulated calendar data is missing or malformed."""


class UnsupportedField(CalendarError):
    """Raised when a calendar does not support a field."""


class UnsupportedUnit(CalendarError):
    """Raised when a calendar does not support an arithmetic unit."""


class CalendarMismatch(CalendarError, TypeError):
    """Raised when a value bound to one calendar is used with another."""


class UnknownCalendar(CalendarError, KeyError):
    """Raised on a registry miss."""
