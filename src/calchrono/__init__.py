"""calchrono public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    resolve_date,
    get_calendar,
    list_calendars,
    register_calendar,
    make_calendar,
    calendar_info,
    date,
    date_from_epoch_day,
    convert,
    months_in_year,
    year_lengths,
)
from .core.date import CalendarDate
from .core.errors import (
    AmbiguousComposition,
    CalendarError,
    CalendarMismatch,
    ConfigurationError,
    ConflictingFields,
    FieldOutOfRange,
    UnknownCalendar,
    UnsupportedField,
    UnsupportedUnit,
)
from .core.period import Period
from .core.resolver import add_field_value
from .core.types import Era, Field, ResolverStyle, Unit, ValueRange
from .engines.calendar import CalendarSystem
from .engines.specs import CalendarSpec

__all__ = [
    "resolve_date",
    "get_calendar",
    "list_calendars",
    "register_calendar",
    "make_calendar",
    "calendar_info",
    "date",
    "date_from_epoch_day",
    "convert",
    "months_in_year",
    "year_lengths",
    "add_field_value",
    "CalendarDate",
    "CalendarSystem",
    "CalendarSpec",
    "Period",
    "Era",
    "Field",
    "ResolverStyle",
    "Unit",
    "ValueRange",
    "CalendarError",
    "FieldOutOfRange",
    "ConflictingFields",
    "AmbiguousComposition",
    "ConfigurationError",
    "UnsupportedField",
    "UnsupportedUnit",
    "CalendarMismatch",
    "UnknownCalendar",
]
