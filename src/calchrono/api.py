from __future__ import annotations

from datetime import date as _date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .core.date import CalendarDate
from .core.engine import CalendarRegistry
from .core.resolver import add_field_value
from .core.types import Field, ResolverStyle
from .engines.calendar import CalendarSystem
from .engines.factory import build_calendar
from .engines.specs import CalendarSpec

_registry: Optional[CalendarRegistry] = None

CalendarLike = Union[str, CalendarSystem]
FieldsLike = Union[Mapping[Any, int], Iterable[Tuple[Any, int]]]


def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry


def _cal(calendar: CalendarLike) -> CalendarSystem:
    if isinstance(calendar, CalendarSystem):
        return calendar
    return _reg().get(calendar)


def list_calendars() -> List[str]:
    return _reg().list()


def get_calendar(name: str) -> CalendarSystem:
    """Look a calendar up by id, calendar type or alias."""
    return _reg().get(name)


def make_calendar(spec: CalendarSpec) -> CalendarSystem:
    return build_calendar(spec)


def register_calendar(calendar: CalendarSystem, *, aliases: Iterable[str] = ()) -> CalendarSystem:
    """First registration of an id wins; returns the calendar registered under it."""
    return _reg().register(calendar, aliases=aliases)


def calendar_info(name: CalendarLike) -> Dict[str, Any]:
    cal = _cal(name)
    return {
        "id": cal.id,
        "type": cal.calendar_type,
        "eras": [e.name for e in cal.eras],
        "months_per_year": cal.months_per_year,
        "year_range": str(cal.range(Field.YEAR)),
    }


# ============================================================
# Dates
# ============================================================

def date(year: int, month: int, day: int, *, calendar: CalendarLike = "ISO") -> CalendarDate:
    return _cal(calendar).date(year, month, day)


def date_from_epoch_day(epoch_day: int, *, calendar: CalendarLike = "ISO") -> CalendarDate:
    return _cal(calendar).date_epoch_day(epoch_day)


def convert(d: Union[CalendarDate, _date], calendar: CalendarLike) -> CalendarDate:
    """The same day expressed in another calendar."""
    return _cal(calendar).date_from(d)


def resolve_date(
    fields: FieldsLike,
    style: Union[ResolverStyle, str] = ResolverStyle.SMART,
    *,
    calendar: CalendarLike = "ISO",
) -> Optional[CalendarDate]:
    """
    Build a date from a set of fields.

    fields is a mapping or an iterable of (field, value) pairs; keys may be
    Field members or their names. Pairs are merged one by one, so repeating a
    field with a different value raises ConflictingFields. The caller's input
    is never modified. Returns None when the fields do not determine a date.
    """
    items = fields.items() if isinstance(fields, Mapping) else fields
    bag: Dict[Field, int] = {}
    for key, value in items:
        add_field_value(bag, Field.of(key), int(value))
    return _cal(calendar).resolve_date(bag, style)


# ============================================================
# Month tables
# ============================================================

def months_in_year(year: int, *, calendar: CalendarLike = "Hijrah-civil") -> List[Dict[str, Any]]:
    """One record per month: first and last day (ISO) and length."""
    cal = _cal(calendar)
    per_year = cal.months_per_year or 0
    out = []
    for month in range(1, per_year + 1):
        first = cal.date(year, month, 1)
        last = first.last_day_of_month()
        out.append({
            "year": year,
            "month": month,
            "length": first.length_of_month,
            "first_epoch_day": first.to_epoch_day(),
            "first_iso": first.to_iso(),
            "last_iso": last.to_iso(),
        })
    return out


def year_lengths(start: int, stop: int, *, calendar: CalendarLike = "Hijrah-civil") -> List[Tuple[int, int]]:
    """(year, length in days) for years start..stop inclusive."""
    cal = _cal(calendar)
    return [(y, cal.year_length(y)) for y in range(start, stop + 1)]
