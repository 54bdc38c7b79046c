"""
calchrono.core.date
-------------------
A date bound to one calendar system.

All arithmetic goes through the calendar's day count. Day-based arithmetic is
an epoch-day round trip; month- and year-based arithmetic recomputes the
(year, month) label and clamps the day to the target month length.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import date as _date
from typing import TYPE_CHECKING

from .errors import UnsupportedUnit
from .time import epoch_day_to_date
from .types import YEARS_PER_UNIT, Era, Field, Unit, ValueRange

if TYPE_CHECKING:
    from calchrono.engines.calendar import CalendarSystem
    from .period import Period


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@functools.total_ordering
@dataclass(frozen=True)
class CalendarDate:
    calendar: "CalendarSystem"
    year: int
    month: int
    day: int
    _epoch_day: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Validates the label against the calendar.
        object.__setattr__(self, "_epoch_day", self.calendar.day_count.epoch_day_of(self.year, self.month, self.day))

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def to_epoch_day(self) -> int:
        return self._epoch_day

    def to_iso(self) -> _date:
        return epoch_day_to_date(self._epoch_day)

    @property
    def era(self) -> Era:
        return self.calendar.era_rule.era_for(self.year, self.month, self.day)

    @property
    def year_of_era(self) -> int:
        return self.calendar.era_rule.year_of_era(self.year, self.month, self.day)

    @property
    def day_of_year(self) -> int:
        first = self.calendar.day_count.epoch_day_of(self.year, 1, 1)
        return self._epoch_day - first + 1

    @property
    def day_of_week(self) -> int:
        """ISO day of week, 1 = Monday .. 7 = Sunday."""
        return (self._epoch_day + 3) % 7 + 1

    @property
    def proleptic_month(self) -> int:
        return self.year * self._months_per_year() + self.month - 1

    @property
    def length_of_month(self) -> int:
        return self.calendar.day_count.month_length(self.year, self.month)

    @property
    def length_of_year(self) -> int:
        return self.calendar.day_count.year_length(self.year)

    @property
    def is_leap_year(self) -> bool:
        return self.calendar.day_count.is_leap_year(self.year)

    def _months_per_year(self) -> int:
        m = self.calendar.months_per_year
        if m is None:
            raise UnsupportedUnit(f"{self.calendar.id} has no fixed number of months per year")
        return m

    def get(self, f: Field | str) -> int:
        f = Field.of(f)
        if f is Field.EPOCH_DAY:
            return self._epoch_day
        if f is Field.YEAR:
            return self.year
        if f is Field.MONTH_OF_YEAR:
            return self.month
        if f is Field.DAY_OF_MONTH:
            return self.day
        if f is Field.DAY_OF_YEAR:
            return self.day_of_year
        if f is Field.DAY_OF_WEEK:
            return self.day_of_week
        if f is Field.ERA:
            return self.era.value
        if f is Field.YEAR_OF_ERA:
            return self.year_of_era
        if f is Field.PROLEPTIC_MONTH:
            return self.proleptic_month
        self.calendar.range(f)  # raises for fields the calendar does not support
        if f is Field.ALIGNED_WEEK_OF_MONTH:
            return (self.day - 1) // 7 + 1
        if f is Field.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (self.day - 1) % 7 + 1
        if f is Field.ALIGNED_WEEK_OF_YEAR:
            return (self.day_of_year - 1) // 7 + 1
        return (self.day_of_year - 1) % 7 + 1

    def range(self, f: Field | str) -> ValueRange:
        """Valid values of f around this date (the month and year it is in)."""
        f = Field.of(f)
        rng = self.calendar.range(f)
        if f is Field.DAY_OF_MONTH:
            return ValueRange.of(1, self.length_of_month)
        if f is Field.DAY_OF_YEAR:
            return ValueRange.of(1, self.length_of_year)
        if f is Field.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, (self.length_of_month + 6) // 7)
        if f is Field.ALIGNED_WEEK_OF_YEAR:
            return ValueRange.of(1, (self.length_of_year + 6) // 7)
        return rng

    # ---------------------------------------------------------
    # Adjusters
    # ---------------------------------------------------------

    def with_field(self, f: Field | str, value: int) -> "CalendarDate":
        """
        Copy of this date with one field set.

        Day-of-month and day-of-year must fit this month and year. Changing the
        year, month, era or year-of-era keeps the day, clamped to the new month
        length. Week and day-of-week fields move by whole days within the
        current month or year.
        """
        f = Field.of(f)
        self.calendar.range(f).check_valid_value(value, f)
        if f is Field.EPOCH_DAY:
            return self.calendar.date_epoch_day(value)
        if f is Field.DAY_OF_MONTH:
            self.range(f).check_valid_value(value, f)
            return self.calendar.date(self.year, self.month, value)
        if f is Field.DAY_OF_YEAR:
            self.range(f).check_valid_value(value, f)
            return self.plus_days(value - self.day_of_year)
        if f is Field.MONTH_OF_YEAR:
            return self._resolve_previous_valid(self.year, value)
        if f is Field.YEAR:
            return self._resolve_previous_valid(value, self.month)
        if f is Field.PROLEPTIC_MONTH:
            return self.plus_months(value - self.proleptic_month)
        if f is Field.YEAR_OF_ERA:
            return self._resolve_previous_valid(self.calendar.proleptic_year(self.era, value), self.month)
        if f is Field.ERA:
            year = self.calendar.proleptic_year(self.calendar.era_of(value), self.year_of_era)
            return self._resolve_previous_valid(year, self.month)
        if f in (Field.ALIGNED_WEEK_OF_MONTH, Field.ALIGNED_WEEK_OF_YEAR):
            return self.plus_weeks(value - self.get(f))
        return self.plus_days(value - self.get(f))

    def with_day_of_month(self, day: int) -> "CalendarDate":
        """Same month, given day, clamped to the month length."""
        return self.calendar.date(self.year, self.month, min(day, self.length_of_month))

    def last_day_of_month(self) -> "CalendarDate":
        return self.calendar.date(self.year, self.month, self.length_of_month)

    def next_or_same(self, day_of_week: int) -> "CalendarDate":
        return self.plus_days((day_of_week - self.day_of_week) % 7)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus_days(self, days: int) -> "CalendarDate":
        if days == 0:
            return self
        return self.calendar.date_epoch_day(self._epoch_day + days)

    def plus_weeks(self, weeks: int) -> "CalendarDate":
        return self.plus_days(weeks * 7)

    def plus_months(self, months: int) -> "CalendarDate":
        if months == 0:
            return self
        m = self._months_per_year()
        count = self.year * m + (self.month - 1) + months
        return self._resolve_previous_valid(count // m, count % m + 1)

    def plus_years(self, years: int) -> "CalendarDate":
        if years == 0:
            return self
        return self._resolve_previous_valid(self.year + years, self.month)

    def _resolve_previous_valid(self, year: int, month: int) -> "CalendarDate":
        dc = self.calendar.day_count
        self.calendar.range(Field.YEAR).check_valid_value(year, Field.YEAR)
        return self.calendar.date(year, month, min(self.day, dc.month_length(year, month)))

    def minus_days(self, days: int) -> "CalendarDate":
        return self.plus_days(-days)

    def minus_weeks(self, weeks: int) -> "CalendarDate":
        return self.plus_weeks(-weeks)

    def minus_months(self, months: int) -> "CalendarDate":
        return self.plus_months(-months)

    def minus_years(self, years: int) -> "CalendarDate":
        return self.plus_years(-years)

    def plus(self, amount: int, unit: Unit | str) -> "CalendarDate":
        unit = Unit(unit) if isinstance(unit, str) else unit
        if unit is Unit.DAYS:
            return self.plus_days(amount)
        if unit is Unit.WEEKS:
            return self.plus_weeks(amount)
        if unit is Unit.MONTHS:
            return self.plus_months(amount)
        if unit in YEARS_PER_UNIT:
            return self.plus_years(amount * YEARS_PER_UNIT[unit])
        raise UnsupportedUnit(f"Unsupported unit: {unit.name}")

    def minus(self, amount: int, unit: Unit | str) -> "CalendarDate":
        return self.plus(-amount, unit)

    def plus_period(self, period: "Period") -> "CalendarDate":
        return period.add_to(self)

    def minus_period(self, period: "Period") -> "CalendarDate":
        return period.subtract_from(self)

    def until(self, other: "CalendarDate", unit: Unit | str) -> int:
        """
        Amount of whole units from this date to other (exclusive).

        other is first re-expressed in this calendar through its epoch day.
        """
        unit = Unit(unit) if isinstance(unit, str) else unit
        end = self.calendar.date_from(other)
        if unit is Unit.DAYS:
            return end._epoch_day - self._epoch_day
        if unit is Unit.WEEKS:
            return _div_trunc(end._epoch_day - self._epoch_day, 7)
        if unit is Unit.MONTHS:
            return self._months_until(end)
        if unit in YEARS_PER_UNIT:
            return _div_trunc(self._months_until(end), self._months_per_year() * YEARS_PER_UNIT[unit])
        if unit is Unit.ERAS:
            return end.era.value - self.era.value
        raise UnsupportedUnit(f"Unsupported unit: {unit.name}")

    def _months_until(self, end: "CalendarDate") -> int:
        packed1 = self.proleptic_month * 32 + self.day
        packed2 = end.proleptic_month * 32 + end.day
        return _div_trunc(packed2 - packed1, 32)

    def until_period(self, other: "CalendarDate") -> "Period":
        """Years, months and days from this date to other, all of one sign."""
        end = self.calendar.date_from(other)
        m = self._months_per_year()
        total_months = (end.year - self.year) * m + (end.month - self.month)
        days = end.day - self.day
        if total_months > 0 and days < 0:
            total_months -= 1
            days = end._epoch_day - self.plus_months(total_months)._epoch_day
        elif total_months < 0 and days > 0:
            total_months += 1
            days -= end.length_of_month
        years = _div_trunc(total_months, m)
        return self.calendar.period(years, total_months - years * m, days)

    # ---------------------------------------------------------
    # Comparison and display
    # ---------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return (self._epoch_day, self.calendar.id) < (other._epoch_day, other.calendar.id)

    def is_before(self, other: "CalendarDate") -> bool:
        return self._epoch_day < other._epoch_day

    def is_after(self, other: "CalendarDate") -> bool:
        return self._epoch_day > other._epoch_day

    def is_equal(self, other: "CalendarDate") -> bool:
        """Same day on the time-line, whatever the calendars."""
        return self._epoch_day == other._epoch_day

    def __str__(self) -> str:
        return f"{self.calendar.id} {self.era} {self.year_of_era}-{self.month:02d}-{self.day:02d}"
