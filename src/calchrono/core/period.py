"""
calchrono.core.period
---------------------
A signed amount of years, months and days in one calendar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import CalendarMismatch

if TYPE_CHECKING:
    from calchrono.engines.calendar import CalendarSystem
    from .date import CalendarDate


@dataclass(frozen=True)
class Period:
    calendar: "CalendarSystem"
    years: int = 0
    months: int = 0
    days: int = 0

    @property
    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    @property
    def is_negative(self) -> bool:
        return self.years < 0 or self.months < 0 or self.days < 0

    def _check_same(self, other: "Period") -> None:
        if other.calendar != self.calendar:
            raise CalendarMismatch(f"Period must be in {self.calendar.id}, got {other.calendar.id}")

    def plus(self, other: "Period") -> "Period":
        self._check_same(other)
        return Period(self.calendar, self.years + other.years, self.months + other.months, self.days + other.days)

    def minus(self, other: "Period") -> "Period":
        self._check_same(other)
        return Period(self.calendar, self.years - other.years, self.months - other.months, self.days - other.days)

    def multiplied_by(self, scalar: int) -> "Period":
        if self.is_zero or scalar == 1:
            return self
        return Period(self.calendar, self.years * scalar, self.months * scalar, self.days * scalar)

    def negated(self) -> "Period":
        return self.multiplied_by(-1)

    def normalized(self) -> "Period":
        """
        Years and months re-split by the calendar's months per year so that
        both carry the same sign. Days are left alone. A calendar without a
        fixed months-per-year returns the period unchanged.
        """
        per_year = self.calendar.months_per_year
        if per_year is None:
            return self
        total = self.years * per_year + self.months
        years = abs(total) // per_year
        if total < 0:
            years = -years
        months = total - years * per_year
        if years == self.years and months == self.months:
            return self
        return Period(self.calendar, years, months, self.days)

    def _check_date(self, date: "CalendarDate") -> None:
        if date.calendar != self.calendar:
            raise CalendarMismatch(f"Chronology mismatch, expected: {self.calendar.id}, actual: {date.calendar.id}")

    def add_to(self, date: "CalendarDate") -> "CalendarDate":
        self._check_date(date)
        per_year = self.calendar.months_per_year
        if per_year is not None:
            total = self.years * per_year + self.months
            if total != 0:
                date = date.plus_months(total)
        else:
            date = date.plus_years(self.years).plus_months(self.months)
        return date.plus_days(self.days)

    def subtract_from(self, date: "CalendarDate") -> "CalendarDate":
        self._check_date(date)
        per_year = self.calendar.months_per_year
        if per_year is not None:
            total = self.years * per_year + self.months
            if total != 0:
                date = date.minus_months(total)
        else:
            date = date.minus_years(self.years).minus_months(self.months)
        return date.minus_days(self.days)

    def __str__(self) -> str:
        if self.is_zero:
            return f"{self.calendar.id} P0D"
        text = f"{self.calendar.id} P"
        if self.years:
            text += f"{self.years}Y"
        if self.months:
            text += f"{self.months}M"
        if self.days:
            text += f"{self.days}D"
        return text
