"""
calchrono.engines.calendar
--------------------------
The Orchestrator. Binds a day count (label <-> epoch day) and an era rule
(proleptic year <-> era + year-of-era) into one calendar system, and exposes
the factory methods and field ranges the resolver and dates are built on.
"""

from __future__ import annotations

from datetime import date as _date
from typing import FrozenSet, MutableMapping, Optional, Tuple, Union

from calchrono.core.date import CalendarDate
from calchrono.core.errors import CalendarMismatch, FieldOutOfRange, UnsupportedField
from calchrono.core.period import Period
from calchrono.core.resolver import FieldResolver
from calchrono.core.time import date_to_epoch_day
from calchrono.core.types import DEFAULT_RANGES, Era, Field, ResolverStyle, ValueRange
from calchrono.engines.interfaces import DayCountProtocol, EraRuleProtocol


class CalendarSystem:
    """
    One concrete calendar. Immutable after construction; every calendar
    specific behaviour lives in the two strategies it is built from.
    """
    def __init__(
        self,
        id: str,
        calendar_type: str,
        day_count: DayCountProtocol,
        era_rule: EraRuleProtocol,
        unsupported_fields: FrozenSet[Field] = frozenset(),
    ):
        self.id = id
        self.calendar_type = calendar_type
        self.day_count = day_count
        self.era_rule = era_rule
        self.unsupported_fields = frozenset(unsupported_fields)
        self._resolver = FieldResolver(self)

    # ---------------------------------------------------------
    # Eras and years
    # ---------------------------------------------------------

    @property
    def eras(self) -> Tuple[Era, ...]:
        return self.era_rule.eras

    def era_of(self, value: int) -> Era:
        return self.era_rule.era_of(value)

    def proleptic_year(self, era: Era, year_of_era: int, *, lenient: bool = False) -> int:
        return self.era_rule.proleptic_year(era, year_of_era, lenient=lenient)

    def is_leap_year(self, year: int) -> bool:
        return self.day_count.is_leap_year(year)

    @property
    def months_per_year(self) -> Optional[int]:
        return self.day_count.months_per_year

    def month_length(self, year: int, month: int) -> int:
        return self.day_count.month_length(year, month)

    def year_length(self, year: int) -> int:
        return self.day_count.year_length(year)

    # ---------------------------------------------------------
    # Date factories
    # ---------------------------------------------------------

    def date(self, year: int, month: int, day: int) -> CalendarDate:
        return CalendarDate(self, year, month, day)

    def date_of_era(self, era: Era, year_of_era: int, month: int, day: int) -> CalendarDate:
        d = self.date(self.proleptic_year(era, year_of_era), month, day)
        if d.era != era:
            raise FieldOutOfRange(Field.YEAR_OF_ERA, year_of_era, self.range(Field.YEAR_OF_ERA),
                                  f"{era.name} {year_of_era}-{month:02d}-{day:02d} is not in era {era.name}")
        return d

    def date_year_day(self, year: int, day_of_year: int) -> CalendarDate:
        length = self.day_count.year_length(year)
        if day_of_year < 1 or day_of_year > length:
            raise FieldOutOfRange(Field.DAY_OF_YEAR, day_of_year, ValueRange.of(1, length),
                                  f"Invalid day-of-year {day_of_year} in year {year} (year has {length} days)")
        start = self.day_count.epoch_day_of(year, 1, 1)
        return self.date_epoch_day(start + day_of_year - 1)

    def date_epoch_day(self, epoch_day: int) -> CalendarDate:
        y, m, d = self.day_count.date_of(epoch_day)
        return CalendarDate(self, y, m, d)

    def date_from(self, value: Union[CalendarDate, _date]) -> CalendarDate:
        """Re-express a date of any calendar (or a datetime.date) in this one."""
        if isinstance(value, CalendarDate):
            if value.calendar == self:
                return value
            return self.date_epoch_day(value.to_epoch_day())
        if isinstance(value, _date):
            return self.date_epoch_day(date_to_epoch_day(value))
        raise CalendarMismatch(f"Cannot obtain a date of {self.id} from {type(value).__name__}")

    def date_today(self) -> CalendarDate:
        return self.date_from(_date.today())

    def period(self, years: int = 0, months: int = 0, days: int = 0) -> Period:
        return Period(self, years, months, days)

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def range(self, field: Union[Field, str]) -> ValueRange:
        field = Field.of(field)
        if field in self.unsupported_fields:
            raise UnsupportedField(f"Unsupported field for {self.id}: {field}")
        if field is Field.ERA:
            return self.era_rule.era_range()
        if field is Field.YEAR_OF_ERA:
            return self.era_rule.year_of_era_range(self.day_count.field_range(Field.YEAR))
        if field is Field.MONTH_OF_YEAR and self.months_per_year is not None:
            return ValueRange.of(1, self.months_per_year)
        if field is Field.DAY_OF_WEEK:
            return DEFAULT_RANGES[field]
        return self.day_count.field_range(field)

    def resolve_date(
        self,
        fields: MutableMapping[Field, int],
        style: Union[ResolverStyle, str] = ResolverStyle.SMART,
    ) -> Optional[CalendarDate]:
        """Resolve the bag in place (consumed fields are removed)."""
        return self._resolver.resolve(fields, ResolverStyle.of(style))

    # ---------------------------------------------------------
    # Identity
    # ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarSystem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("CalendarSystem", self.id))

    def __repr__(self) -> str:
        return f"CalendarSystem({self.id!r}, {self.calendar_type!r})"

    def __str__(self) -> str:
        return self.id
