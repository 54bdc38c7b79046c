"""
calchrono.engines.gregorian
---------------------------
Day count for calendars that share the Gregorian month structure and differ
from ISO only in the numbering of years (Thai Buddhist, Minguo, Japanese).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from calchrono.core.errors import FieldOutOfRange
from calchrono.core.time import (
    epoch_day_to_iso,
    gregorian_month_length,
    is_gregorian_leap,
    iso_to_epoch_day,
)
from calchrono.core.types import DEFAULT_RANGES, MAX_YEAR, MIN_YEAR, Field, ValueRange


@dataclass(frozen=True)
class GregorianDayParams:
    """
    proleptic year = ISO year + year_offset.

    min_iso_year narrows the supported range (the Japanese calendar starts at
    1873-01-01, the first year using the Gregorian rules).
    """
    year_offset: int = 0
    min_iso_year: int = MIN_YEAR
    max_iso_year: int = MAX_YEAR

    def __post_init__(self) -> None:
        if self.min_iso_year > self.max_iso_year:
            raise ValueError("min_iso_year must not exceed max_iso_year")


class GregorianDayCount:
    """
    ISO day arithmetic with shifted year numbering.
    Fully implements DayCountProtocol.
    """
    def __init__(self, params: GregorianDayParams):
        self.p = params
        self._year_range = ValueRange.of(params.min_iso_year + params.year_offset,
                                         params.max_iso_year + params.year_offset)
        self._min_epoch_day = iso_to_epoch_day(params.min_iso_year, 1, 1)
        self._max_epoch_day = iso_to_epoch_day(params.max_iso_year, 12, 31)

    # ---------------------------------------------------------
    # Protocol Properties
    # ---------------------------------------------------------

    @property
    def months_per_year(self) -> Optional[int]:
        return 12

    @property
    def min_year(self) -> int:
        return self._year_range.minimum

    @property
    def max_year(self) -> int:
        return self._year_range.maximum

    # ---------------------------------------------------------
    # Protocol Methods
    # ---------------------------------------------------------

    def iso_year(self, year: int) -> int:
        return year - self.p.year_offset

    def check_year(self, year: int) -> int:
        return self._year_range.check_valid_value(year, Field.YEAR)

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        self.check_year(year)
        DEFAULT_RANGES[Field.MONTH_OF_YEAR].check_valid_value(month, Field.MONTH_OF_YEAR)
        length = self.month_length(year, month)
        if day < 1 or day > length:
            raise FieldOutOfRange(Field.DAY_OF_MONTH, day, ValueRange.of(1, length),
                                  f"Invalid date: day {day} of month {month} in year {year} "
                                  f"(month has {length} days)")
        return iso_to_epoch_day(self.iso_year(year), month, day)

    def date_of(self, epoch_day: int) -> Tuple[int, int, int]:
        if epoch_day < self._min_epoch_day or epoch_day > self._max_epoch_day:
            raise FieldOutOfRange(Field.EPOCH_DAY, epoch_day,
                                  ValueRange.of(self._min_epoch_day, self._max_epoch_day))
        y, m, d = epoch_day_to_iso(epoch_day)
        return y + self.p.year_offset, m, d

    def month_length(self, year: int, month: int) -> int:
        return gregorian_month_length(self.iso_year(year), month)

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def is_leap_year(self, year: int) -> bool:
        return is_gregorian_leap(self.iso_year(year))

    def field_range(self, field: Field) -> ValueRange:
        if field is Field.YEAR:
            return self._year_range
        if field is Field.PROLEPTIC_MONTH:
            return ValueRange.of(self.min_year * 12, self.max_year * 12 + 11)
        if field is Field.EPOCH_DAY:
            return ValueRange.of(self._min_epoch_day, self._max_epoch_day)
        return DEFAULT_RANGES[field]
