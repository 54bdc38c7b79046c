"""
calchrono.engines.variable_month
--------------------------------
Table-driven day count for calendars whose month lengths follow no formula
(observational or published lunar calendars).

The table holds the epoch day on which each month starts, indexed by the
epoch month

    i = 12 * (year - min_year) + (month - 1)

with one extra final entry (the day after the last tabulated month), so that
table[i + 1] - table[i] is always the length of month i.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence, Tuple

from calchrono.core.errors import ConfigurationError, FieldOutOfRange
from calchrono.core.once import OnceCell
from calchrono.core.time import iso_to_epoch_day
from calchrono.core.types import DEFAULT_RANGES, Field, ValueRange
from .table_config import MonthTableConfig, load_table_file, load_table_resource

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
MIN_MONTH_LENGTH = 29
MAX_MONTH_LENGTH = 32


class VariableMonthTable:
    """
    Immutable month-start table built from per-year month lengths.
    Fully implements DayCountProtocol.
    """
    def __init__(
        self,
        min_year: int,
        max_year: int,
        month_lengths: Mapping[int, Sequence[int]],
        anchor_epoch_day: int,
    ):
        if min_year > max_year:
            raise ConfigurationError(f"Empty year range: {min_year}..{max_year}")

        starts = []
        epoch_day = anchor_epoch_day
        min_month = max_month = None
        for year in range(min_year, max_year + 1):
            months = month_lengths.get(year)
            if months is None:
                raise ConfigurationError(f"Missing month lengths for year {year}")
            if len(months) != MONTHS_PER_YEAR:
                raise ConfigurationError(f"Year {year} has {len(months)} month lengths, expected {MONTHS_PER_YEAR}")
            for month, length in enumerate(months, start=1):
                if not (MIN_MONTH_LENGTH <= length <= MAX_MONTH_LENGTH):
                    raise ConfigurationError(f"Invalid month length in year {year}, month {month}: {length}")
                starts.append(epoch_day)
                epoch_day += length
                min_month = length if min_month is None else min(min_month, length)
                max_month = length if max_month is None else max(max_month, length)
        starts.append(epoch_day)

        self._starts: Tuple[int, ...] = tuple(starts)
        self._min_year = min_year
        self._max_year = max_year
        self._min_month_length = min_month
        self._max_month_length = max_month

        year_lengths = [self.year_length(y) for y in range(min_year, max_year + 1)]
        self._min_year_length = min(year_lengths)
        self._max_year_length = max(year_lengths)

    @classmethod
    def from_config(cls, config: MonthTableConfig) -> "VariableMonthTable":
        anchor = iso_to_epoch_day(*config.iso_start)
        return cls(config.min_year, config.max_year, config.years, anchor)

    # ---------------------------------------------------------
    # Cached scalars
    # ---------------------------------------------------------

    @property
    def months_per_year(self) -> Optional[int]:
        return MONTHS_PER_YEAR

    @property
    def min_year(self) -> int:
        return self._min_year

    @property
    def max_year(self) -> int:
        return self._max_year

    @property
    def min_month_length(self) -> int:
        return self._min_month_length

    @property
    def max_month_length(self) -> int:
        return self._max_month_length

    @property
    def min_year_length(self) -> int:
        return self._min_year_length

    @property
    def max_year_length(self) -> int:
        return self._max_year_length

    @property
    def min_epoch_day(self) -> int:
        return self._starts[0]

    @property
    def max_epoch_day(self) -> int:
        """Exclusive: the day after the last tabulated day."""
        return self._starts[-1]

    @property
    def month_starts(self) -> Tuple[int, ...]:
        return self._starts

    # ---------------------------------------------------------
    # Index arithmetic
    # ---------------------------------------------------------

    def _index(self, year: int, month: int) -> int:
        if year < self._min_year or year > self._max_year:
            raise FieldOutOfRange(Field.YEAR, year, ValueRange.of(self._min_year, self._max_year))
        if month < 1 or month > MONTHS_PER_YEAR:
            raise FieldOutOfRange(Field.MONTH_OF_YEAR, month, ValueRange.of(1, MONTHS_PER_YEAR))
        return (year - self._min_year) * MONTHS_PER_YEAR + (month - 1)

    # ---------------------------------------------------------
    # Protocol Methods
    # ---------------------------------------------------------

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        i = self._index(year, month)
        length = self._starts[i + 1] - self._starts[i]
        if day < 1 or day > length:
            raise FieldOutOfRange(Field.DAY_OF_MONTH, day, ValueRange.of(1, length),
                                  f"Invalid date: day {day} of month {month} in year {year} "
                                  f"(month has {length} days)")
        return self._starts[i] + (day - 1)

    def date_of(self, epoch_day: int) -> Tuple[int, int, int]:
        if epoch_day < self._starts[0] or epoch_day >= self._starts[-1]:
            raise FieldOutOfRange(Field.EPOCH_DAY, epoch_day,
                                  ValueRange.of(self._starts[0], self._starts[-1] - 1),
                                  f"Date out of range of the calendar table: epoch day {epoch_day}")
        i = bisect_right(self._starts, epoch_day) - 1
        year = self._min_year + i // MONTHS_PER_YEAR
        month = i % MONTHS_PER_YEAR + 1
        return year, month, epoch_day - self._starts[i] + 1

    def month_length(self, year: int, month: int) -> int:
        i = self._index(year, month)
        return self._starts[i + 1] - self._starts[i]

    def year_length(self, year: int) -> int:
        i = self._index(year, 1)
        return self._starts[i + MONTHS_PER_YEAR] - self._starts[i]

    def day_of_year(self, year: int, month: int, day: int) -> int:
        return self.epoch_day_of(year, month, day) - self._starts[self._index(year, 1)] + 1

    def is_leap_year(self, year: int) -> bool:
        if year < self._min_year or year > self._max_year:
            return False
        return self.year_length(year) > 354

    def field_range(self, field: Field) -> ValueRange:
        if field is Field.DAY_OF_MONTH:
            return ValueRange.of(1, self._max_month_length, self._min_month_length)
        if field is Field.DAY_OF_YEAR:
            return ValueRange.of(1, self._max_year_length, self._min_year_length)
        if field is Field.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, 5)
        if field is Field.YEAR:
            return ValueRange.of(self._min_year, self._max_year)
        if field is Field.PROLEPTIC_MONTH:
            return ValueRange.of(self._min_year * MONTHS_PER_YEAR, self._max_year * MONTHS_PER_YEAR + 11)
        if field is Field.EPOCH_DAY:
            return ValueRange.of(self._starts[0], self._starts[-1] - 1)
        return DEFAULT_RANGES[field]


@dataclass(frozen=True)
class TableDayParams:
    """
    Where the month table of a calendar comes from: a bundled resource name or
    a file path. The record's id and type must match the calendar's own.
    """
    resource: Optional[str] = None
    path: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.resource is None) == (self.path is None):
            raise ValueError("exactly one of resource or path must be given")


class VariableMonthDayCount:
    """
    Lazily built VariableMonthTable.

    The table is constructed on the first call that needs it, exactly once,
    and every accessor goes through the same one-shot cell. A configuration
    failure is sticky for the life of the process.
    """
    def __init__(
        self,
        calendar_id: str,
        calendar_type: str,
        source: Callable[[], MonthTableConfig],
    ):
        self.calendar_id = calendar_id
        self.calendar_type = calendar_type
        self._source = source
        self._cell: OnceCell[VariableMonthTable] = OnceCell(self._build)

    @classmethod
    def from_params(cls, calendar_id: str, calendar_type: str, params: TableDayParams) -> "VariableMonthDayCount":
        if params.resource is not None:
            resource = params.resource
            return cls(calendar_id, calendar_type, lambda: load_table_resource(resource))
        path = params.path
        return cls(calendar_id, calendar_type, lambda: load_table_file(path))

    def _build(self) -> VariableMonthTable:
        try:
            config = self._source()
            if config.calendar_id != self.calendar_id:
                raise ConfigurationError(f"Configuration is for a different calendar: {config.calendar_id}")
            if config.calendar_type != self.calendar_type:
                raise ConfigurationError(f"Configuration is for a different calendar type: {config.calendar_type}")
            table = VariableMonthTable.from_config(config)
        except ConfigurationError as ex:
            logger.error("Unable to initialize calendar table %s: %s", self.calendar_id, ex)
            raise ConfigurationError(f"Unable to initialize calendar: {self.calendar_id}") from ex
        logger.debug("Built month table for %s: years %d..%d, version %s",
                     self.calendar_id, table.min_year, table.max_year, config.version)
        return table

    @property
    def table(self) -> VariableMonthTable:
        return self._cell.get()

    @property
    def is_built(self) -> bool:
        return self._cell.is_initialized

    # ---------------------------------------------------------
    # Protocol delegation
    # ---------------------------------------------------------

    @property
    def months_per_year(self) -> Optional[int]:
        return MONTHS_PER_YEAR

    @property
    def min_year(self) -> int:
        return self.table.min_year

    @property
    def max_year(self) -> int:
        return self.table.max_year

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        return self.table.epoch_day_of(year, month, day)

    def date_of(self, epoch_day: int) -> Tuple[int, int, int]:
        return self.table.date_of(epoch_day)

    def month_length(self, year: int, month: int) -> int:
        return self.table.month_length(year, month)

    def year_length(self, year: int) -> int:
        return self.table.year_length(year)

    def is_leap_year(self, year: int) -> bool:
        return self.table.is_leap_year(year)

    def field_range(self, field: Field) -> ValueRange:
        return self.table.field_range(field)
