from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from .errors import FieldOutOfRange

# Limits of the ISO proleptic year, shared by every Gregorian-backed calendar.
MIN_YEAR = -999_999_999
MAX_YEAR = 999_999_999


class Field(Enum):
    EPOCH_DAY = "epoch_day"
    PROLEPTIC_MONTH = "proleptic_month"
    YEAR_OF_ERA = "year_of_era"
    ERA = "era"
    YEAR = "year"
    MONTH_OF_YEAR = "month_of_year"
    DAY_OF_MONTH = "day_of_month"
    DAY_OF_YEAR = "day_of_year"
    ALIGNED_WEEK_OF_MONTH = "aligned_week_of_month"
    ALIGNED_DAY_OF_WEEK_IN_MONTH = "aligned_day_of_week_in_month"
    ALIGNED_WEEK_OF_YEAR = "aligned_week_of_year"
    ALIGNED_DAY_OF_WEEK_IN_YEAR = "aligned_day_of_week_in_year"
    DAY_OF_WEEK = "day_of_week"

    @classmethod
    def of(cls, key: Union["Field", str]) -> "Field":
        if isinstance(key, cls):
            return key
        name = str(key).strip().lower().replace("-", "_")
        for f in cls:
            if f.value == name:
                return f
        # A few short spellings used on the command line.
        aliases = {"month": cls.MONTH_OF_YEAR, "day": cls.DAY_OF_MONTH, "yoe": cls.YEAR_OF_ERA}
        if name in aliases:
            return aliases[name]
        raise KeyError(f"Unknown field '{key}'. Available: {sorted(f.value for f in cls)}")

    def __str__(self) -> str:
        return self.name


class ResolverStyle(Enum):
    STRICT = "strict"
    SMART = "smart"
    LENIENT = "lenient"

    @classmethod
    def of(cls, style: Union["ResolverStyle", str]) -> "ResolverStyle":
        if isinstance(style, cls):
            return style
        try:
            return cls(str(style).strip().lower())
        except ValueError:
            raise ValueError(f"resolver style must be one of {[s.value for s in cls]}, got {style!r}") from None


class Unit(Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"
    DECADES = "decades"
    CENTURIES = "centuries"
    MILLENNIA = "millennia"
    ERAS = "eras"


# Number of years per unit, for the month-based units.
YEARS_PER_UNIT: Dict[Unit, int] = {
    Unit.YEARS: 1,
    Unit.DECADES: 10,
    Unit.CENTURIES: 100,
    Unit.MILLENNIA: 1000,
}


@dataclass(frozen=True)
class ValueRange:
    """
    Range of valid values for a field.

    The minimum and maximum may each vary (e.g. day-of-month is 1..28 in some
    months and 1..31 in others), so four bounds are kept:
    min_smallest <= min_largest <= max_smallest <= max_largest.
    """
    min_smallest: int
    min_largest: int
    max_smallest: int
    max_largest: int

    @staticmethod
    def of(minimum: int, maximum: int, max_smallest: int | None = None) -> "ValueRange":
        if max_smallest is None:
            return ValueRange(minimum, minimum, maximum, maximum)
        return ValueRange(minimum, minimum, max_smallest, maximum)

    def __post_init__(self) -> None:
        if not (self.min_smallest <= self.min_largest <= self.max_smallest <= self.max_largest):
            raise ValueError(f"Invalid range bounds: {self.min_smallest}, {self.min_largest}, "
                             f"{self.max_smallest}, {self.max_largest}")

    @property
    def minimum(self) -> int:
        return self.min_smallest

    @property
    def maximum(self) -> int:
        return self.max_largest

    @property
    def is_fixed(self) -> bool:
        return self.min_smallest == self.min_largest and self.max_smallest == self.max_largest

    def is_valid_value(self, value: int) -> bool:
        return self.min_smallest <= value <= self.max_largest

    def check_valid_value(self, value: int, field: Field) -> int:
        if not self.is_valid_value(value):
            raise FieldOutOfRange(field, value, self)
        return int(value)

    def __str__(self) -> str:
        lo = str(self.min_smallest)
        if self.min_smallest != self.min_largest:
            lo += f"/{self.min_largest}"
        hi = str(self.max_smallest)
        if self.max_smallest != self.max_largest:
            hi += f"/{self.max_largest}"
        return f"{lo} - {hi}"


# ISO ranges, used wherever a calendar does not narrow a field.
DEFAULT_RANGES: Dict[Field, ValueRange] = {
    Field.EPOCH_DAY: ValueRange.of(-365_243_219_162, 365_241_780_471),
    Field.PROLEPTIC_MONTH: ValueRange.of(MIN_YEAR * 12, MAX_YEAR * 12 + 11),
    Field.YEAR_OF_ERA: ValueRange.of(1, MAX_YEAR + 1, MAX_YEAR),
    Field.ERA: ValueRange.of(0, 1),
    Field.YEAR: ValueRange.of(MIN_YEAR, MAX_YEAR),
    Field.MONTH_OF_YEAR: ValueRange.of(1, 12),
    Field.DAY_OF_MONTH: ValueRange.of(1, 31, 28),
    Field.DAY_OF_YEAR: ValueRange.of(1, 366, 365),
    Field.ALIGNED_WEEK_OF_MONTH: ValueRange.of(1, 5, 4),
    Field.ALIGNED_DAY_OF_WEEK_IN_MONTH: ValueRange.of(1, 7),
    Field.ALIGNED_WEEK_OF_YEAR: ValueRange.of(1, 53),
    Field.ALIGNED_DAY_OF_WEEK_IN_YEAR: ValueRange.of(1, 7),
    Field.DAY_OF_WEEK: ValueRange.of(1, 7),
}


@dataclass(frozen=True, order=True)
class Era:
    """An era of one calendar. Instances are owned by the calendar's era rule."""
    calendar: str
    value: int
    name: str

    def __str__(self) -> str:
        return self.name
