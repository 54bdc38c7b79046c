"""
calchrono.engines.eras
----------------------
Era rules: how a calendar labels its proleptic years with (era, year-of-era).

Three shapes cover the built-in calendars:
  OffsetEras - an era before year 1 counting backwards and an era from year 1
               (ISO BCE/CE, Thai Buddhist, Minguo).
  DatedEras  - consecutive eras each starting on an ISO date (Japanese).
  SingleEra  - one era, year-of-era equals the proleptic year (Hijrah).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from calchrono.core.errors import CalendarMismatch, FieldOutOfRange
from calchrono.core.types import MAX_YEAR, Era, Field, ValueRange

YMD = Tuple[int, int, int]


@dataclass(frozen=True)
class OffsetEraParams:
    before: str
    after: str


@dataclass(frozen=True)
class DatedEraParams:
    """(value, name, first ISO day) per era, oldest first."""
    eras: Tuple[Tuple[int, str, YMD], ...]

    def __post_init__(self) -> None:
        if not self.eras:
            raise ValueError("at least one era is required")
        values = [e[0] for e in self.eras]
        starts = [e[2] for e in self.eras]
        if values != sorted(set(values)) or starts != sorted(set(starts)):
            raise ValueError("eras must be strictly increasing in value and start date")


@dataclass(frozen=True)
class SingleEraParams:
    name: str
    value: int = 1


class _EraRuleBase:
    def __init__(self, calendar_id: str, eras: Sequence[Era]):
        self.calendar_id = calendar_id
        self._eras: Tuple[Era, ...] = tuple(eras)
        self._by_value = {e.value: e for e in self._eras}

    @property
    def eras(self) -> Tuple[Era, ...]:
        return self._eras

    def era_range(self) -> ValueRange:
        return ValueRange.of(self._eras[0].value, self._eras[-1].value)

    def era_of(self, value: int) -> Era:
        era = self._by_value.get(value)
        if era is None:
            raise FieldOutOfRange(Field.ERA, value, self.era_range(), f"Invalid era for {self.calendar_id}: {value}")
        return era

    def _check_own(self, era: Era) -> Era:
        if era.calendar != self.calendar_id:
            raise CalendarMismatch(f"Era must belong to {self.calendar_id}, got {era.calendar} {era.name}")
        return self.era_of(era.value)


class OffsetEras(_EraRuleBase):
    """
    Era 1 holds proleptic years >= 1 with year-of-era equal to the year;
    era 0 holds years <= 0 counted backwards (year 0 is year-of-era 1).
    """
    def __init__(self, calendar_id: str, params: OffsetEraParams):
        super().__init__(calendar_id, (Era(calendar_id, 0, params.before), Era(calendar_id, 1, params.after)))

    def era_for(self, year: int, month: int, day: int) -> Era:
        return self._eras[1] if year >= 1 else self._eras[0]

    def year_of_era(self, year: int, month: int, day: int) -> int:
        return year if year >= 1 else 1 - year

    def proleptic_year(self, era: Era, year_of_era: int, *, lenient: bool = False) -> int:
        era = self._check_own(era)
        return year_of_era if era.value == 1 else 1 - year_of_era

    def year_of_era_range(self, year_range: ValueRange) -> ValueRange:
        after = year_range.maximum
        before = 1 - year_range.minimum
        if before < 1:
            return ValueRange.of(1, after)
        return ValueRange.of(1, max(after, before), min(after, before))


class DatedEras(_EraRuleBase):
    """
    Eras that start on a given ISO date; proleptic years are ISO years.

    Year-of-era 1 runs from the first day of the era to the end of that ISO
    year, later years-of-era follow the ISO year.
    """
    def __init__(self, calendar_id: str, params: DatedEraParams):
        super().__init__(calendar_id, [Era(calendar_id, v, name) for v, name, _ in params.eras])
        self._since = {v: since for v, _, since in params.eras}

    def since(self, era: Era) -> YMD:
        return self._since[era.value]

    def era_for(self, year: int, month: int, day: int) -> Era:
        ymd = (year, month, day)
        for era in reversed(self._eras):
            if ymd >= self._since[era.value]:
                return era
        return self._eras[0]

    def year_of_era(self, year: int, month: int, day: int) -> int:
        return year - self._since[self.era_for(year, month, day).value][0] + 1

    def _max_year_of_era(self, era: Era) -> int | None:
        i = self._eras.index(era)
        if i + 1 == len(self._eras):
            return None
        start_year = self._since[era.value][0]
        ny, nm, nd = self._since[self._eras[i + 1].value]
        last_year = ny - 1 if (nm, nd) == (1, 1) else ny
        return max(1, last_year - start_year + 1)

    def proleptic_year(self, era: Era, year_of_era: int, *, lenient: bool = False) -> int:
        era = self._check_own(era)
        year = self._since[era.value][0] + year_of_era - 1
        if lenient or year_of_era == 1:
            return year
        limit = self._max_year_of_era(era)
        if year_of_era < 1 or (limit is not None and year_of_era > limit):
            if limit is None:
                limit = MAX_YEAR - self._since[era.value][0] + 1
            valid = ValueRange.of(1, limit)
            raise FieldOutOfRange(Field.YEAR_OF_ERA, year_of_era, valid,
                                  f"Invalid year-of-era {year_of_era} for era {era.name}")
        return year

    def year_of_era_range(self, year_range: ValueRange) -> ValueRange:
        current = self._eras[-1]
        largest = year_range.maximum - self._since[current.value][0] + 1
        closed = [m for m in (self._max_year_of_era(e) for e in self._eras[:-1]) if m is not None]
        smallest = min(closed) if closed else largest
        return ValueRange.of(1, largest, min(smallest, largest))


class SingleEra(_EraRuleBase):
    def __init__(self, calendar_id: str, params: SingleEraParams):
        super().__init__(calendar_id, (Era(calendar_id, params.value, params.name),))

    def era_for(self, year: int, month: int, day: int) -> Era:
        return self._eras[0]

    def year_of_era(self, year: int, month: int, day: int) -> int:
        return year

    def proleptic_year(self, era: Era, year_of_era: int, *, lenient: bool = False) -> int:
        self._check_own(era)
        return year_of_era

    def year_of_era_range(self, year_range: ValueRange) -> ValueRange:
        return year_range
