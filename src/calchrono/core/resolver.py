"""
calchrono.core.resolver
-----------------------
Reconstructs a date from a bag of calendar fields.

The bag is a mutable mapping Field -> int owned by one resolution call.
Fields are removed as they are interpreted and range-checked by the branch
that uses them; whatever is left over after a successful resolution was not
needed, and an unresolved call leaves the fields it could not combine in
place so the caller can add more and retry.

Order of work:
  1. EPOCH_DAY short-circuits everything.
  2. PROLEPTIC_MONTH is split into YEAR and MONTH_OF_YEAR.
  3. YEAR_OF_ERA (with or without ERA) becomes YEAR; the era asked for is
     kept and the date resolved from month-day or day-of-year must lie in it.
  4. The first complete combination wins:
       YEAR, MONTH_OF_YEAR, DAY_OF_MONTH
       YEAR, DAY_OF_YEAR
       YEAR, MONTH_OF_YEAR, ALIGNED_WEEK_OF_MONTH, ALIGNED_DAY_OF_WEEK_IN_MONTH
       YEAR, MONTH_OF_YEAR, ALIGNED_WEEK_OF_MONTH, DAY_OF_WEEK
       YEAR, ALIGNED_WEEK_OF_YEAR, ALIGNED_DAY_OF_WEEK_IN_YEAR
       YEAR, ALIGNED_WEEK_OF_YEAR, DAY_OF_WEEK
"""

from __future__ import annotations

from typing import TYPE_CHECKING, MutableMapping, Optional, Tuple

from .errors import AmbiguousComposition, ConflictingFields, FieldOutOfRange, UnsupportedField
from .types import Era, Field, ResolverStyle

if TYPE_CHECKING:
    from calchrono.engines.calendar import CalendarSystem
    from .date import CalendarDate

FieldBag = MutableMapping[Field, int]

STRICT = ResolverStyle.STRICT
SMART = ResolverStyle.SMART
LENIENT = ResolverStyle.LENIENT


def add_field_value(fields: FieldBag, field: Field, value: int) -> None:
    """Put field=value into the bag; a different existing value is a conflict."""
    old = fields.get(field)
    if old is not None and old != value:
        raise ConflictingFields(field, old, value)
    fields[field] = value


class FieldResolver:
    def __init__(self, calendar: "CalendarSystem"):
        self.cal = calendar

    def _check(self, fields: FieldBag, field: Field) -> int:
        # range() raises UnsupportedField before the value is consumed
        return self.cal.range(field).check_valid_value(fields.pop(field), field)

    def _take(self, fields: FieldBag, field: Field) -> int:
        """Pop a value unchecked (LENIENT), still refusing unsupported fields."""
        if field in self.cal.unsupported_fields:
            raise UnsupportedField(f"Unsupported field for {self.cal.id}: {field}")
        return fields.pop(field)

    def resolve(self, fields: FieldBag, style: ResolverStyle) -> Optional["CalendarDate"]:
        """
        Resolve the bag into a date, or return None when no combination of
        the remaining fields is complete.
        """
        style = ResolverStyle.of(style)

        if Field.EPOCH_DAY in fields:
            return self.cal.date_epoch_day(fields.pop(Field.EPOCH_DAY))

        self._resolve_proleptic_month(fields, style)
        requested = self._resolve_year_of_era(fields, style)

        if Field.YEAR not in fields:
            return None
        has = fields.__contains__

        if has(Field.MONTH_OF_YEAR) and has(Field.DAY_OF_MONTH):
            return self._check_era(self._resolve_ymd(fields, style), requested, style, rollover=True)
        if has(Field.DAY_OF_YEAR):
            return self._check_era(self._resolve_yd(fields, style), requested, style)
        if has(Field.MONTH_OF_YEAR) and has(Field.ALIGNED_WEEK_OF_MONTH):
            if has(Field.ALIGNED_DAY_OF_WEEK_IN_MONTH):
                return self._resolve_ymaa(fields, style)
            if has(Field.DAY_OF_WEEK):
                return self._resolve_ymad(fields, style)
        if has(Field.ALIGNED_WEEK_OF_YEAR):
            if has(Field.ALIGNED_DAY_OF_WEEK_IN_YEAR):
                return self._resolve_yaa(fields, style)
            if has(Field.DAY_OF_WEEK):
                return self._resolve_yad(fields, style)
        return None

    # ---------------------------------------------------------
    # Year normalization
    # ---------------------------------------------------------

    def _resolve_proleptic_month(self, fields: FieldBag, style: ResolverStyle) -> None:
        if Field.PROLEPTIC_MONTH not in fields:
            return
        per_year = self.cal.months_per_year
        if per_year is None:
            raise UnsupportedField(f"{self.cal.id} has no fixed number of months per year")
        pm = fields.pop(Field.PROLEPTIC_MONTH)
        if style is not LENIENT:
            self.cal.range(Field.PROLEPTIC_MONTH).check_valid_value(pm, Field.PROLEPTIC_MONTH)
        add_field_value(fields, Field.MONTH_OF_YEAR, pm % per_year + 1)
        add_field_value(fields, Field.YEAR, pm // per_year)

    def _resolve_year_of_era(self, fields: FieldBag, style: ResolverStyle) -> Optional[Tuple[Era, int]]:
        """
        Fold YEAR_OF_ERA into YEAR. Returns the (era, year-of-era) that was asked
        for when an era took part, so the resolved date can be checked against it.
        """
        if Field.YEAR_OF_ERA not in fields:
            if Field.ERA in fields:
                self.cal.range(Field.ERA).check_valid_value(fields[Field.ERA], Field.ERA)
            return None

        yoe = fields.pop(Field.YEAR_OF_ERA)
        if style is not LENIENT:
            self.cal.range(Field.YEAR_OF_ERA).check_valid_value(yoe, Field.YEAR_OF_ERA)
        lenient = style is LENIENT

        if Field.ERA in fields:
            era_value = self._check(fields, Field.ERA)
            era = self.cal.era_of(era_value)
            add_field_value(fields, Field.YEAR, self.cal.proleptic_year(era, yoe, lenient=lenient))
            return None if lenient else (era, yoe)
        elif Field.YEAR in fields:
            year = self.cal.range(Field.YEAR).check_valid_value(fields[Field.YEAR], Field.YEAR)
            era = self.cal.date_year_day(year, 1).era
            add_field_value(fields, Field.YEAR, self.cal.proleptic_year(era, yoe, lenient=lenient))
        elif style is STRICT:
            # No era to combine with; leave it for the caller.
            fields[Field.YEAR_OF_ERA] = yoe
        else:
            era = self.cal.eras[-1]
            add_field_value(fields, Field.YEAR, self.cal.proleptic_year(era, yoe, lenient=lenient))
            return None if lenient else (era, yoe)
        return None

    def _check_era(
        self,
        date: "CalendarDate",
        requested: Optional[Tuple[Era, int]],
        style: ResolverStyle,
        *,
        rollover: bool = False,
    ) -> "CalendarDate":
        """
        The resolved date must lie in the era it was asked for. SMART with
        month and day tolerates rolling into the neighbouring era within the year of
        the era change (either year-of-era is 1).
        """
        if requested is None or style is LENIENT:
            return date
        era, yoe = requested
        if date.era == era:
            return date
        if rollover and style is SMART and (yoe == 1 or date.year_of_era == 1):
            return date
        raise FieldOutOfRange(Field.YEAR_OF_ERA, yoe, self.cal.range(Field.YEAR_OF_ERA),
                              f"{date.year}-{date.month:02d}-{date.day:02d} is not in era {era.name} "
                              f"(year-of-era {yoe}), it falls in {date.era.name}")

    # ---------------------------------------------------------
    # Branches
    # ---------------------------------------------------------

    def _resolve_ymd(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            months = fields.pop(Field.MONTH_OF_YEAR) - 1
            days = fields.pop(Field.DAY_OF_MONTH) - 1
            return self.cal.date(y, 1, 1).plus_months(months).plus_days(days)
        moy = self._check(fields, Field.MONTH_OF_YEAR)
        dom = self._check(fields, Field.DAY_OF_MONTH)
        if style is SMART:
            dom = min(dom, self.cal.month_length(y, moy))
        return self.cal.date(y, moy, dom)

    def _resolve_yd(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            days = fields.pop(Field.DAY_OF_YEAR) - 1
            return self.cal.date_year_day(y, 1).plus_days(days)
        doy = self._check(fields, Field.DAY_OF_YEAR)
        return self.cal.date_year_day(y, doy)

    def _resolve_ymaa(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            months = fields.pop(Field.MONTH_OF_YEAR) - 1
            weeks = self._take(fields, Field.ALIGNED_WEEK_OF_MONTH) - 1
            days = self._take(fields, Field.ALIGNED_DAY_OF_WEEK_IN_MONTH) - 1
            return self.cal.date(y, 1, 1).plus_months(months).plus_weeks(weeks).plus_days(days)
        moy = self._check(fields, Field.MONTH_OF_YEAR)
        aw = self._check(fields, Field.ALIGNED_WEEK_OF_MONTH)
        ad = self._check(fields, Field.ALIGNED_DAY_OF_WEEK_IN_MONTH)
        date = self.cal.date(y, moy, 1).plus_days((aw - 1) * 7 + (ad - 1))
        if style is STRICT and date.month != moy:
            raise AmbiguousComposition(Field.MONTH_OF_YEAR, moy, date.month)
        return date

    def _resolve_ymad(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            months = fields.pop(Field.MONTH_OF_YEAR) - 1
            weeks = self._take(fields, Field.ALIGNED_WEEK_OF_MONTH) - 1
            dow = fields.pop(Field.DAY_OF_WEEK)
            return resolve_aligned(self.cal.date(y, 1, 1), months, weeks, dow)
        moy = self._check(fields, Field.MONTH_OF_YEAR)
        aw = self._check(fields, Field.ALIGNED_WEEK_OF_MONTH)
        dow = self._check(fields, Field.DAY_OF_WEEK)
        date = self.cal.date(y, moy, 1).plus_weeks(aw - 1).next_or_same(dow)
        if style is STRICT and date.month != moy:
            raise AmbiguousComposition(Field.MONTH_OF_YEAR, moy, date.month)
        return date

    def _resolve_yaa(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            weeks = self._take(fields, Field.ALIGNED_WEEK_OF_YEAR) - 1
            days = self._take(fields, Field.ALIGNED_DAY_OF_WEEK_IN_YEAR) - 1
            return self.cal.date_year_day(y, 1).plus_weeks(weeks).plus_days(days)
        aw = self._check(fields, Field.ALIGNED_WEEK_OF_YEAR)
        ad = self._check(fields, Field.ALIGNED_DAY_OF_WEEK_IN_YEAR)
        date = self.cal.date_year_day(y, 1).plus_days((aw - 1) * 7 + (ad - 1))
        if style is STRICT and date.year != y:
            raise AmbiguousComposition(Field.YEAR, y, date.year)
        return date

    def _resolve_yad(self, fields: FieldBag, style: ResolverStyle) -> "CalendarDate":
        y = self._check(fields, Field.YEAR)
        if style is LENIENT:
            weeks = self._take(fields, Field.ALIGNED_WEEK_OF_YEAR) - 1
            dow = fields.pop(Field.DAY_OF_WEEK)
            return resolve_aligned(self.cal.date_year_day(y, 1), 0, weeks, dow)
        aw = self._check(fields, Field.ALIGNED_WEEK_OF_YEAR)
        dow = self._check(fields, Field.DAY_OF_WEEK)
        date = self.cal.date_year_day(y, 1).plus_weeks(aw - 1).next_or_same(dow)
        if style is STRICT and date.year != y:
            raise AmbiguousComposition(Field.YEAR, y, date.year)
        return date


def resolve_aligned(base: "CalendarDate", months: int, weeks: int, dow: int) -> "CalendarDate":
    """
    base + months + weeks, then forward to the given day of week.

    A day of week outside 1..7 first moves by whole weeks, so 8 is the Monday
    of the following week and 0 the Sunday of the preceding one.
    """
    date = base.plus_months(months).plus_weeks(weeks)
    date = date.plus_weeks((dow - 1) // 7)
    return date.next_or_same((dow - 1) % 7 + 1)
