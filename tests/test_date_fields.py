# tests/test_date_fields.py

from datetime import date

import pytest

import calchrono
from calchrono import Field, FieldOutOfRange, UnsupportedField, ValueRange


def cal(name):
    return calchrono.get_calendar(name)


def iso(y, m, d):
    return cal("ISO").date(y, m, d)


def test_range_follows_the_month_and_year():
    hijrah = cal("Hijrah-civil")
    # civil months alternate 30/29; AH 1445 is a leap year
    assert hijrah.date(1445, 1, 10).range(Field.DAY_OF_MONTH) == ValueRange.of(1, 30)
    assert hijrah.date(1445, 2, 10).range(Field.DAY_OF_MONTH) == ValueRange.of(1, 29)
    assert hijrah.date(1445, 2, 10).range(Field.DAY_OF_YEAR) == ValueRange.of(1, 355)
    assert hijrah.date(1446, 2, 10).range(Field.DAY_OF_YEAR) == ValueRange.of(1, 354)
    assert hijrah.date(1446, 2, 10).range(Field.ALIGNED_WEEK_OF_YEAR) == ValueRange.of(1, 51)

    assert iso(2023, 2, 10).range(Field.DAY_OF_MONTH) == ValueRange.of(1, 28)
    assert iso(2023, 2, 10).range(Field.ALIGNED_WEEK_OF_MONTH) == ValueRange.of(1, 4)
    assert iso(2024, 2, 10).range(Field.ALIGNED_WEEK_OF_MONTH) == ValueRange.of(1, 5)
    assert iso(2023, 2, 10).range(Field.ALIGNED_WEEK_OF_YEAR) == ValueRange.of(1, 53)

    # fields that do not depend on the date come from the calendar
    assert hijrah.date(1445, 2, 10).range(Field.YEAR) == hijrah.range(Field.YEAR)
    assert iso(2023, 2, 10).range("month") == ValueRange.of(1, 12)


def test_range_of_unsupported_field():
    d = cal("Japanese").date(2020, 1, 1)
    with pytest.raises(UnsupportedField):
        d.range(Field.ALIGNED_WEEK_OF_MONTH)


def test_with_day_fields_must_fit():
    d = iso(2023, 2, 10)
    assert d.with_field(Field.DAY_OF_MONTH, 28) == iso(2023, 2, 28)
    with pytest.raises(FieldOutOfRange):
        d.with_field(Field.DAY_OF_MONTH, 29)
    with pytest.raises(FieldOutOfRange):
        d.with_field(Field.DAY_OF_MONTH, 32)

    assert iso(2024, 3, 1).with_field(Field.DAY_OF_YEAR, 1) == iso(2024, 1, 1)
    assert iso(2024, 3, 1).with_field(Field.DAY_OF_YEAR, 366) == iso(2024, 12, 31)
    with pytest.raises(FieldOutOfRange):
        iso(2023, 3, 1).with_field(Field.DAY_OF_YEAR, 366)

    hijrah = cal("Hijrah-civil")
    assert hijrah.date(1445, 1, 10).with_field("day", 30).day == 30
    with pytest.raises(FieldOutOfRange):
        hijrah.date(1445, 2, 10).with_field("day", 30)


def test_with_year_and_month_clamp_the_day():
    assert iso(2023, 1, 31).with_field(Field.MONTH_OF_YEAR, 2) == iso(2023, 2, 28)
    assert iso(2024, 2, 29).with_field(Field.YEAR, 2023) == iso(2023, 2, 28)
    assert iso(2024, 1, 31).with_field(Field.PROLEPTIC_MONTH, 2024 * 12 + 1) == iso(2024, 2, 29)
    with pytest.raises(FieldOutOfRange):
        iso(2024, 1, 31).with_field(Field.MONTH_OF_YEAR, 13)

    hijrah = cal("Hijrah-civil")
    assert hijrah.date(1445, 1, 30).with_field(Field.MONTH_OF_YEAR, 2) == hijrah.date(1445, 2, 29)
    # month 12 has 30 days only in leap years
    assert hijrah.date(1445, 12, 30).with_field(Field.YEAR, 1446) == hijrah.date(1446, 12, 29)


def test_with_week_fields_move_by_days():
    d = iso(2024, 1, 3)  # a Wednesday
    assert d.with_field(Field.DAY_OF_WEEK, 1) == iso(2024, 1, 1)
    assert d.with_field(Field.DAY_OF_WEEK, 7) == iso(2024, 1, 7)
    assert d.with_field(Field.ALIGNED_WEEK_OF_MONTH, 3) == iso(2024, 1, 17)
    assert d.with_field(Field.ALIGNED_WEEK_OF_YEAR, 10) == iso(2024, 3, 6)
    assert d.with_field(Field.ALIGNED_DAY_OF_WEEK_IN_YEAR, 7) == iso(2024, 1, 7)
    assert iso(2024, 1, 10).with_field(Field.ALIGNED_DAY_OF_WEEK_IN_MONTH, 1) == iso(2024, 1, 8)

    with pytest.raises(UnsupportedField):
        cal("Japanese").date(2024, 1, 3).with_field(Field.ALIGNED_WEEK_OF_MONTH, 2)


def test_with_era_fields():
    d = iso(2024, 5, 1)
    bce = d.with_field(Field.ERA, 0)
    assert bce.year == -2023
    assert (bce.era.name, bce.year_of_era) == ("BCE", 2024)
    assert d.with_field(Field.YEAR_OF_ERA, 2000) == iso(2000, 5, 1)

    thai = cal("ThaiBuddhist").date_from(date(2024, 1, 1))
    assert thai.year_of_era == 2567
    assert thai.with_field(Field.YEAR_OF_ERA, 2566).to_iso() == date(2023, 1, 1)

    reiwa6 = cal("Japanese").date_from(date(2024, 5, 1))
    assert reiwa6.with_field(Field.YEAR_OF_ERA, 1).to_iso() == date(2019, 5, 1)
    heisei6 = reiwa6.with_field(Field.ERA, 2)
    assert heisei6.to_iso() == date(1994, 5, 1)
    assert (heisei6.era.name, heisei6.year_of_era) == ("Heisei", 6)


def test_with_epoch_day():
    assert iso(2024, 5, 1).with_field(Field.EPOCH_DAY, 0) == iso(1970, 1, 1)
