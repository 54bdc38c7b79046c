# tests/test_eras.py

import pytest

import calchrono
from calchrono import CalendarMismatch, Field, FieldOutOfRange
from calchrono.engines.eras import DatedEraParams


def era_label(calendar, y, m, d):
    date = calchrono.get_calendar(calendar).date(y, m, d)
    return date.era.name, date.year_of_era


def test_iso_eras():
    iso = calchrono.get_calendar("ISO")
    bce, ce = iso.eras
    assert (bce.value, bce.name, ce.value, ce.name) == (0, "BCE", 1, "CE")
    assert era_label("ISO", 0, 1, 1) == ("BCE", 1)
    assert era_label("ISO", -1, 1, 1) == ("BCE", 2)
    assert iso.proleptic_year(bce, 1) == 0
    assert iso.proleptic_year(ce, 2024) == 2024
    assert iso.era_of(1) is ce


@pytest.mark.parametrize(
    "calendar, iso_year, era, yoe",
    [
        ("ThaiBuddhist", 2024, "BE", 2567),
        ("ThaiBuddhist", -543, "BEFORE_BE", 1),
        ("Minguo", 1912, "ROC", 1),
        ("Minguo", 1911, "BEFORE_ROC", 1),
        ("Minguo", 1900, "BEFORE_ROC", 12),
    ],
)
def test_offset_eras(calendar, iso_year, era, yoe):
    d = calchrono.convert(calchrono.date(iso_year, 6, 1), calendar)
    assert (d.era.name, d.year_of_era) == (era, yoe)
    c = calchrono.get_calendar(calendar)
    assert c.proleptic_year(d.era, yoe) == d.year


@pytest.mark.parametrize(
    "ymd, era, yoe",
    [
        ((1873, 1, 1), "Meiji", 6),
        ((1912, 7, 29), "Meiji", 45),
        ((1912, 7, 30), "Taisho", 1),
        ((1926, 12, 24), "Taisho", 15),
        ((1926, 12, 25), "Showa", 1),
        ((1989, 1, 7), "Showa", 64),
        ((1989, 1, 8), "Heisei", 1),
        ((2019, 4, 30), "Heisei", 31),
        ((2019, 5, 1), "Reiwa", 1),
        ((2024, 1, 1), "Reiwa", 6),
    ],
)
def test_japanese_eras(ymd, era, yoe):
    assert era_label("Japanese", *ymd) == (era, yoe)


def test_japanese_date_of_era():
    jp = calchrono.get_calendar("Japanese")
    heisei = jp.era_of(2)
    assert jp.date_of_era(heisei, 31, 4, 30).to_iso().isoformat() == "2019-04-30"
    # Heisei 31-05-01 is already Reiwa 1
    with pytest.raises(FieldOutOfRange):
        jp.date_of_era(heisei, 31, 5, 1)
    with pytest.raises(FieldOutOfRange):
        jp.proleptic_year(heisei, 32)
    assert jp.proleptic_year(heisei, 32, lenient=True) == 2020


def test_japanese_lower_bound():
    jp = calchrono.get_calendar("Japanese")
    with pytest.raises(FieldOutOfRange):
        jp.date(1872, 12, 31)
    with pytest.raises(FieldOutOfRange):
        calchrono.convert(calchrono.date(1872, 12, 31), "Japanese")
    assert jp.range(Field.YEAR).minimum == 1873


def test_year_of_era_ranges():
    iso = calchrono.get_calendar("ISO").range(Field.YEAR_OF_ERA)
    assert (iso.minimum, iso.max_smallest, iso.maximum) == (1, 999_999_999, 1_000_000_000)
    thai = calchrono.get_calendar("ThaiBuddhist").range(Field.YEAR_OF_ERA)
    assert (thai.max_smallest, thai.maximum) == (999_999_457, 1_000_000_542)
    jp = calchrono.get_calendar("Japanese").range(Field.YEAR_OF_ERA)
    assert jp.max_smallest == 15
    hijrah = calchrono.get_calendar("Hijrah").range(Field.YEAR_OF_ERA)
    assert (hijrah.minimum, hijrah.maximum) == (1300, 1600)
    assert calchrono.get_calendar("Japanese").range(Field.ERA).minimum == -1


def test_foreign_or_unknown_era():
    iso = calchrono.get_calendar("ISO")
    roc = calchrono.get_calendar("Minguo").era_of(1)
    with pytest.raises(CalendarMismatch):
        iso.proleptic_year(roc, 1)
    with pytest.raises(FieldOutOfRange) as ei:
        iso.era_of(9)
    assert ei.value.field is Field.ERA


def test_dated_era_params_validation():
    with pytest.raises(ValueError):
        DatedEraParams(eras=())
    with pytest.raises(ValueError):
        DatedEraParams(eras=((1, "B", (2000, 1, 1)), (0, "A", (2010, 1, 1))))
