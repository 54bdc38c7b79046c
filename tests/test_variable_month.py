# tests/test_variable_month.py

import random
import threading

import pytest

from calchrono.core.errors import ConfigurationError, FieldOutOfRange
from calchrono.core.types import Field
from calchrono.engines.table_config import MonthTableConfig
from calchrono.engines.variable_month import (
    TableDayParams,
    VariableMonthDayCount,
    VariableMonthTable,
)

COMMON = (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29)
LEAP = (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 30)
ANCHOR = 1000


@pytest.fixture
def small_table():
    return VariableMonthTable(1, 3, {1: COMMON, 2: LEAP, 3: COMMON}, ANCHOR)


def test_example_year(small_table):
    assert small_table.month_length(1, 1) == 30
    assert small_table.month_length(1, 2) == 29
    assert small_table.year_length(1) == 354
    assert small_table.is_leap_year(1) is False
    assert small_table.year_length(2) == 355
    assert small_table.is_leap_year(2) is True
    assert small_table.epoch_day_of(1, 1, 1) == ANCHOR
    assert small_table.epoch_day_of(2, 1, 1) == ANCHOR + 354


def test_table_shape(small_table):
    starts = small_table.month_starts
    assert len(starts) == 3 * 12 + 1
    for a, b in zip(starts, starts[1:]):
        assert 29 <= b - a <= 32
    for y in range(1, 4):
        assert sum(small_table.month_length(y, m) for m in range(1, 13)) == small_table.year_length(y)
        assert small_table.is_leap_year(y) == (small_table.year_length(y) > 354)


def test_cached_scalars(small_table):
    assert (small_table.min_year, small_table.max_year) == (1, 3)
    assert (small_table.min_month_length, small_table.max_month_length) == (29, 30)
    assert (small_table.min_year_length, small_table.max_year_length) == (354, 355)
    assert small_table.min_epoch_day == ANCHOR
    assert small_table.max_epoch_day == ANCHOR + 354 + 355 + 354


def test_roundtrip_every_day(small_table):
    for epoch_day in range(small_table.min_epoch_day, small_table.max_epoch_day):
        y, m, d = small_table.date_of(epoch_day)
        assert small_table.epoch_day_of(y, m, d) == epoch_day
        assert small_table.day_of_year(y, m, d) == epoch_day - small_table.epoch_day_of(y, 1, 1) + 1


def test_bounds(small_table):
    with pytest.raises(FieldOutOfRange) as ei:
        small_table.date_of(ANCHOR - 1)
    assert ei.value.field is Field.EPOCH_DAY
    with pytest.raises(FieldOutOfRange):
        small_table.date_of(small_table.max_epoch_day)
    with pytest.raises(FieldOutOfRange) as ei:
        small_table.epoch_day_of(1, 2, 30)
    assert ei.value.field is Field.DAY_OF_MONTH
    assert ei.value.valid_range.maximum == 29
    with pytest.raises(FieldOutOfRange):
        small_table.epoch_day_of(4, 1, 1)
    with pytest.raises(FieldOutOfRange):
        small_table.epoch_day_of(1, 13, 1)
    assert small_table.is_leap_year(99) is False


def test_field_ranges(small_table):
    dom = small_table.field_range(Field.DAY_OF_MONTH)
    assert (dom.minimum, dom.max_smallest, dom.maximum) == (1, 29, 30)
    doy = small_table.field_range(Field.DAY_OF_YEAR)
    assert (doy.max_smallest, doy.maximum) == (354, 355)
    assert small_table.field_range(Field.YEAR).maximum == 3
    assert small_table.field_range(Field.PROLEPTIC_MONTH).maximum == 3 * 12 + 11


@pytest.mark.parametrize(
    "years, lengths",
    [
        ((1, 2), {1: COMMON}),                              # year 2 missing
        ((1, 1), {1: COMMON[:11]}),                         # 11 months
        ((1, 1), {1: (28,) + COMMON[1:]}),                  # too short
        ((1, 1), {1: (33,) + COMMON[1:]}),                  # too long
        ((2, 1), {1: COMMON, 2: COMMON}),                   # inverted range
    ],
)
def test_construction_errors(years, lengths):
    with pytest.raises(ConfigurationError):
        VariableMonthTable(years[0], years[1], lengths, ANCHOR)


def test_from_config():
    cfg = MonthTableConfig("T", "t", "1", (1970, 1, 1), {5: COMMON, 6: LEAP})
    table = VariableMonthTable.from_config(cfg)
    assert table.epoch_day_of(5, 1, 1) == 0
    assert table.date_of(354) == (6, 1, 1)


# --- the bundled tabular Hijrah data ---

@pytest.fixture(scope="module")
def hijrah():
    return VariableMonthDayCount.from_params(
        "Hijrah-civil", "islamic-civil",
        TableDayParams(resource="hijrah-config-islamic-civil.properties"),
    )


def test_hijrah_known_days(hijrah):
    # 1 Muharram 1400 = 1979-11-21, 1 Muharram 1445 = 2023-07-19
    assert hijrah.epoch_day_of(1400, 1, 1) == 3611
    assert hijrah.epoch_day_of(1445, 1, 1) == 19557
    assert hijrah.epoch_day_of(1446, 1, 1) == 19912
    assert hijrah.date_of(19557) == (1445, 1, 1)
    assert hijrah.date_of(19556) == (1444, 12, 29)
    assert hijrah.year_length(1445) == 355
    assert hijrah.is_leap_year(1445)
    assert not hijrah.is_leap_year(1446)
    assert hijrah.month_length(1445, 12) == 30
    assert hijrah.month_length(1446, 12) == 29
    assert (hijrah.min_year, hijrah.max_year) == (1300, 1600)
    assert hijrah.table.max_epoch_day == 74839


def test_hijrah_leap_cycle(hijrah):
    for y in range(1300, 1601):
        assert hijrah.is_leap_year(y) == ((14 + 11 * y) % 30 < 11)


def test_hijrah_roundtrip(hijrah):
    random.seed(1445)
    table = hijrah.table
    for _ in range(5000):
        epoch_day = random.randrange(table.min_epoch_day, table.max_epoch_day)
        assert hijrah.epoch_day_of(*hijrah.date_of(epoch_day)) == epoch_day


# --- lazy, once-only construction ---

def _counting_source(cfg, delay_event=None):
    calls = []

    def source():
        calls.append(1)
        if delay_event is not None:
            delay_event.wait(1.0)
        return cfg
    return source, calls


def test_lazy_build_runs_once_under_threads():
    cfg = MonthTableConfig("Lazy", "lazy", "1", (2000, 1, 1), {1: COMMON, 2: LEAP})
    release = threading.Event()
    source, calls = _counting_source(cfg, release)
    dc = VariableMonthDayCount("Lazy", "lazy", source)
    assert not dc.is_built

    seen = []
    threads = [threading.Thread(target=lambda: seen.append(dc.table)) for _ in range(8)]
    for t in threads:
        t.start()
    release.set()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(seen) == 8
    assert all(t is seen[0] for t in seen)
    assert dc.is_built


def test_failed_build_is_sticky(caplog):
    def source():
        calls.append(1)
        raise ConfigurationError("broken data")
    calls = []
    dc = VariableMonthDayCount("Broken", "broken", source)

    with caplog.at_level("ERROR"):
        with pytest.raises(ConfigurationError) as first:
            dc.month_length(1, 1)
    with pytest.raises(ConfigurationError) as second:
        dc.epoch_day_of(1, 1, 1)

    assert first.value is second.value
    assert "Unable to initialize calendar: Broken" in str(first.value)
    assert isinstance(first.value.__cause__, ConfigurationError)
    assert len(calls) == 1
    assert "broken data" in caplog.text
    assert not dc.is_built


def test_config_for_another_calendar_is_rejected():
    cfg = MonthTableConfig("Other", "lazy", "1", (2000, 1, 1), {1: COMMON})
    dc = VariableMonthDayCount("Lazy", "lazy", lambda: cfg)
    with pytest.raises(ConfigurationError):
        dc.year_length(1)


def test_table_params_need_one_source():
    with pytest.raises(ValueError):
        TableDayParams()
    with pytest.raises(ValueError):
        TableDayParams(resource="a", path="b")
