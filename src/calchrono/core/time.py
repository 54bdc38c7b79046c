from __future__ import annotations
from datetime import date
from typing import Tuple

# JDN of 1970-01-01, the origin of the epoch-day count shared by every calendar.
JDN_UNIX_EPOCH = 2440588

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_gregorian_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def gregorian_month_length(year: int, month: int) -> int:
    if month == 2 and is_gregorian_leap(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def to_jdn(y: int, m: int, day: int) -> int:
    """Convert a proleptic Gregorian date to Julian Day Number (JDN).

    Floor division keeps the formula valid for years before -4800 as well.
    """
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def iso_to_epoch_day(y: int, m: int, d: int) -> int:
    return to_jdn(y, m, d) - JDN_UNIX_EPOCH


def epoch_day_to_iso(epoch_day: int) -> Tuple[int, int, int]:
    return from_jdn(epoch_day + JDN_UNIX_EPOCH)


def date_to_epoch_day(d: date) -> int:
    return iso_to_epoch_day(d.year, d.month, d.day)


def epoch_day_to_date(epoch_day: int) -> date:
    """Only valid inside the range of datetime.date (years 1..9999)."""
    return date(*epoch_day_to_iso(epoch_day))


def parse_ymd(s: str) -> Tuple[int, int, int]:
    """Parse 'yyyy-MM-dd' (a leading '-' is allowed on the year)."""
    s = s.strip()
    sign = 1
    if s.startswith("-"):
        sign, s = -1, s[1:]
    parts = s.split("-")
    if len(parts) != 3:
        raise ValueError(f"date must be yyyy-MM-dd, got {s!r}")
    y, m, d = (int(p) for p in parts)
    return sign * y, m, d
