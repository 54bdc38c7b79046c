"""
calchrono.engines.table_config
------------------------------
Reads the configuration record of a tabulated (variable-month) calendar.

The record is a properties-style text:

    id=Hijrah-civil
    type=islamic-civil
    version=1.0
    iso-start=1882-11-12
    1300=30 29 30 29 30 29 30 29 30 29 30 30
    ...

One line per year holds the twelve month lengths, whitespace separated.
"""

from __future__ import annotations

import importlib.resources
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Tuple

from calchrono.core.errors import ConfigurationError
from calchrono.core.time import gregorian_month_length, parse_ymd

logger = logging.getLogger(__name__)

KEY_ID = "id"
KEY_TYPE = "type"
KEY_VERSION = "version"
KEY_ISO_START = "iso-start"

DATA_PACKAGE = "calchrono.data"


@dataclass(frozen=True)
class MonthTableConfig:
    calendar_id: str
    calendar_type: str
    version: str
    iso_start: Tuple[int, int, int]
    years: Mapping[int, Tuple[int, ...]]

    @property
    def min_year(self) -> int:
        return min(self.years)

    @property
    def max_year(self) -> int:
        return max(self.years)


def _parse_months(key: str, line: str) -> Tuple[int, ...]:
    numbers = line.split()
    if len(numbers) != 12:
        raise ConfigurationError(f"wrong number of months on line for year {key}: {numbers}; count: {len(numbers)}")
    try:
        return tuple(int(n) for n in numbers)
    except ValueError:
        raise ConfigurationError(f"bad month length for year {key}: {line!r}") from None


def _parse_iso_start(value: str) -> Tuple[int, int, int]:
    try:
        y, m, d = parse_ymd(value)
    except ValueError as ex:
        raise ConfigurationError(f"iso-start must be yyyy-MM-dd, got {value!r}") from ex
    if not (1 <= m <= 12) or not (1 <= d <= gregorian_month_length(y, m)):
        raise ConfigurationError(f"iso-start is not a valid ISO date: {value!r}")
    return y, m, d


def parse_table_config(text: str) -> MonthTableConfig:
    """Parse a configuration record. Raises ConfigurationError on malformed input."""
    props: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        sep = line.find("=")
        if sep < 0:
            sep = line.find(":")
        if sep < 0:
            raise ConfigurationError(f"bad line, expected key=value: {line!r}")
        key, value = line[:sep].strip(), line[sep + 1:].strip()
        if key in props:
            raise ConfigurationError(f"duplicate key: {key}")
        props[key] = value

    years: Dict[int, Tuple[int, ...]] = {}
    for key, value in props.items():
        if key in (KEY_ID, KEY_TYPE, KEY_VERSION, KEY_ISO_START):
            continue
        try:
            year = int(key)
        except ValueError:
            raise ConfigurationError(f"bad key: {key}") from None
        years[year] = _parse_months(key, value)

    version = props.get(KEY_VERSION, "")
    if not version:
        raise ConfigurationError("Configuration does not contain a version")
    if KEY_ISO_START not in props:
        raise ConfigurationError("Configuration does not contain a ISO start date")
    if not years:
        raise ConfigurationError("Configuration does not contain any year")

    return MonthTableConfig(
        calendar_id=props.get(KEY_ID, ""),
        calendar_type=props.get(KEY_TYPE, ""),
        version=version,
        iso_start=_parse_iso_start(props[KEY_ISO_START]),
        years=years,
    )


def load_table_resource(name: str, *, package: str = DATA_PACKAGE) -> MonthTableConfig:
    """Load a configuration bundled as package data."""
    try:
        path = importlib.resources.files(package).joinpath(name)
        text = path.read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError) as ex:
        raise ConfigurationError(f"Unable to read calendar data resource {package}/{name}") from ex
    logger.debug("Loaded calendar data resource %s/%s", package, name)
    return parse_table_config(text)


def load_table_file(path: str | Path) -> MonthTableConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as ex:
        raise ConfigurationError(f"Unable to read calendar data file {path}") from ex
    return parse_table_config(text)
