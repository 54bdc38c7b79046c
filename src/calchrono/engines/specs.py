from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Tuple

from ..core.types import Field
from .eras import DatedEraParams, OffsetEraParams, SingleEraParams
from .gregorian import GregorianDayParams
from .variable_month import TableDayParams


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data description of a calendar system; see factory.build_calendar."""
    id: str
    calendar_type: str
    day_params: Any   # GregorianDayParams | TableDayParams
    era_params: Any   # OffsetEraParams | DatedEraParams | SingleEraParams
    aliases: Tuple[str, ...] = ()
    unsupported_fields: FrozenSet[Field] = field(default_factory=frozenset)
    meta: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @staticmethod
    def like(name: str) -> "CalendarSpec":
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "CalendarSpec":
        return replace(self, **kwargs)


ALIGNED_FIELDS = frozenset({
    Field.ALIGNED_WEEK_OF_MONTH,
    Field.ALIGNED_DAY_OF_WEEK_IN_MONTH,
    Field.ALIGNED_WEEK_OF_YEAR,
    Field.ALIGNED_DAY_OF_WEEK_IN_YEAR,
})


# ============================================================
# GREGORIAN-BASED CALENDARS
# ============================================================

ISO = CalendarSpec(
    id="ISO",
    calendar_type="iso8601",
    day_params=GregorianDayParams(),
    era_params=OffsetEraParams(before="BCE", after="CE"),
    meta={"description": "Proleptic Gregorian calendar"},
)

# Buddhist era: ISO year + 543
THAI_BUDDHIST = CalendarSpec(
    id="ThaiBuddhist",
    calendar_type="buddhist",
    day_params=GregorianDayParams(year_offset=543),
    era_params=OffsetEraParams(before="BEFORE_BE", after="BE"),
    meta={"description": "Thai solar calendar, Buddhist era"},
)

# Republic of China era: ISO year - 1911
MINGUO = CalendarSpec(
    id="Minguo",
    calendar_type="roc",
    day_params=GregorianDayParams(year_offset=-1911),
    era_params=OffsetEraParams(before="BEFORE_ROC", after="ROC"),
    meta={"description": "Minguo calendar, Republic of China era"},
)

# Gregorian rules were adopted in Japan from Meiji 6 (1873-01-01).
JAPANESE = CalendarSpec(
    id="Japanese",
    calendar_type="japanese",
    day_params=GregorianDayParams(min_iso_year=1873),
    era_params=DatedEraParams(eras=(
        (-1, "Meiji", (1868, 1, 1)),
        (0, "Taisho", (1912, 7, 30)),
        (1, "Showa", (1926, 12, 25)),
        (2, "Heisei", (1989, 1, 8)),
        (3, "Reiwa", (2019, 5, 1)),
    )),
    unsupported_fields=ALIGNED_FIELDS,
    meta={"description": "Japanese imperial calendar, ISO years labelled by era"},
)

GREGORIAN_SPECS = {
    "ISO": ISO,
    "ThaiBuddhist": THAI_BUDDHIST,
    "Minguo": MINGUO,
    "Japanese": JAPANESE,
}


# ============================================================
# TABULATED CALENDARS
# ============================================================

HIJRAH_CIVIL = CalendarSpec(
    id="Hijrah-civil",
    calendar_type="islamic-civil",
    day_params=TableDayParams(resource="hijrah-config-islamic-civil.properties"),
    era_params=SingleEraParams(name="AH"),
    aliases=("Hijrah", "islamic"),
    meta={"description": "Tabular Islamic calendar (civil epoch), AH 1300-1600"},
)

TABLE_SPECS = {
    "Hijrah-civil": HIJRAH_CIVIL,
}

ALL_SPECS: Dict[str, CalendarSpec] = {**GREGORIAN_SPECS, **TABLE_SPECS}
