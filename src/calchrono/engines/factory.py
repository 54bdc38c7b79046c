"""
calchrono.engines.factory
-------------------------
Transforms pure data specifications into live CalendarSystem objects.
"""

from __future__ import annotations

from calchrono.engines.calendar import CalendarSystem
from calchrono.engines.eras import (
    DatedEraParams,
    DatedEras,
    OffsetEraParams,
    OffsetEras,
    SingleEra,
    SingleEraParams,
)
from calchrono.engines.gregorian import GregorianDayCount, GregorianDayParams
from calchrono.engines.specs import CalendarSpec
from calchrono.engines.variable_month import TableDayParams, VariableMonthDayCount


def build_calendar(spec: CalendarSpec) -> CalendarSystem:
    """
    Transforms a CalendarSpec into a CalendarSystem.

    Tabulated calendars are built lazily: no data is read until the first
    date operation.
    """
    # 1. Build the day count
    if isinstance(spec.day_params, GregorianDayParams):
        day_count = GregorianDayCount(spec.day_params)
    elif isinstance(spec.day_params, TableDayParams):
        day_count = VariableMonthDayCount.from_params(spec.id, spec.calendar_type, spec.day_params)
    else:
        raise TypeError(f"Unknown day params type: {type(spec.day_params)}")

    # 2. Build the era rule
    if isinstance(spec.era_params, OffsetEraParams):
        era_rule = OffsetEras(spec.id, spec.era_params)
    elif isinstance(spec.era_params, DatedEraParams):
        era_rule = DatedEras(spec.id, spec.era_params)
    elif isinstance(spec.era_params, SingleEraParams):
        era_rule = SingleEra(spec.id, spec.era_params)
    else:
        raise TypeError(f"Unknown era params type: {type(spec.era_params)}")

    # 3. Orchestrate
    return CalendarSystem(
        id=spec.id,
        calendar_type=spec.calendar_type,
        day_count=day_count,
        era_rule=era_rule,
        unsupported_fields=spec.unsupported_fields,
    )
