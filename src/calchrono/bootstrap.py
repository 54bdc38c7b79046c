from __future__ import annotations
from calchrono.core.engine import CalendarRegistry
from calchrono.engines.specs import ALL_SPECS
from calchrono.engines.factory import build_calendar

def build_registry() -> CalendarRegistry:
    reg = CalendarRegistry()
    for spec in ALL_SPECS.values():
        reg.register(build_calendar(spec), aliases=spec.aliases)
    return reg
