"""
calchrono.engines.interfaces
----------------------------
Defines the boundaries between the day count of a calendar (date <-> epoch
day arithmetic), its era rule (year-of-era labelling) and the orchestrator
(CalendarSystem) that binds the two.

Standard Reference Frame:
All day counts share the epoch day: days since 1970-01-01 (ISO), so any two
calendars can convert through it.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple

from calchrono.core.types import Era, Field, ValueRange


class DayCountProtocol(Protocol):
    """
    Handles the discrete day arithmetic. Maps (proleptic year, month, day)
    labels to epoch days and back, and reports month and year lengths.
    """

    @property
    def months_per_year(self) -> Optional[int]:
        """Fixed number of months in every year, or None when it varies."""
        ...

    @property
    def min_year(self) -> int:
        ...

    @property
    def max_year(self) -> int:
        ...

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        """Epoch day of a label. Raises FieldOutOfRange for invalid labels."""
        ...

    def date_of(self, epoch_day: int) -> Tuple[int, int, int]:
        """(year, month, day) of an epoch day. Raises FieldOutOfRange outside the calendar."""
        ...

    def month_length(self, year: int, month: int) -> int:
        ...

    def year_length(self, year: int) -> int:
        ...

    def is_leap_year(self, year: int) -> bool:
        ...

    def field_range(self, field: Field) -> ValueRange:
        """Calendar-wide range of a field (not refined by any particular date)."""
        ...


class EraRuleProtocol(Protocol):
    """
    Maps between proleptic years and (era, year-of-era) labels.
    """

    @property
    def eras(self) -> Tuple[Era, ...]:
        """All eras, oldest first. The last one is the current era."""
        ...

    def era_of(self, value: int) -> Era:
        ...

    def era_for(self, year: int, month: int, day: int) -> Era:
        """Era containing a date given by proleptic year, month and day."""
        ...

    def year_of_era(self, year: int, month: int, day: int) -> int:
        ...

    def proleptic_year(self, era: Era, year_of_era: int, *, lenient: bool = False) -> int:
        ...

    def era_range(self) -> ValueRange:
        ...

    def year_of_era_range(self, year_range: ValueRange) -> ValueRange:
        ...
