from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from .errors import UnknownCalendar

if TYPE_CHECKING:
    from calchrono.engines.calendar import CalendarSystem

logger = logging.getLogger(__name__)


@dataclass
class CalendarRegistry:
    """
    Calendar systems by id, calendar type or alias.

    The first registration of a name wins; later ones are ignored and logged.
    """
    _calendars: Dict[str, "CalendarSystem"] = field(default_factory=dict)
    _names: Dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def register(self, calendar: "CalendarSystem", aliases: Iterable[str] = ()) -> "CalendarSystem":
        """
        Register a calendar. Returns the calendar that is registered under its
        id afterwards: the given one, or the earlier one if the id was taken.
        """
        with self._lock:
            existing = self._calendars.get(calendar.id)
            if existing is not None:
                logger.warning("Calendar %s already registered; ignoring duplicate", calendar.id)
                return existing
            self._calendars[calendar.id] = calendar
            for name in (calendar.id, calendar.calendar_type, *aliases):
                if name in self._names:
                    logger.warning("Calendar name %s already taken by %s; not mapping it to %s",
                                   name, self._names[name], calendar.id)
                    continue
                self._names[name] = calendar.id
            return calendar

    def find(self, name: str) -> Optional["CalendarSystem"]:
        with self._lock:
            cal_id = self._names.get(name)
            return self._calendars.get(cal_id) if cal_id is not None else None

    def get(self, name: str) -> "CalendarSystem":
        cal = self.find(name)
        if cal is None:
            raise UnknownCalendar(f"Unknown calendar '{name}'. Available: {self.list()}")
        return cal

    def list(self) -> List[str]:
        with self._lock:
            return sorted(self._calendars)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._names
