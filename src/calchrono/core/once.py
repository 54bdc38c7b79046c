"""
calchrono.core.once
-------------------
One-shot lazy initialization shared between threads.

Readers either see the completed value or block on the lock until the first
caller has finished building it. A factory that raises CalendarError is never
retried: the error is stored and raised again on every later access.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

from .errors import CalendarError

T = TypeVar("T")

_UNSET = object()


class OnceCell(Generic[T]):
    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._value: object = _UNSET
        self._error: Optional[CalendarError] = None

    @property
    def is_initialized(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._error is not None:
                raise self._error
            if self._value is _UNSET:
                try:
                    self._value = self._factory()
                except CalendarError as ex:
                    self._error = ex
                    raise
            return self._value  # type: ignore[return-value]
