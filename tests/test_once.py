# tests/test_once.py

import threading
import time

import pytest

from calchrono.core.errors import ConfigurationError
from calchrono.core.once import OnceCell


def test_value_is_built_once_across_threads():
    calls = []

    def factory():
        calls.append(1)
        time.sleep(0.05)
        return object()

    cell = OnceCell(factory)
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(cell.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(v is seen[0] for v in seen)
    assert cell.is_initialized


def test_calendar_errors_are_sticky():
    calls = []

    def factory():
        calls.append(1)
        raise ConfigurationError("bad table")

    cell = OnceCell(factory)
    for _ in range(3):
        with pytest.raises(ConfigurationError, match="bad table"):
            cell.get()
    assert len(calls) == 1
    assert not cell.is_initialized


def test_other_errors_are_not_stored():
    attempts = []

    def factory():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("transient")
        return 42

    cell = OnceCell(factory)
    with pytest.raises(RuntimeError):
        cell.get()
    assert cell.get() == 42
    assert len(attempts) == 2
