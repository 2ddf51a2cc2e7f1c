"""Wall-clock timing helpers."""

from __future__ import annotations

import time
from typing import Callable, TypeVar

T = TypeVar("T")


class Timer:
    """Measures the wall-clock time between :meth:`start` and :meth:`stop`."""

    def __init__(self, name: str = "null"):
        self.name = name
        self._start: float | None = None
        self._elapsed = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        if self._start is None:
            raise RuntimeError("timer was stopped before it was started")
        self._elapsed = time.perf_counter() - self._start

    def seconds(self) -> float:
        return self._elapsed

    def millisecs(self) -> float:
        return self._elapsed * 1e3

    def microsecs(self) -> float:
        return self._elapsed * 1e6

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()


def time_this(func: Callable[[], T], name: str) -> T:
    """Run ``func``, print its runtime under ``name`` and return its result."""
    with Timer(name) as timer:
        result = func()
    print(f"runtime[{timer.name}] = {timer.seconds()} sec")
    return result