"""
performance.py
Per-operation timing: a pure accumulator plus the decorator that feeds it.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from typing import NamedTuple

log = logging.getLogger(__name__)

# Operation names
SORT_QUICK = "sort.quick"
SORT_MERGE = "sort.merge"
SORT_HEAP = "sort.heap"
SEARCH_HASH = "search.hash"
SEARCH_PREFIX = "search.prefix"
SEARCH_BINARY = "search.binary"
SEARCH_ADVANCED = "search.advanced"


class PerformanceSample(NamedTuple):
    operation: str
    duration_ns: int

    @property
    def duration_ms(self) -> float:
        return self.duration_ns / 1_000_000


class PerformanceMonitor:
    """
    Cumulative elapsed time per operation name, plus the most recent sample.
    Knows nothing about what the operations do.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._totals: dict[str, int] = {}
        self._last: PerformanceSample | None = None

    def record(self, operation: str, duration_ns: int) -> None:
        with self._lock:
            self._totals[operation] = self._totals.get(operation, 0) + duration_ns
            self._last = PerformanceSample(operation, duration_ns)

    def report(self) -> list[tuple[str, int]]:
        """(operation, cumulative_ns) pairs, fastest first."""
        with self._lock:
            return sorted(self._totals.items(), key=lambda item: item[1])

    def last_operation(self) -> PerformanceSample | None:
        return self._last

    def stats(self) -> dict[str, int]:
        with self._lock:
            return dict(self._totals)

    def reset(self) -> None:
        with self._lock:
            self._totals.clear()
            self._last = None

    def format_report(self) -> str:
        lines = ["Algorithm Performance Statistics", "=" * 32]
        last = self.last_operation()
        if last is not None:
            lines.append(f"Last Operation: {last.operation} ({last.duration_ms:.3f} ms)")
        lines.append("")
        lines.append("Cumulative Performance (total time in ms):")
        for operation, total_ns in self.report():
            lines.append(f"{operation:<15}: {total_ns / 1_000_000:.3f} ms")
        return "\n".join(lines) + "\n"


def timed(operation: str):
    """
    Method decorator: time the call and record it on `self.monitor`.
    Only completed calls are recorded.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            start = time.perf_counter_ns()
            result = func(self, *args, **kwargs)
            elapsed = time.perf_counter_ns() - start
            self.monitor.record(operation, elapsed)
            log.debug("%s took %d ns", operation, elapsed)
            return result

        return wrapper

    return decorator
