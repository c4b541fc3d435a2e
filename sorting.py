"""
sorting.py
Quick sort by name, merge sort by rating, heap sort by monthly fee.
Each works on a private copy; the caller's sequence is never reordered.
"""

from __future__ import annotations

from typing import Callable, Iterable

from fees import DEFAULT_RATES, RateConfig, monthly_fee_for
from models import FeePolicy, MemberRecord
from performance import SORT_HEAP, SORT_MERGE, SORT_QUICK, PerformanceMonitor, timed


# ---------- quick sort (Lomuto, last-element pivot) ----------

def _partition(items: list, key: Callable, low: int, high: int) -> int:
    pivot = key(items[high])
    i = low - 1
    for j in range(low, high):
        if key(items[j]) <= pivot:
            i += 1
            items[i], items[j] = items[j], items[i]
    items[i + 1], items[high] = items[high], items[i + 1]
    return i + 1


def _quick_sort(items: list, key: Callable, low: int, high: int) -> None:
    # recurse on the smaller side, loop on the larger: stack depth O(log n)
    while low < high:
        p = _partition(items, key, low, high)
        if p - low < high - p:
            _quick_sort(items, key, low, p - 1)
            low = p + 1
        else:
            _quick_sort(items, key, p + 1, high)
            high = p - 1


# ---------- merge sort (stable, descending) ----------

def _merge_desc(items: list, key: Callable, left: int, middle: int, right: int) -> None:
    left_part = items[left:middle + 1]
    right_part = items[middle + 1:right + 1]
    i = j = 0
    k = left
    while i < len(left_part) and j < len(right_part):
        # >= keeps the left element first on ties
        if key(left_part[i]) >= key(right_part[j]):
            items[k] = left_part[i]
            i += 1
        else:
            items[k] = right_part[j]
            j += 1
        k += 1
    while i < len(left_part):
        items[k] = left_part[i]
        i += 1
        k += 1
    while j < len(right_part):
        items[k] = right_part[j]
        j += 1
        k += 1


def _merge_sort_desc(items: list, key: Callable, left: int, right: int) -> None:
    if left < right:
        middle = left + (right - left) // 2
        _merge_sort_desc(items, key, left, middle)
        _merge_sort_desc(items, key, middle + 1, right)
        _merge_desc(items, key, left, middle, right)


# ---------- heap sort (in place, descending) ----------

def _sift_down(items: list, key: Callable, size: int, root: int) -> None:
    while True:
        largest = root
        left = 2 * root + 1
        right = left + 1
        if left < size and key(items[left]) > key(items[largest]):
            largest = left
        if right < size and key(items[right]) > key(items[largest]):
            largest = right
        if largest == root:
            return
        items[root], items[largest] = items[largest], items[root]
        root = largest


def _heap_sort_desc(items: list, key: Callable) -> None:
    n = len(items)
    for i in range(n // 2 - 1, -1, -1):
        _sift_down(items, key, n, i)
    for end in range(n - 1, 0, -1):
        items[0], items[end] = items[end], items[0]
        _sift_down(items, key, end, 0)
    # max-heap extraction leaves the list ascending
    items.reverse()


class SortEngine:
    """Sorting strategies over member sequences, each timed on `monitor`."""

    def __init__(
        self,
        monitor: PerformanceMonitor,
        fee_policy: FeePolicy = monthly_fee_for,
        rates: RateConfig = DEFAULT_RATES,
    ) -> None:
        self.monitor = monitor
        self.fee_policy = fee_policy
        self.rates = rates

    def fee(self, record: MemberRecord) -> float:
        return record.monthly_fee(self.fee_policy, self.rates)

    @timed(SORT_QUICK)
    def sort_by_name(self, members: Iterable[MemberRecord]) -> list[MemberRecord]:
        """Ascending, case-insensitive full name. Not stable; O(n^2) worst case."""
        items = list(members)
        _quick_sort(items, lambda m: m.full_name().lower(), 0, len(items) - 1)
        return items

    @timed(SORT_MERGE)
    def sort_by_rating_desc(self, members: Iterable[MemberRecord]) -> list[MemberRecord]:
        """Highest rating first; equal ratings keep their input order."""
        items = list(members)
        _merge_sort_desc(items, lambda m: m.rating, 0, len(items) - 1)
        return items

    @timed(SORT_HEAP)
    def sort_by_fee_desc(self, members: Iterable[MemberRecord]) -> list[MemberRecord]:
        """Highest monthly fee first. Not stable."""
        items = list(members)
        _heap_sort_desc(items, self.fee)
        return items
