"""
searching.py
Id lookup, name-prefix lookup, binary search by rating and multi-criteria filtering.
All reads go through the IndexStore; nothing here mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from models import MemberRecord, VariantKind, rating_in_range
from performance import (
    SEARCH_ADVANCED,
    SEARCH_BINARY,
    SEARCH_HASH,
    SEARCH_PREFIX,
    PerformanceMonitor,
    timed,
)
from store import IndexStore


@dataclass
class SearchCriteria:
    """
    Conjunction of optional filters; None (or an empty string) means unconstrained.

    member_id matches as a case-insensitive substring, or exactly when
    exact_id is set. name is a case-insensitive substring of the full name.
    """

    member_id: str | None = None
    exact_id: bool = False
    name: str | None = None
    min_rating: int | None = None
    max_rating: int | None = None
    kind: VariantKind | None = None
    goal_achieved: bool | None = None


def first_index_of_rating(members: Sequence[MemberRecord], target: int) -> int:
    """Index of the first member rated `target` in an ascending view, or -1."""
    left, right = 0, len(members) - 1
    found = -1
    while left <= right:
        mid = left + (right - left) // 2
        rating = members[mid].rating
        if rating == target:
            found = mid
            right = mid - 1  # keep looking left for the earliest match
        elif rating < target:
            left = mid + 1
        else:
            right = mid - 1
    return found


class SearchEngine:
    def __init__(self, store: IndexStore, monitor: PerformanceMonitor) -> None:
        self.store = store
        self.monitor = monitor

    @timed(SEARCH_HASH)
    def search_by_id(self, member_id: str | None) -> MemberRecord | None:
        return self.store.by_id(member_id)

    @timed(SEARCH_PREFIX)
    def search_by_name_prefix(self, prefix: str | None) -> list[MemberRecord]:
        return self.store.by_name_prefix(prefix)

    @timed(SEARCH_BINARY)
    def search_by_rating(self, rating: int) -> list[MemberRecord]:
        """All members rated exactly `rating`, in insertion order. O(log n + m)."""
        if not rating_in_range(rating):
            return []
        view = self.store.by_rating()
        start = first_index_of_rating(view, rating)
        results: list[MemberRecord] = []
        if start == -1:
            return results
        for pos in range(start, len(view)):
            if view[pos].rating != rating:
                break
            results.append(view[pos])
        return results

    @timed(SEARCH_ADVANCED)
    def search_advanced(self, criteria: SearchCriteria) -> list[MemberRecord]:
        """
        Apply the criteria most-selective first: id, rating range, variant,
        goal flag, then name. Stops early once nothing is left.
        """
        if criteria.member_id and criteria.exact_id:
            found = self.store.by_id(criteria.member_id)
            candidates = [found] if found is not None else []
        else:
            candidates = self.store.all()

        for predicate in _predicates(criteria):
            if not candidates:
                break
            candidates = [m for m in candidates if predicate(m)]
        return candidates


def _predicates(criteria: SearchCriteria) -> list:
    predicates = []

    if criteria.member_id and not criteria.exact_id:
        needle = criteria.member_id.lower()
        predicates.append(lambda m: needle in m.id.lower())

    if criteria.min_rating is not None or criteria.max_rating is not None:
        low, high = criteria.min_rating, criteria.max_rating
        predicates.append(
            lambda m: (low is None or m.rating >= low) and (high is None or m.rating <= high)
        )

    if criteria.kind is not None:
        kind = VariantKind(criteria.kind)
        predicates.append(lambda m: m.kind is kind)

    if criteria.goal_achieved is not None:
        goal = bool(criteria.goal_achieved)
        predicates.append(lambda m: bool(m.goal_achieved) == goal)

    if criteria.name:
        name = criteria.name.lower()
        predicates.append(lambda m: name in m.full_name().lower())

    return predicates
