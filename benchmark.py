"""
benchmark.py
Synthetic member data and size-doubling timings for the sort/search strategies.
"""

from __future__ import annotations

import logging
import random
import time

import pandas as pd

from manager import MemberManager
from models import RATING_MAX, Academic, Coached, MemberRecord, Standard

log = logging.getLogger(__name__)

BENCHMARK_COLUMNS = ["kind", "algorithm", "size", "duration_ns"]


def generate_test_data(size: int, seed: int | None = None) -> list[MemberRecord]:
    """`size` members with ids TEST000000.., mixed variants, random ratings and goals."""
    rng = random.Random(seed)
    members: list[MemberRecord] = []
    for i in range(size):
        choice = rng.randrange(3)
        if choice == 0:
            variant = Standard()
        elif choice == 1:
            variant = Coached(f"Trainer{i}", rng.randint(1, 10))
        else:
            variant = Academic(f"STU{i}", f"University{i}")
        members.append(
            MemberRecord(
                id=f"TEST{i:06d}",
                first_name=f"FirstName{i}",
                last_name=f"LastName{i}",
                email=f"test{i}@example.com",
                phone=f"555-{i % 10000:04d}",
                variant=variant,
                rating=rng.randint(0, RATING_MAX),
                goal_achieved=rng.random() < 0.5,
            )
        )
    return members


def _elapsed_ns(func, *args) -> int:
    start = time.perf_counter_ns()
    func(*args)
    return time.perf_counter_ns() - start


def _linear_find(members: list[MemberRecord], member_id: str) -> MemberRecord | None:
    for member in members:
        if member.id == member_id:
            return member
    return None


def run_benchmark(
    max_size: int,
    start_size: int = 100,
    seed: int | None = None,
    manager: MemberManager | None = None,
) -> pd.DataFrame:
    """
    Time every sort (plus the built-in sorted) and linear vs. hashed id lookup
    for sizes start_size, 2*start_size, ... up to max_size.

    Sorts run through `manager`, so their timings also land in its monitor.
    Returns one row per (kind, algorithm, size).
    """
    if start_size < 1:
        raise ValueError("start_size must be at least 1")
    if manager is None:
        manager = MemberManager()
    rng = random.Random(seed)
    rows = []

    size = start_size
    while size <= max_size:
        data = generate_test_data(size, seed=rng.randrange(2**32))
        log.info("Benchmarking %d members", size)

        sorts = {
            "QuickSort": manager.sort_by_name,
            "MergeSort": manager.sort_by_rating_desc,
            "HeapSort": manager.sort_by_fee_desc,
            "BuiltIn": lambda items: sorted(items, key=lambda m: m.full_name().lower()),
        }
        for name, sort in sorts.items():
            rows.append(("sort", name, size, _elapsed_ns(sort, data)))

        target = data[rng.randrange(size)].id
        by_id = {m.id: m for m in data}
        rows.append(("search", "LinearSearch", size, _elapsed_ns(_linear_find, data, target)))
        rows.append(("search", "HashSearch", size, _elapsed_ns(by_id.get, target)))

        size *= 2

    return pd.DataFrame(rows, columns=BENCHMARK_COLUMNS)


def summarize(results: pd.DataFrame) -> pd.DataFrame:
    """Pivot run_benchmark output to one row per algorithm, one column per size (ms)."""
    if results.empty:
        return pd.DataFrame()
    table = results.assign(duration_ms=results["duration_ns"] / 1_000_000).pivot_table(
        index=["kind", "algorithm"], columns="size", values="duration_ms", aggfunc="sum"
    )
    return table.sort_index()
