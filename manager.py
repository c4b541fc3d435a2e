"""
manager.py
MemberManager: the single entry point UI/import code talks to.
Mutations go to the IndexStore; sorts and searches are timed on one monitor.
"""

from __future__ import annotations

from typing import Iterable

from errors import DuplicateId
from fees import DEFAULT_RATES, RateConfig, monthly_fee_for
from models import FeePolicy, MemberRecord
from performance import PerformanceMonitor, PerformanceSample
from searching import SearchCriteria, SearchEngine
from sorting import SortEngine
from store import IndexStore


class MemberManager:
    def __init__(
        self,
        rates: RateConfig | None = None,
        fee_policy: FeePolicy | None = None,
    ) -> None:
        self.rates = DEFAULT_RATES if rates is None else rates
        self.fee_policy = monthly_fee_for if fee_policy is None else fee_policy
        self.store = IndexStore()
        self.monitor = PerformanceMonitor()
        self.sorter = SortEngine(self.monitor, self.fee_policy, self.rates)
        self.searcher = SearchEngine(self.store, self.monitor)

    # ---------- store ----------

    def add(self, record: MemberRecord) -> DuplicateId | None:
        return self.store.add(record)

    def remove(self, member_id: str) -> bool:
        return self.store.remove(member_id)

    def rename(self, member_id: str, first_name: str, last_name: str) -> bool:
        return self.store.rename(member_id, first_name, last_name)

    def all(self) -> list[MemberRecord]:
        return self.store.all()

    def by_id(self, member_id: str | None) -> MemberRecord | None:
        return self.store.by_id(member_id)

    def by_name_prefix(self, prefix: str | None) -> list[MemberRecord]:
        return self.store.by_name_prefix(prefix)

    def monthly_fee(self, record: MemberRecord) -> float:
        return record.monthly_fee(self.fee_policy, self.rates)

    def __len__(self) -> int:
        return len(self.store)

    # ---------- sorting ----------

    def sort_by_name(self, members: Iterable[MemberRecord] | None = None) -> list[MemberRecord]:
        return self.sorter.sort_by_name(self.all() if members is None else members)

    def sort_by_rating_desc(self, members: Iterable[MemberRecord] | None = None) -> list[MemberRecord]:
        return self.sorter.sort_by_rating_desc(self.all() if members is None else members)

    def sort_by_fee_desc(self, members: Iterable[MemberRecord] | None = None) -> list[MemberRecord]:
        return self.sorter.sort_by_fee_desc(self.all() if members is None else members)

    # ---------- searching ----------

    def search_by_id(self, member_id: str | None) -> MemberRecord | None:
        return self.searcher.search_by_id(member_id)

    def search_by_name_prefix(self, prefix: str | None) -> list[MemberRecord]:
        return self.searcher.search_by_name_prefix(prefix)

    def search_by_rating(self, rating: int) -> list[MemberRecord]:
        return self.searcher.search_by_rating(rating)

    def search_advanced(self, criteria: SearchCriteria | None = None) -> list[MemberRecord]:
        return self.searcher.search_advanced(SearchCriteria() if criteria is None else criteria)

    # ---------- performance ----------

    def performance_report(self) -> list[tuple[str, int]]:
        return self.monitor.report()

    def last_operation(self) -> PerformanceSample | None:
        return self.monitor.last_operation()

    def performance_stats(self) -> dict[str, int]:
        return self.monitor.stats()

    def format_performance_report(self) -> str:
        return self.monitor.format_report()
