"""
store.py
In-memory member store: canonical collection + id index + name index,
and a lazily rebuilt rating-ordered view.
"""

from __future__ import annotations

import logging
import threading
from bisect import bisect_left, insort

from errors import DuplicateId
from models import NAME_FIELDS, MemberRecord

log = logging.getLogger(__name__)


def name_key(record: MemberRecord) -> str:
    return record.full_name().lower()


class IndexStore:
    """
    Owns the member set. Index updates and the rating-view rebuild run
    under one re-entrant lock; reads hand out snapshots (lists/tuples), so a
    caller may keep iterating one while the store changes.

    The name index is a sorted list of (lower-cased full name, id) pairs.
    The id breaks ties, so namesakes each keep their own entry.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        # id -> record, insertion ordered; doubles as the id index
        self._members: dict[str, MemberRecord] = {}
        self._name_index: list[tuple[str, str]] = []
        # id -> name key currently held in _name_index
        self._name_keys: dict[str, str] = {}
        self._rating_view: tuple[MemberRecord, ...] = ()
        self._stale = True

    # ---------- mutation ----------

    def add(self, record: MemberRecord) -> DuplicateId | None:
        """Insert `record`; returns DuplicateId (without raising) if its id is taken."""
        with self._lock:
            if record.id in self._members:
                log.warning("Rejected duplicate member id %s", record.id)
                return DuplicateId(record.id)
            key = name_key(record)
            self._members[record.id] = record
            insort(self._name_index, (key, record.id))
            self._name_keys[record.id] = key
            record.watch(self._on_record_changed)
            self._stale = True
        log.debug("Added member %s (%s)", record.id, key)
        return None

    def remove(self, member_id: str) -> bool:
        with self._lock:
            record = self._members.pop(member_id, None) if member_id else None
            if record is None:
                return False
            self._drop_name_entry(member_id)
            record.unwatch(self._on_record_changed)
            self._stale = True
        log.debug("Removed member %s", member_id)
        return True

    def rename(self, member_id: str, first_name: str, last_name: str) -> bool:
        """Change a member's name and re-key its name-index entry. False if unknown id."""
        with self._lock:
            record = self._members.get(member_id)
        if record is None:
            return False
        # observers run with no store lock held; each re-keys under its own lock
        record.set_name(first_name, last_name)
        with self._lock:
            if self._members.get(member_id) is record:
                self._reindex_name(record)
                self._stale = True
        log.debug("Renamed member %s to %s %s", member_id, first_name, last_name)
        return True

    def _drop_name_entry(self, member_id: str) -> None:
        key = self._name_keys.pop(member_id)
        pos = bisect_left(self._name_index, (key, member_id))
        if pos < len(self._name_index) and self._name_index[pos] == (key, member_id):
            del self._name_index[pos]
        else:
            raise RuntimeError(f"name index out of sync for member {member_id}")

    def _reindex_name(self, record: MemberRecord) -> None:
        key = name_key(record)
        if self._name_keys.get(record.id) == key:
            return
        self._drop_name_entry(record.id)
        insort(self._name_index, (key, record.id))
        self._name_keys[record.id] = key

    def _on_record_changed(self, record: MemberRecord, attribute: str) -> None:
        # Changes made through the record handle land here
        with self._lock:
            if self._members.get(record.id) is not record:
                return
            if attribute in NAME_FIELDS:
                self._reindex_name(record)
            self._stale = True

    # ---------- reads ----------

    def all(self) -> list[MemberRecord]:
        with self._lock:
            return list(self._members.values())

    def by_id(self, member_id: str | None) -> MemberRecord | None:
        if not member_id:
            return None
        with self._lock:
            return self._members.get(member_id)

    def by_name_prefix(self, prefix: str | None) -> list[MemberRecord]:
        """Members whose lower-cased full name starts with `prefix`, in name order."""
        prefix = (prefix or "").lower()
        with self._lock:
            start = bisect_left(self._name_index, (prefix,))
            results: list[MemberRecord] = []
            for pos in range(start, len(self._name_index)):
                key, member_id = self._name_index[pos]
                if not key.startswith(prefix):
                    break
                results.append(self._members[member_id])
            return results

    def by_rating(self) -> tuple[MemberRecord, ...]:
        """
        All members, ascending by rating, insertion order among equal ratings.
        Rebuilt only on the first read after a mutation.
        """
        with self._lock:
            if self._stale:
                self._rating_view = tuple(sorted(self._members.values(), key=lambda m: m.rating))
                self._stale = False
                log.debug("Rebuilt rating view (%d members)", len(self._rating_view))
            return self._rating_view

    @property
    def stale(self) -> bool:
        return self._stale

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member_id) -> bool:
        return member_id in self._members

    def __iter__(self):
        return iter(self.all())
