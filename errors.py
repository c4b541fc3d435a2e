"""
errors.py
Error conditions raised (or returned) by the member index core.

DuplicateId is returned from IndexStore.add, not raised: a clashing id is an
ordinary outcome the caller decides about. InvalidVariant is raised: asking a
Standard member for its trainer is a programming error.
Unknown ids are never errors; lookups return None or an empty list.
"""

from __future__ import annotations


class MemberIndexError(Exception):
    """Base class for member index errors."""


class DuplicateId(MemberIndexError):
    def __init__(self, member_id: str):
        self.member_id = member_id
        super().__init__(f"Member id already exists: {member_id}")


class InvalidVariant(MemberIndexError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Accessor requires a {_label(expected)} member, got {_label(actual)}"
        )


def _label(kind) -> str:
    return getattr(kind, "value", str(kind))
