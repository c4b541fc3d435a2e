"""Shared fixtures for the member index tests."""

import pytest

from manager import MemberManager
from models import MemberRecord, Standard


@pytest.fixture
def make_member():
    def factory(member_id, first="First", last="Last", rating=0, variant=None, goal=False):
        return MemberRecord(
            id=member_id,
            first_name=first,
            last_name=last,
            email=f"{member_id.lower()}@example.com",
            phone="555-0000",
            variant=variant if variant is not None else Standard(),
            rating=rating,
            goal_achieved=goal,
        )

    return factory


@pytest.fixture
def manager():
    return MemberManager()
