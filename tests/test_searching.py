"""Unit tests for the SearchEngine."""

import random

from models import Academic, Coached, Standard, VariantKind
from performance import (
    SEARCH_ADVANCED,
    SEARCH_BINARY,
    SEARCH_HASH,
    SEARCH_PREFIX,
    PerformanceMonitor,
)
from searching import SearchCriteria, SearchEngine, first_index_of_rating
from store import IndexStore


def _engine(members=()):
    store = IndexStore()
    for m in members:
        store.add(m)
    return SearchEngine(store, PerformanceMonitor())


def _sample(make_member):
    return [
        make_member("SORT001", first="Alice", last="Johnson", rating=8,
                    variant=Coached("Trainer1", 8), goal=True),
        make_member("SORT002", first="Bob", last="Smith", rating=7),
        make_member("SORT003", first="Carol", last="Brown", rating=9,
                    variant=Academic("STU001", "Test Univ")),
        make_member("X-100", first="Alan", last="Smithers", rating=2, goal=True),
    ]


# ---- Direct and prefix lookup ----------------------------------------------


def test_search_by_id(make_member):
    engine = _engine(_sample(make_member))
    assert engine.search_by_id("SORT002").first_name == "Bob"
    assert engine.search_by_id("missing") is None
    assert engine.search_by_id("") is None
    assert engine.search_by_id(None) is None


def test_search_by_name_prefix(make_member):
    engine = _engine(_sample(make_member))
    assert [m.id for m in engine.search_by_name_prefix("al")] == ["X-100", "SORT001"]
    assert engine.search_by_name_prefix("zz") == []


# ---- Binary search by rating -----------------------------------------------


def test_first_index_of_rating():
    class R:
        def __init__(self, rating):
            self.rating = rating

    view = [R(r) for r in (1, 3, 3, 3, 5, 8)]
    assert first_index_of_rating(view, 3) == 1
    assert first_index_of_rating(view, 1) == 0
    assert first_index_of_rating(view, 8) == 5
    assert first_index_of_rating(view, 4) == -1
    assert first_index_of_rating([], 4) == -1


def test_search_by_rating_preserves_insertion_order(make_member):
    a = make_member("A", rating=5)
    b = make_member("B", rating=9)
    c = make_member("C", rating=9)
    engine = _engine([a, b, c])
    assert engine.search_by_rating(9) == [b, c]
    assert engine.search_by_rating(5) == [a]
    assert engine.search_by_rating(0) == []


def test_search_by_rating_matches_linear_filter(make_member):
    rng = random.Random(99)
    members = [make_member(f"M{i}", rating=rng.randint(0, 10)) for i in range(150)]
    engine = _engine(members)
    for rating in range(0, 11):
        expected = [m for m in members if m.rating == rating]
        assert engine.search_by_rating(rating) == expected
    assert engine.search_by_rating(11) == []
    assert engine.search_by_rating(-1) == []


def test_search_by_rating_ignores_bool_targets(make_member):
    engine = _engine([make_member("Z", rating=0), make_member("O", rating=1)])
    assert engine.search_by_rating(True) == []
    assert engine.search_by_rating(False) == []
    assert [m.id for m in engine.search_by_rating(1)] == ["O"]


def test_search_by_rating_reflects_mutations(make_member):
    a = make_member("A", rating=4)
    engine = _engine([a])
    assert engine.search_by_rating(4) == [a]

    b = make_member("B", rating=4)
    engine.store.add(b)
    assert engine.search_by_rating(4) == [a, b]

    engine.store.remove("A")
    assert engine.search_by_rating(4) == [b]

    b.rating = 6
    assert engine.search_by_rating(4) == []
    assert engine.search_by_rating(6) == [b]


# ---- Advanced search -------------------------------------------------------


def test_empty_criteria_matches_everything(make_member):
    members = _sample(make_member)
    engine = _engine(members)
    assert engine.search_advanced(SearchCriteria()) == members


def test_exact_id_criteria(make_member):
    engine = _engine(_sample(make_member))
    found = engine.search_advanced(SearchCriteria(member_id="SORT003", exact_id=True))
    assert [m.id for m in found] == ["SORT003"]
    assert engine.search_advanced(SearchCriteria(member_id="sort003", exact_id=True)) == []


def test_id_substring_is_case_insensitive(make_member):
    engine = _engine(_sample(make_member))
    found = engine.search_advanced(SearchCriteria(member_id="sort"))
    assert [m.id for m in found] == ["SORT001", "SORT002", "SORT003"]


def test_rating_range(make_member):
    engine = _engine(_sample(make_member))
    assert [m.id for m in engine.search_advanced(SearchCriteria(min_rating=8))] == [
        "SORT001", "SORT003"]
    assert [m.id for m in engine.search_advanced(SearchCriteria(max_rating=7))] == [
        "SORT002", "X-100"]
    assert [m.id for m in engine.search_advanced(SearchCriteria(min_rating=7, max_rating=8))] == [
        "SORT001", "SORT002"]


def test_kind_goal_and_name(make_member):
    engine = _engine(_sample(make_member))
    assert [m.id for m in engine.search_advanced(SearchCriteria(kind=VariantKind.ACADEMIC))] == [
        "SORT003"]
    assert [m.id for m in engine.search_advanced(SearchCriteria(kind="standard"))] == [
        "SORT002", "X-100"]
    assert [m.id for m in engine.search_advanced(SearchCriteria(goal_achieved=False))] == [
        "SORT002", "SORT003"]
    assert [m.id for m in engine.search_advanced(SearchCriteria(name="SMITH"))] == [
        "SORT002", "X-100"]


def test_criteria_combine_conjunctively(make_member):
    engine = _engine(_sample(make_member))
    criteria = SearchCriteria(name="smith", goal_achieved=True, kind=VariantKind.STANDARD)
    assert [m.id for m in engine.search_advanced(criteria)] == ["X-100"]
    criteria = SearchCriteria(member_id="SORT001", exact_id=True, goal_achieved=False)
    assert engine.search_advanced(criteria) == []


def test_advanced_search_matches_brute_force(make_member):
    rng = random.Random(5)
    variants = [Standard, lambda: Coached("T", 2), lambda: Academic("S", "U")]
    members = [
        make_member(f"ID{i}", first=rng.choice(["ann", "ben"]), last=rng.choice(["ox", "yak"]),
                    rating=rng.randint(0, 10), variant=rng.choice(variants)(),
                    goal=rng.random() < 0.5)
        for i in range(120)
    ]
    engine = _engine(members)
    for _ in range(50):
        criteria = SearchCriteria(
            min_rating=rng.choice([None, 3]),
            max_rating=rng.choice([None, 8]),
            kind=rng.choice([None, *VariantKind]),
            goal_achieved=rng.choice([None, True, False]),
            name=rng.choice([None, "ann", "yak"]),
        )
        expected = [
            m for m in members
            if (criteria.min_rating is None or m.rating >= criteria.min_rating)
            and (criteria.max_rating is None or m.rating <= criteria.max_rating)
            and (criteria.kind is None or m.kind is criteria.kind)
            and (criteria.goal_achieved is None or m.goal_achieved == criteria.goal_achieved)
            and (criteria.name is None or criteria.name in m.full_name().lower())
        ]
        assert engine.search_advanced(criteria) == expected


# ---- Timing ----------------------------------------------------------------


def test_each_search_records_its_operation(make_member):
    engine = _engine(_sample(make_member))
    engine.search_by_id("SORT001")
    assert engine.monitor.last_operation().operation == SEARCH_HASH
    engine.search_by_name_prefix("a")
    assert engine.monitor.last_operation().operation == SEARCH_PREFIX
    engine.search_by_rating(8)
    assert engine.monitor.last_operation().operation == SEARCH_BINARY
    engine.search_advanced(SearchCriteria(member_id="SORT001", exact_id=True))
    assert engine.monitor.last_operation().operation == SEARCH_ADVANCED
    assert set(engine.monitor.stats()) == {
        SEARCH_HASH, SEARCH_PREFIX, SEARCH_BINARY, SEARCH_ADVANCED}
