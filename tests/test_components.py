import pytest

from eulerlayout.abstract import EMPTY_DESCRIPTION, OUTSIDE, az, desc
from eulerlayout.decomposition.components import (
    decompose_components,
    find_split,
    is_atomic,
    is_connected,
    partition2,
    try_split,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a b ab", True),
        ("a ab abc", True),
        ("a b", False),
        ("ab", False),
        ("a abc", False),
        ("a b c ab ac bc abc", True),
    ],
)
def test_is_atomic(text, expected):
    assert is_atomic(desc(text)) is expected


def test_empty_description_is_atomic():
    assert is_atomic(EMPTY_DESCRIPTION)


def test_is_connected_ignores_single_zone():
    assert is_connected([az("ab")])
    assert not is_connected([az("a"), az("bc")])


def test_partition2_lists_each_split_once():
    three = list(partition2(["c", "a", "b"]))
    assert three == [
        (frozenset("a"), frozenset("bc")),
        (frozenset("b"), frozenset("ac")),
        (frozenset("c"), frozenset("ab")),
    ]
    four = list(partition2(list("abcd")))
    assert len(four) == 7
    assert len({frozenset(pair) for pair in four}) == 7


def test_try_split_finds_nested_zone():
    split = try_split(desc("a abc"), frozenset("a"), frozenset("bc"))
    assert split is not None
    assert split.host == desc("a")
    assert split.zone == az("a")
    assert split.guest == desc("bc")


def test_try_split_rejects_overlapping_labels():
    assert try_split(desc("a b ab"), frozenset("a"), frozenset("b")) is None


@pytest.mark.parametrize("workers", [None, 4])
def test_find_split_reproduces_description(workers):
    description = desc("a b c")
    split = find_split(description, max_workers=workers)
    assert split is not None
    assert split.host.slot(split.zone, split.guest) == description


def test_disjoint_groups_split_beside_each_other():
    components = decompose_components(desc("a b c"))
    assert [c.to_informal() for c in components] == ["a", "b", "c"]
    assert all(c.parent == OUTSIDE for c in components)


def test_disjoint_overlap_group_keeps_its_zones():
    components = decompose_components(desc("a b ab c"))
    assert [c.to_informal() for c in components] == ["c", "a b ab"]
    assert [c.parent for c in components] == [OUTSIDE, OUTSIDE]


def test_nested_chain_records_parent_zone():
    components = decompose_components(desc("a abc"))
    assert [c.to_informal() for c in components] == ["a", "bc"]
    assert components[0].parent == OUTSIDE
    assert components[1].parent == az("a")


def test_nested_parents_accumulate():
    components = decompose_components(desc("a ab abc", az("d")))
    assert components == [desc("a ab abc")]
    assert components[0].parent == az("d")

    nested = decompose_components(desc("a abc abcd"))
    assert [c.to_informal() for c in nested][0] == "a"
    assert nested[0].parent == OUTSIDE
    assert all(c.parent.labels >= {"a"} for c in nested[1:])


def test_unsplittable_description_is_a_leaf():
    assert decompose_components(desc("bc")) == [desc("bc")]
