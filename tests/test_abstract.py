import pytest

from eulerlayout.abstract import AbstractZone, Description, EMPTY_DESCRIPTION, OUTSIDE, az, desc
from eulerlayout.errors import DescriptionError


def test_zone_from_informal_matches_explicit_labels():
    assert az("ab") == AbstractZone.of("a", "b")
    assert az("ba").to_informal() == "ab"
    assert repr(az("ba")) == "AbstractZone('ab')"


def test_zone_algebra_returns_new_values():
    zone = az("ab")
    assert zone + "c" == az("abc")
    assert zone + az("cd") == az("abcd")
    assert az("abc") - "b" == az("ac")
    assert az("abc") - ["a", "c"] == az("b")
    assert zone == az("ab")


def test_outside_zone_is_empty():
    assert OUTSIDE.is_outside()
    assert len(OUTSIDE) == 0
    assert OUTSIDE.to_informal() == ""
    assert AbstractZone.OUTSIDE is OUTSIDE
    assert az("a") - "a" == OUTSIDE


def test_zone_ordering_by_size_then_labels():
    zones = [az("ab"), az("b"), OUTSIDE, az("abc"), az("a"), az("ac")]
    assert sorted(zones) == [OUTSIDE, az("a"), az("b"), az("ab"), az("ac"), az("abc")]


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("ab", "a", "b"),
        ("a", "ab", "b"),
        ("a", "", "a"),
        ("ab", "c", None),
        ("ab", "ac", None),
        ("abc", "a", None),
    ],
)
def test_straddled_label(first, second, expected):
    assert az(first).straddled_label(az(second)) == expected
    assert az(first).is_neighbour(az(second)) is (expected is not None)


@pytest.mark.parametrize("labels", [[""], ["a b"], ["\t"]])
def test_invalid_labels_are_rejected(labels):
    with pytest.raises(DescriptionError):
        AbstractZone.of(*labels)


def test_zone_membership_and_iteration():
    zone = az("cab")
    assert "a" in zone
    assert "d" not in zone
    assert list(zone) == ["a", "b", "c"]
    assert zone.num_labels == 3


def test_description_round_trip_informal():
    description = desc("ab b a")
    assert description.to_informal() == "a b ab"
    assert desc(description.to_informal()) == description
    assert description.labels == ("a", "b")
    assert OUTSIDE in description
    assert len(description) == 4


def test_description_requires_outside_zone():
    with pytest.raises(DescriptionError):
        Description([az("a")])


def test_description_rejects_non_zone_members():
    with pytest.raises(DescriptionError):
        Description([OUTSIDE, "a"])


def test_removing_label_projects_every_zone():
    assert desc("a b ab") - "b" == desc("a")
    assert desc("a b c ab ac bc abc") - "c" == desc("a b ab")
    assert desc("a") - "a" == EMPTY_DESCRIPTION


def test_removing_label_resets_parent():
    nested = desc("a ab", az("c"))
    assert (nested - "b").parent == OUTSIDE


def test_slot_places_description_inside_zone():
    assert desc("a").slot(az("a"), desc("b c")) == desc("a ab ac")
    assert desc("a").slot(OUTSIDE, desc("b")) == desc("a b")


def test_slot_into_missing_zone_raises():
    with pytest.raises(DescriptionError):
        desc("a").slot(az("b"), desc("c"))


def test_add_uses_parent_of_right_operand():
    assert desc("a") + desc("b", az("a")) == desc("a ab")
    assert desc("a") + desc("b") == desc("a b")


def test_parent_does_not_take_part_in_equality():
    assert desc("b", az("a")) == desc("b")
    assert hash(desc("b", az("a"))) == hash(desc("b"))
    assert repr(desc("b", az("a"))) == "Description('b', parent='a')"


def test_zone_counts_per_label():
    description = desc("a b c ab ac")
    assert description.num_zones_in("a") == 3
    assert description.zones_with("b") == (az("b"), az("ab"))
    assert description.inner_zones()[0] == az("a")
    assert description.with_zone(az("bc")) == desc("a b c ab ac bc")
