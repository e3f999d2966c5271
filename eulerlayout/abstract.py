"""Abstract zones and descriptions.

An abstract zone is the set of labels whose curves contain a region; a
description is the set of zones a diagram has to realize.  Both are immutable
values: every operator returns a fresh instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple, Union

from .errors import DescriptionError

Label = str
ZoneLike = Union[Label, "AbstractZone", Iterable[Label]]


def _check_label(label: object) -> Label:
    if not isinstance(label, str):
        raise DescriptionError(f"label must be a string, got {type(label).__name__}")
    if not label:
        raise DescriptionError("label must not be empty")
    if any(ch.isspace() for ch in label):
        raise DescriptionError(f"label {label!r} must not contain whitespace")
    return label


def _as_labels(value: ZoneLike) -> FrozenSet[Label]:
    if isinstance(value, AbstractZone):
        return value.labels
    if isinstance(value, str):
        return frozenset([_check_label(value)])
    return frozenset(_check_label(item) for item in value)


@total_ordering
@dataclass(frozen=True)
class AbstractZone:
    """Set of labels; the empty set is the outside zone."""

    labels: FrozenSet[Label] = frozenset()

    def __post_init__(self) -> None:
        labels = frozenset(self.labels)
        for label in labels:
            _check_label(label)
        object.__setattr__(self, "labels", labels)

    @classmethod
    def of(cls, *labels: Label) -> "AbstractZone":
        return cls(frozenset(labels))

    @classmethod
    def from_informal(cls, text: str) -> "AbstractZone":
        """``"abc"`` -> zone {a, b, c}; every character is one label."""

        return cls(frozenset(text))

    @property
    def num_labels(self) -> int:
        return len(self.labels)

    @property
    def sorted_labels(self) -> Tuple[Label, ...]:
        return tuple(sorted(self.labels))

    def is_outside(self) -> bool:
        return not self.labels

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def __iter__(self) -> Iterator[Label]:
        return iter(self.sorted_labels)

    def __len__(self) -> int:
        return len(self.labels)

    def __add__(self, other: ZoneLike) -> "AbstractZone":
        return AbstractZone(self.labels | _as_labels(other))

    def __sub__(self, other: ZoneLike) -> "AbstractZone":
        return AbstractZone(self.labels - _as_labels(other))

    def __lt__(self, other: "AbstractZone") -> bool:
        if not isinstance(other, AbstractZone):
            return NotImplemented
        return (len(self.labels), self.sorted_labels) < (len(other.labels), other.sorted_labels)

    def straddled_label(self, other: "AbstractZone") -> Optional[Label]:
        """Return the only label separating the two zones, if there is one."""

        if abs(len(self.labels) - len(other.labels)) != 1:
            return None
        difference = self.labels ^ other.labels
        if len(difference) != 1:
            return None
        return next(iter(difference))

    def is_neighbour(self, other: "AbstractZone") -> bool:
        return self.straddled_label(other) is not None

    def to_informal(self) -> str:
        return "".join(self.sorted_labels)

    def __str__(self) -> str:
        return self.to_informal()

    def __repr__(self) -> str:
        return f"AbstractZone({self.to_informal()!r})"


OUTSIDE = AbstractZone()
AbstractZone.OUTSIDE = OUTSIDE  # type: ignore[attr-defined]


class Description:
    """Sorted set of abstract zones that always includes the outside zone.

    ``parent`` records the zone of an enclosing description this one is
    slotted into; it does not take part in equality.
    """

    def __init__(self, zones: Iterable[AbstractZone], parent: AbstractZone = OUTSIDE) -> None:
        zone_set = frozenset(zones)
        for zone in zone_set:
            if not isinstance(zone, AbstractZone):
                raise DescriptionError(f"description zones must be AbstractZone, got {zone!r}")
        if OUTSIDE not in zone_set:
            raise DescriptionError("description must contain the outside zone")
        self._zone_set = zone_set
        self._zones = tuple(sorted(zone_set))
        labels = set()
        for zone in self._zones:
            labels.update(zone.labels)
        self._labels = tuple(sorted(labels))
        self._parent = parent

    @classmethod
    def from_informal(cls, text: str, parent: AbstractZone = OUTSIDE) -> "Description":
        zones = [AbstractZone.from_informal(token) for token in text.split()]
        zones.append(OUTSIDE)
        return cls(zones, parent)

    @property
    def abstract_zones(self) -> Tuple[AbstractZone, ...]:
        return self._zones

    @property
    def zone_set(self) -> FrozenSet[AbstractZone]:
        return self._zone_set

    @property
    def labels(self) -> Tuple[Label, ...]:
        return self._labels

    @property
    def parent(self) -> AbstractZone:
        return self._parent

    def with_parent(self, parent: AbstractZone) -> "Description":
        return Description(self._zones, parent)

    def with_zone(self, zone: AbstractZone) -> "Description":
        return Description(self._zone_set | {zone}, self._parent)

    def inner_zones(self) -> Tuple[AbstractZone, ...]:
        return tuple(zone for zone in self._zones if not zone.is_outside())

    def num_zones_in(self, label: Label) -> int:
        return sum(1 for zone in self._zones if label in zone)

    def zones_with(self, label: Label) -> Tuple[AbstractZone, ...]:
        return tuple(zone for zone in self._zones if label in zone)

    def __contains__(self, zone: object) -> bool:
        return zone in self._zone_set

    def __iter__(self) -> Iterator[AbstractZone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __sub__(self, label: Label) -> "Description":
        """Drop ``label`` from every zone; the parent resets to the outside."""

        return Description(zone - label for zone in self._zones)

    def slot(self, zone: AbstractZone, other: "Description") -> "Description":
        """Place ``other`` inside ``zone`` of this description."""

        if zone not in self._zone_set:
            raise DescriptionError(
                f"cannot slot {other.to_informal()!r} into missing zone {zone.to_informal()!r}"
            )
        slotted = {inner + zone for inner in other.abstract_zones}
        return Description(self._zone_set | slotted, self._parent)

    def __add__(self, other: "Description") -> "Description":
        return self.slot(other.parent, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Description):
            return NotImplemented
        return self._zone_set == other._zone_set

    def __hash__(self) -> int:
        return hash(self._zone_set)

    def to_informal(self) -> str:
        return " ".join(zone.to_informal() for zone in self._zones if not zone.is_outside())

    def __str__(self) -> str:
        return self.to_informal()

    def __repr__(self) -> str:
        if self._parent.is_outside():
            return f"Description({self.to_informal()!r})"
        return f"Description({self.to_informal()!r}, parent={self._parent.to_informal()!r})"


EMPTY_DESCRIPTION = Description([OUTSIDE])


def az(text: str) -> AbstractZone:
    """Shorthand for :meth:`AbstractZone.from_informal`."""

    return AbstractZone.from_informal(text)


def desc(text: str, parent: Optional[AbstractZone] = None) -> Description:
    """Shorthand for :meth:`Description.from_informal`."""

    return Description.from_informal(text, parent if parent is not None else OUTSIDE)


__all__ = [
    "AbstractZone",
    "Description",
    "EMPTY_DESCRIPTION",
    "Label",
    "OUTSIDE",
    "az",
    "desc",
]
