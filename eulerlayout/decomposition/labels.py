"""Label decomposition: removing one curve at a time.

``decompose`` peels labels off a description until only the outside zone is
left.  Each removal is recorded as a :class:`RecompositionStep`; replaying the
steps in reverse order adds the curves back.  Which label goes next is decided
by a :class:`DecompositionStrategy`.
"""

from __future__ import annotations

import functools
import itertools
import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Protocol, Sequence, Tuple

import networkx as nx

from ..abstract import AbstractZone, Description, EMPTY_DESCRIPTION, Label, OUTSIDE
from ..errors import InvariantViolation
from ..logging_utils import debug_log_call
from .components import is_atomic

logger = logging.getLogger(__name__)

DEFAULT_AUX_CYCLE_LENGTH_CAP = 8
MAX_AUX_DIMENSIONS = 10


@dataclass(frozen=True)
class RecompositionStep:
    """Adding ``new_label`` turns ``from_description`` into ``to_description``.

    ``split_zones`` are the zones of ``from_description`` the new curve passes
    through.
    """

    from_description: Description
    to_description: Description
    new_label: Label
    split_zones: FrozenSet[AbstractZone]

    def is_nested(self) -> bool:
        return len(self.split_zones) == 1

    def is_maybe_single_piercing(self) -> bool:
        return len(self.split_zones) == 2

    def is_maybe_double_piercing(self) -> bool:
        return len(self.split_zones) == 4

    def sorted_split_zones(self) -> List[AbstractZone]:
        return sorted(self.split_zones)

    def __str__(self) -> str:
        zones = " ".join(zone.to_informal() or "{}" for zone in self.sorted_split_zones())
        return f"+{self.new_label}: {self.from_description!r} -> {self.to_description!r} via [{zones}]"


class DecompositionStrategy(Protocol):
    def label_to_remove(self, description: Description) -> Label:
        ...


def is_non_disconnecting(description: Description, label: Label) -> bool:
    return is_atomic(description - label)


def _zones_with(description: Description, label: Label) -> List[AbstractZone]:
    return list(description.zones_with(label))


def is_single_piercing(description: Description, label: Label) -> bool:
    zones = _zones_with(description, label)
    return zones[0].is_neighbour(zones[1])


def can_be_double_piercing_from_2(description: Description, label: Label) -> bool:
    zones = _zones_with(description, label)
    diff = abs(zones[0].num_labels - zones[1].num_labels)
    pairs = itertools.combinations(description.labels, 2)

    if diff == 0:
        for l1, l2 in pairs:
            if zones[0] + l1 not in description:
                az3 = zones[0] + l1
                if az3 - l2 != zones[1]:
                    continue
                az4 = zones[1] - l1
                if az4 not in description and az4 + l2 == zones[0]:
                    return True
            elif zones[0] - l1 not in description:
                az3 = zones[0] - l1
                if az3 + l2 != zones[1]:
                    continue
                az4 = zones[1] + l1
                if az4 not in description and az4 - l2 == zones[0]:
                    return True

    elif diff == 2:
        smallest = zones[0] if zones[0].num_labels < zones[1].num_labels else zones[1]
        biggest = zones[0] if zones[0].num_labels > zones[1].num_labels else zones[1]
        for l1, l2 in pairs:
            if smallest + l1 not in description:
                az3 = smallest + l1
                if az3 + l2 != biggest:
                    continue
                az4 = biggest - l1
                if az4 not in description and az4 - l2 == smallest:
                    return True
            elif smallest + l2 not in description:
                az3 = smallest + l2
                if az3 + l1 != biggest:
                    continue
                az4 = biggest - l2
                if az4 not in description and az4 - l1 == smallest:
                    return True

    return False


def _bridged(first: AbstractZone, last: AbstractZone, middle: AbstractZone) -> bool:
    """first-middle and middle-last are neighbours and ``first`` closes a square with ``last``."""

    diff1 = first.straddled_label(middle)
    diff2 = middle.straddled_label(last)
    if diff1 is None or diff2 is None:
        return False
    return first.is_neighbour(last + diff1) or first.is_neighbour(last - diff1)


def can_be_double_piercing_from_3(description: Description, label: Label) -> bool:
    az1, az2, az3 = _zones_with(description, label)[:3]
    return (
        _bridged(az1, az3, az2)  # 1 - 2 - 3
        or _bridged(az1, az2, az3)  # 1 - 3 - 2
        or _bridged(az3, az2, az1)  # 3 - 1 - 2
    )


def can_be_double_piercing_from_4(description: Description, label: Label) -> bool:
    zones = _zones_with(description, label)
    az1 = zones.pop(0)
    az2 = next((zone for zone in zones if az1.is_neighbour(zone)), None)
    if az2 is None:
        return False
    zones.remove(az2)
    az3 = next((zone for zone in zones if az2.is_neighbour(zone)), None)
    if az3 is None:
        return False
    zones.remove(az3)
    return az1.is_neighbour(zones[0])


def is_drawable_as_circle(description: Description, label: Label) -> bool:
    count = description.num_zones_in(label)
    if count == 2:
        return is_single_piercing(description, label) or can_be_double_piercing_from_2(description, label)
    if count == 3:
        return can_be_double_piercing_from_3(description, label)
    if count == 4:
        return can_be_double_piercing_from_4(description, label)
    return False


@functools.lru_cache(maxsize=64)
def _subset_graph(labels: Tuple[Label, ...]) -> nx.Graph:
    zones = [
        AbstractZone(frozenset(combo))
        for size in range(len(labels) + 1)
        for combo in itertools.combinations(labels, size)
    ]
    graph = nx.Graph()
    graph.add_nodes_from(zones)
    for zone in zones:
        for label in labels:
            if label not in zone:
                graph.add_edge(zone, zone + label)
    return graph


def _distance(az1: AbstractZone, az2: AbstractZone) -> int:
    return len(az1.labels ^ az2.labels)


@functools.lru_cache(maxsize=4096)
def _covering_cycle_length(
    targets: FrozenSet[AbstractZone],
    dims: Tuple[Label, ...],
    length_cap: int,
) -> Optional[int]:
    """Branch and bound over simple cycles through ``min(targets)``.

    The subset graph is bipartite on the parity of the zone size, so a cycle
    holds as many even zones as odd ones.  That gives the floor the search can
    stop at.
    """

    even = sum(1 for zone in targets if zone.num_labels % 2 == 0)
    floor = max(4, 2 * max(even, len(targets) - even))
    if floor > length_cap:
        return None

    graph = _subset_graph(dims)
    if floor == length_cap and any(
        sum(1 for other in graph.adj[zone] if other in targets) < 2 for zone in targets
    ):
        # no slack: the cycle may only pass through targets
        return None
    root = min(targets)
    best = length_cap + 1
    path = [root]
    visited = {root}

    def needed(zone: AbstractZone, remaining: FrozenSet[AbstractZone]) -> int:
        # edges still required to visit every remaining target and close the cycle
        if not remaining:
            return _distance(zone, root)
        return max(
            len(remaining) + 1,
            max(_distance(zone, target) + _distance(target, root) for target in remaining),
        )

    def extend(zone: AbstractZone, remaining: FrozenSet[AbstractZone]) -> None:
        nonlocal best
        edges = len(path) - 1
        if not remaining and len(path) >= 4 and graph.has_edge(zone, root):
            best = min(best, len(path))
            return
        for neighbour in graph.adj[zone]:
            if best <= floor:
                return
            if neighbour in visited:
                continue
            left = remaining - {neighbour}
            if edges + 1 + max(needed(neighbour, left), 1) >= best:
                continue
            visited.add(neighbour)
            path.append(neighbour)
            extend(neighbour, left)
            path.pop()
            visited.discard(neighbour)

    extend(root, targets - {root})
    return best if best <= length_cap else None


def smallest_covering_cycle(
    zones: Sequence[AbstractZone],
    label: Label,
    description: Description,
    length_cap: int = DEFAULT_AUX_CYCLE_LENGTH_CAP,
) -> int:
    """Vertex count of the shortest cycle through ``zones`` in the subset graph.

    The graph has one vertex per label subset (without ``label``) and joins
    subsets that differ in one label.  It is limited to the labels used by
    ``zones`` plus enough free labels to leave room for a cycle.  Returns
    ``-len(zones)`` when no cycle of at most ``max(length_cap, len(zones))``
    vertices exists or the graph would span more than ``MAX_AUX_DIMENSIONS``
    labels.
    """

    targets = frozenset(zone - label for zone in zones)
    used = set()
    for zone in targets:
        used.update(zone.labels)
    free = [other for other in description.labels if other != label and other not in used]
    dims = tuple(sorted(used) + free[: max(1, 2 - len(used))])
    if not targets or len(dims) < 2 or len(dims) > MAX_AUX_DIMENSIONS:
        return -len(zones)

    length = _covering_cycle_length(targets, dims, max(length_cap, len(targets)))
    return length if length is not None else -len(zones)


def lower_bound_extra_zones(
    description: Description,
    label: Label,
    length_cap: int = DEFAULT_AUX_CYCLE_LENGTH_CAP,
) -> int:
    unpartnered = sum(1 for zone in description.zones_with(label) if zone - label not in description)
    inside = [zone for zone in (description - label).abstract_zones if zone + label in description]
    return unpartnered + smallest_covering_cycle(inside, label, description, length_cap)


class ICurvesStrategy:
    """Remove labels that can come back as piercing circles first.

    1. Labels that can be drawn as a single or double piercing and whose
       removal keeps the description connected.
    2. Any label whose removal keeps the description connected, fewest
       expected extra zones first.
    """

    def __init__(self, aux_cycle_length_cap: int = DEFAULT_AUX_CYCLE_LENGTH_CAP) -> None:
        self.aux_cycle_length_cap = aux_cycle_length_cap

    def label_to_remove(self, description: Description) -> Label:
        candidates = sorted(description.labels, reverse=True)
        candidates.sort(key=description.num_zones_in)
        for label in candidates:
            if is_drawable_as_circle(description, label) and is_non_disconnecting(description, label):
                return label

        bounds = {
            label: lower_bound_extra_zones(description, label, self.aux_cycle_length_cap)
            for label in description.labels
        }
        for label in sorted(description.labels, key=bounds.__getitem__):
            if is_non_disconnecting(description, label):
                return label

        raise InvariantViolation(f"No non-disconnecting label in {description!r}")


def _neighbour_of(zone: AbstractZone, candidates: Sequence[AbstractZone]) -> Optional[AbstractZone]:
    return next((other for other in candidates if zone.is_neighbour(other)), None)


def _synthesize_partner(zone: AbstractZone, description: Description) -> AbstractZone:
    for combo in itertools.combinations(zone.sorted_labels, zone.num_labels - 1):
        candidate = AbstractZone(frozenset(combo))
        if candidate not in description:
            return candidate
    for label in description.labels:
        candidate = zone + label
        if candidate != zone and candidate not in description:
            return candidate
    raise InvariantViolation(f"cannot add a neighbour for zone {zone.to_informal()!r} in {description!r}")


def make_step(next_description: Description, label: Label) -> RecompositionStep:
    prev_description = next_description - label
    split = {
        zone
        for zone in prev_description.abstract_zones
        if zone + label in next_description or zone not in next_description
    }

    if len(split) == 1 and prev_description != EMPTY_DESCRIPTION:
        zone = next(iter(split))
        others = [other for other in prev_description.abstract_zones if other not in split]
        neighbour = _neighbour_of(zone, others)
        if neighbour is not None:
            split.add(neighbour)
        else:
            partner = _synthesize_partner(zone, prev_description)
            prev_description = prev_description.with_zone(partner)
            split.add(partner)

    return RecompositionStep(prev_description, next_description, label, frozenset(split))


@debug_log_call(logger, log_result=False)
def decompose(description: Description, strategy: Optional[DecompositionStrategy] = None) -> List[RecompositionStep]:
    """Steps removing every label of ``description``, last curve first."""

    strategy = strategy or ICurvesStrategy()
    steps: List[RecompositionStep] = []
    current = description.with_parent(OUTSIDE)
    while current != EMPTY_DESCRIPTION:
        label = strategy.label_to_remove(current)
        step = make_step(current, label)
        logger.debug("Decomposition step %s", step)
        steps.append(step)
        current = step.from_description
    return steps


__all__ = [
    "DecompositionStrategy",
    "ICurvesStrategy",
    "RecompositionStep",
    "can_be_double_piercing_from_2",
    "can_be_double_piercing_from_3",
    "can_be_double_piercing_from_4",
    "decompose",
    "is_drawable_as_circle",
    "is_non_disconnecting",
    "is_single_piercing",
    "lower_bound_extra_zones",
    "make_step",
    "smallest_covering_cycle",
]
