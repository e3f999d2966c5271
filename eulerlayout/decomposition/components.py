"""Splitting a description into independently drawable components.

A description is split along a 2-partition of its labels when slotting one
half's projection into a zone of the other half's projection reproduces it.
The halves are decomposed recursively; every leaf keeps the zone of the
enclosing description it has to be drawn into as its ``parent``.
"""

from __future__ import annotations

import itertools
import logging
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from ..abstract import AbstractZone, Description, EMPTY_DESCRIPTION, Label
from ..logging_utils import debug_log_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentSplit:
    """``host`` with ``guest`` slotted into its zone ``zone``."""

    host: Description
    zone: AbstractZone
    guest: Description


def neighbour_graph(zones: Iterable[AbstractZone]) -> nx.Graph:
    graph = nx.Graph()
    zones = list(zones)
    graph.add_nodes_from(zones)
    for z1, z2 in itertools.combinations(zones, 2):
        if z1.is_neighbour(z2):
            graph.add_edge(z1, z2)
    return graph


def is_connected(zones: Iterable[AbstractZone]) -> bool:
    graph = neighbour_graph(zones)
    if graph.number_of_nodes() <= 1:
        return True
    return nx.is_connected(graph)


def is_atomic(description: Description) -> bool:
    """Whether ``description`` cannot be split into nested or disjoint parts."""

    if description == EMPTY_DESCRIPTION:
        return True
    zones = description.inner_zones()
    if len(zones) == 1 and len(description.labels) > 1:
        return False
    return is_connected(zones)


def partition2(labels: Sequence[Label]) -> Iterator[Tuple[FrozenSet[Label], FrozenSet[Label]]]:
    """Unordered splits of ``labels`` into two non-empty halves, smaller halves first."""

    labels = sorted(labels)
    universe = frozenset(labels)
    seen = set()
    for size in range(1, len(labels) // 2 + 1):
        for combo in itertools.combinations(labels, size):
            first = frozenset(combo)
            second = universe - first
            key = frozenset([first, second])
            if key in seen:
                continue
            seen.add(key)
            yield first, second


def _project(description: Description, dropped: FrozenSet[Label]) -> Description:
    return Description(zone - dropped for zone in description.abstract_zones)


def try_split(
    description: Description,
    first: FrozenSet[Label],
    second: FrozenSet[Label],
) -> Optional[ComponentSplit]:
    d1 = _project(description, second)
    d2 = _project(description, first)
    for zone in d1.abstract_zones:
        if d1.slot(zone, d2) == description:
            return ComponentSplit(d1, zone, d2)
    for zone in d2.abstract_zones:
        if d2.slot(zone, d1) == description:
            return ComponentSplit(d2, zone, d1)
    return None


def find_split(description: Description, max_workers: Optional[int] = None) -> Optional[ComponentSplit]:
    """First 2-partition that splits ``description``.

    With ``max_workers > 1`` candidate partitions are checked on a thread pool
    and the first success cancels the checks still pending; which split wins
    is then unspecified when several exist.
    """

    partitions = partition2(description.labels)
    if not max_workers or max_workers <= 1:
        for first, second in partitions:
            split = try_split(description, first, second)
            if split is not None:
                return split
        return None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        pending = {executor.submit(try_split, description, first, second) for first, second in partitions}
        try:
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    split = future.result()
                    if split is not None:
                        return split
        finally:
            for future in pending:
                future.cancel()
    return None


@debug_log_call(logger)
def decompose_components(description: Description, max_workers: Optional[int] = None) -> List[Description]:
    """Leaves of the recursive split of ``description``.

    The first leaf holds the enclosing zones; every later leaf's parent is a
    zone of the leaves before it.
    """

    if len(description.labels) <= 1 or is_atomic(description):
        return [description]

    split = find_split(description, max_workers)
    if split is None:
        logger.debug("No split for non-atomic description %r; drawing it as one piece", description)
        return [description]

    host = split.host.with_parent(description.parent)
    guest = split.guest.with_parent(description.parent + split.zone)
    logger.debug(
        "Split %r into %r and %r at zone %r",
        description,
        host,
        guest,
        split.zone.to_informal(),
    )
    return decompose_components(host, max_workers) + decompose_components(guest, max_workers)


__all__ = [
    "ComponentSplit",
    "decompose_components",
    "find_split",
    "is_atomic",
    "is_connected",
    "neighbour_graph",
    "partition2",
    "try_split",
]
