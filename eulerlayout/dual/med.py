"""Modified Euler dual (MED) of a concrete diagram.

Every inner zone becomes a vertex at its visual centre and adjacent zones are
joined by edges that cross only the curve separating them.  The outside zone
is represented by a ring of vertices around the diagram.  A new curve can be
drawn along any valid simple cycle of this graph: it then passes through
exactly the zones on the cycle.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.polygon import orient

from ..abstract import AbstractZone
from ..concrete import EulerDiagram, Zone
from ..geometry.polygons import Point2D, bbox_center, bounding_box, union
from ..geometry.routing import route_polyline

logger = logging.getLogger(__name__)

DEFAULT_RING_SIDES = 16
DEFAULT_RING_CLEARANCE = 100.0
# Dilation applied to the two zones an edge is routed through.
ROUTE_REGION_PADDING = 0.5


@dataclass(frozen=True, eq=False)
class MEDVertex:
    zone: Zone
    point: Point2D

    @property
    def az(self) -> AbstractZone:
        return self.zone.az

    def distance(self, other: "MEDVertex") -> float:
        return math.hypot(self.point[0] - other.point[0], self.point[1] - other.point[1])

    def __repr__(self) -> str:
        return f"MEDVertex({self.az.to_informal()!r}, ({self.point[0]:.1f}, {self.point[1]:.1f}))"


@dataclass(frozen=True, eq=False)
class MEDEdge:
    """Edge drawn as the polyline ``points`` from ``v1`` to ``v2``."""

    v1: MEDVertex
    v2: MEDVertex
    points: Tuple[Point2D, ...]

    @classmethod
    def straight(cls, v1: MEDVertex, v2: MEDVertex) -> "MEDEdge":
        return cls(v1, v2, (v1.point, v2.point))


@dataclass(frozen=True)
class MEDCycle:
    nodes: Tuple[MEDVertex, ...]
    edges: Tuple[MEDEdge, ...]
    polygon: Tuple[Point2D, ...] = field(default=())

    def length(self) -> int:
        return len(self.nodes)

    def nodes_unique(self) -> List[MEDVertex]:
        seen = set()
        unique: List[MEDVertex] = []
        for node in self.nodes:
            if node.az in seen:
                continue
            seen.add(node.az)
            unique.append(node)
        return unique

    def length_unique(self) -> int:
        return len(self.nodes_unique())

    def zones(self) -> List[AbstractZone]:
        return [node.az for node in self.nodes_unique()]


def trace_cycle(nodes: Sequence[MEDVertex], edges: Sequence[MEDEdge]) -> Optional[List[Point2D]]:
    """Outline obtained by walking ``edges`` from ``nodes[0]``.

    Edges are reversed where their stored direction disagrees with the walk.
    ``None`` when the edges do not chain into a closed loop.
    """

    if not nodes or not edges:
        return None
    current = nodes[0].point
    outline = [current]
    for edge in edges:
        points = list(edge.points)
        if current == points[0]:
            outline.extend(points[1:])
        elif current == points[-1]:
            outline.extend(reversed(points[:-1]))
        else:
            return None
        current = outline[-1]
    if outline[-1] != outline[0]:
        return None
    outline.pop()
    return list(dict.fromkeys(outline))


def validate_cycle(cycle: MEDCycle, vertices: Iterable[MEDVertex]) -> Optional[MEDCycle]:
    """Return ``cycle`` with its polygon filled in, or ``None`` when unusable.

    A usable cycle visits each inner zone at most once, traces a simple
    polygon, and encloses no vertex outside the cycle.
    """

    counts = Counter(node.az for node in cycle.nodes if not node.az.is_outside())
    if any(count > 1 for count in counts.values()):
        return None

    outline = trace_cycle(cycle.nodes, cycle.edges)
    if outline is None or len(outline) < 3:
        return None
    polygon = Polygon(outline)
    if not polygon.is_valid or polygon.area <= 0:
        return None
    polygon = orient(polygon, sign=1.0)

    members = {id(node) for node in cycle.nodes}
    for vertex in vertices:
        if id(vertex) not in members and polygon.contains(Point(vertex.point)):
            return None

    coords = tuple((float(x), float(y)) for x, y in polygon.exterior.coords)[:-1]
    return MEDCycle(cycle.nodes, cycle.edges, coords)


class MED:
    def __init__(
        self,
        diagram: EulerDiagram,
        ring_sides: int = DEFAULT_RING_SIDES,
        ring_clearance: float = DEFAULT_RING_CLEARANCE,
    ) -> None:
        self.diagram = diagram
        self.ring_sides = ring_sides
        self.ring_clearance = ring_clearance

        self.inner_vertices: List[MEDVertex] = [
            MEDVertex(zone, zone.visual_center) for zone in diagram.zones
        ]
        self.edges: List[MEDEdge] = self._inside_edges()
        self.ring_center, self.ring_radius, self.ring_vertices = self._ring_vertices()
        self.edges.extend(self._outside_edges())
        self.edges.extend(self._ring_edges())
        self.vertices: List[MEDVertex] = self.inner_vertices + self.ring_vertices
        logger.debug(
            "MED with %d inner vertex(es), %d ring vertex(es), %d edge(s)",
            len(self.inner_vertices),
            len(self.ring_vertices),
            len(self.edges),
        )

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    def _inside_edges(self) -> List[MEDEdge]:
        edges: List[MEDEdge] = []
        for v1, v2 in itertools.combinations(self.inner_vertices, 2):
            if not v1.zone.is_topologically_adjacent(v2.zone):
                continue
            edge = self._create_edge(v1, v2)
            if edge is not None:
                edges.append(edge)
        return edges

    def _crosses_only(self, segment: LineString, label: str) -> bool:
        crosses_separator = False
        for curve in self.diagram.curves:
            hit = segment.intersects(curve.polygon.exterior)
            if curve.label == label:
                crosses_separator = hit
            elif hit:
                return False
        return crosses_separator

    def _create_edge(self, v1: MEDVertex, v2: MEDVertex) -> Optional[MEDEdge]:
        separator = v1.zone.separating_curve(v2.zone)
        if self._crosses_only(LineString([v1.point, v2.point]), separator.label):
            return MEDEdge.straight(v1, v2)

        region = union(
            [v1.zone.polygon.buffer(ROUTE_REGION_PADDING), v2.zone.polygon.buffer(ROUTE_REGION_PADDING)]
        )
        points = route_polyline(region, v1.point, v2.point)
        if points is None:
            logger.debug("Skipping MED edge %r - %r: no route", v1, v2)
            return None
        return MEDEdge(v1, v2, tuple(points))

    def _ring_vertices(self) -> Tuple[Point2D, float, List[MEDVertex]]:
        bounds = bounding_box(zone.polygon for zone in self.diagram.zones)
        if bounds is None:
            bounds = (0.0, 0.0, 0.0, 0.0)
        center = bbox_center(bounds)
        radius = math.hypot(bounds[2] - bounds[0], bounds[3] - bounds[1]) / 2.0 + self.ring_clearance
        outside = self.diagram.outside_zone
        ring = []
        for k in range(self.ring_sides):
            angle = math.pi + 2.0 * math.pi * k / self.ring_sides
            point = (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))
            ring.append(MEDVertex(outside, point))

        def _angle(vertex: MEDVertex) -> float:
            return math.atan2(vertex.point[1] - center[1], vertex.point[0] - center[0])

        ring.sort(key=_angle)
        return center, radius, ring

    def _outside_edges(self) -> List[MEDEdge]:
        outside = self.diagram.outside_zone
        edges: List[MEDEdge] = []
        for vertex in self.inner_vertices:
            if not vertex.zone.is_topologically_adjacent(outside):
                continue
            nearest = min(self.ring_vertices, key=vertex.distance)
            edges.append(MEDEdge.straight(vertex, nearest))
        return edges

    def _ring_edges(self) -> List[MEDEdge]:
        ring = self.ring_vertices
        return [MEDEdge.straight(ring[i], ring[(i + 1) % len(ring)]) for i in range(len(ring))]

    # ------------------------------------------------------------------
    # cycles
    # ------------------------------------------------------------------

    def graph(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(self.vertices)
        for edge in self.edges:
            graph.add_edge(edge.v1, edge.v2, edge=edge)
        return graph

    def _as_cycle(self, graph: nx.Graph, nodes: Sequence[MEDVertex]) -> MEDCycle:
        edges = tuple(
            graph.edges[nodes[i], nodes[(i + 1) % len(nodes)]]["edge"] for i in range(len(nodes))
        )
        return MEDCycle(tuple(nodes), edges)

    def compute_cycle(self, zones_to_split: Iterable[AbstractZone]) -> Optional[MEDCycle]:
        """Shortest valid cycle passing through every zone in ``zones_to_split``."""

        targets = set(zones_to_split)
        graph = self.graph()
        lower = max(3, len(targets))
        for bound in range(lower, graph.number_of_nodes() + 1):
            for nodes in nx.simple_cycles(graph, length_bound=bound):
                if len(nodes) != bound:
                    continue
                if not targets.issubset(node.az for node in nodes):
                    continue
                cycle = validate_cycle(self._as_cycle(graph, nodes), self.vertices)
                if cycle is not None:
                    logger.debug("MED cycle through %d vertex(es): %s", bound, cycle.zones())
                    return cycle
        logger.debug("No MED cycle covers %s", sorted(zone.to_informal() for zone in targets))
        return None


__all__ = [
    "MED",
    "MEDCycle",
    "MEDEdge",
    "MEDVertex",
    "trace_cycle",
    "validate_cycle",
]
