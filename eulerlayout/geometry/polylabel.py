"""Pole of inaccessibility search ("polylabel").

The visual centre of a region is the interior point farthest from its
boundary.  Square cells covering the bounding box are kept in a heap ordered
by the best distance any point inside them could reach; cells that cannot beat
the current best by more than ``precision`` are discarded, the rest are split
in four.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from ..errors import GeometricInfeasibility
from .polygons import Point2D, centroid

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 1.0
SQRT2 = math.sqrt(2.0)


@dataclass
class _Cell:
    x: float
    y: float
    h: float
    d: float

    @property
    def max(self) -> float:
        return self.d + self.h * SQRT2


class _DistanceField:
    def __init__(self, geom: BaseGeometry) -> None:
        self._boundary = geom.boundary
        self._prepared = prep(geom)

    def inside_distance(self, x: float, y: float) -> float:
        """Positive inside the region, negative outside."""

        point = Point(x, y)
        distance = float(self._boundary.distance(point))
        return distance if self._prepared.contains(point) else -distance

    def cell(self, x: float, y: float, h: float) -> _Cell:
        return _Cell(x, y, h, self.inside_distance(x, y))


def visual_center(geom: BaseGeometry, precision: float = DEFAULT_PRECISION) -> Point2D:
    if geom.is_empty:
        raise GeometricInfeasibility("cannot locate the visual centre of an empty region")

    min_x, min_y, max_x, max_y = geom.bounds
    width = max_x - min_x
    height = max_y - min_y
    cell_size = min(width, height)
    if cell_size <= 0:
        return (min_x, min_y)

    field = _DistanceField(geom)
    counter = itertools.count()
    queue: List[Tuple[float, int, _Cell]] = []

    def push(cell: _Cell) -> None:
        heapq.heappush(queue, (-cell.max, next(counter), cell))

    h = cell_size / 2.0
    x = min_x
    while x < max_x:
        y = min_y
        while y < max_y:
            push(field.cell(x + h, y + h, h))
            y += cell_size
        x += cell_size

    cx, cy = centroid(geom)
    best = field.cell(cx, cy, 0.0)
    bbox_cell = field.cell(min_x + width / 2.0, min_y + height / 2.0, 0.0)
    if bbox_cell.d > best.d:
        best = bbox_cell

    probes = len(queue)
    while queue:
        _, _, cell = heapq.heappop(queue)
        if cell.d > best.d:
            best = cell
        if cell.max - best.d <= precision:
            continue
        h = cell.h / 2.0
        push(field.cell(cell.x - h, cell.y - h, h))
        push(field.cell(cell.x + h, cell.y - h, h))
        push(field.cell(cell.x - h, cell.y + h, h))
        push(field.cell(cell.x + h, cell.y + h, h))
        probes += 4

    logger.debug(
        "Visual centre at (%.2f, %.2f), clearance %.2f after %d probe(s)",
        best.x,
        best.y,
        best.d,
        probes,
    )
    return (best.x, best.y)


__all__ = ["DEFAULT_PRECISION", "visual_center"]
