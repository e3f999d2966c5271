"""Grid A* router for polylines that must stay inside a region."""

from __future__ import annotations

import heapq
import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np
import shapely
from shapely.geometry import LineString
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from .polygons import Point2D

logger = logging.getLogger(__name__)

GRID_STEPS = 48
ENTRY_CANDIDATES = 12

Node = Tuple[int, int]

_NEIGHBOURS = [
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]


class _Grid:
    def __init__(self, region: BaseGeometry, steps: int) -> None:
        min_x, min_y, max_x, max_y = region.bounds
        self.cell = max(max_x - min_x, max_y - min_y) / float(steps)
        self.min_x = min_x
        self.min_y = min_y
        self.nx = max(1, int(math.ceil((max_x - min_x) / self.cell)))
        self.ny = max(1, int(math.ceil((max_y - min_y) / self.cell)))
        xs = min_x + (np.arange(self.nx) + 0.5) * self.cell
        ys = min_y + (np.arange(self.ny) + 0.5) * self.cell
        self.xs = xs
        self.ys = ys
        gx, gy = np.meshgrid(xs, ys, indexing="ij")
        self.inside = shapely.contains_xy(region, gx, gy)

    def point(self, node: Node) -> Point2D:
        return (float(self.xs[node[0]]), float(self.ys[node[1]]))

    def free(self, node: Node) -> bool:
        i, j = node
        return 0 <= i < self.nx and 0 <= j < self.ny and bool(self.inside[i, j])

    def nearest_free(self, point: Point2D, limit: int) -> List[Node]:
        idx = np.argwhere(self.inside)
        if idx.size == 0:
            return []
        px = self.xs[idx[:, 0]] - point[0]
        py = self.ys[idx[:, 1]] - point[1]
        order = np.argsort(px * px + py * py)[:limit]
        return [(int(idx[k, 0]), int(idx[k, 1])) for k in order]


def _visible(prepared, a: Point2D, b: Point2D) -> bool:
    if a == b:
        return True
    return bool(prepared.contains(LineString([a, b])))


def _entry_node(grid: _Grid, prepared, point: Point2D) -> Optional[Node]:
    for node in grid.nearest_free(point, ENTRY_CANDIDATES):
        if _visible(prepared, point, grid.point(node)):
            return node
    return None


def _simplify_path(prepared, path: List[Point2D]) -> List[Point2D]:
    """Drop waypoints that have a direct line of sight past them."""

    if len(path) <= 2:
        return path
    result = [path[0]]
    anchor = 0
    while anchor < len(path) - 1:
        nxt = len(path) - 1
        while nxt > anchor + 1 and not _visible(prepared, path[anchor], path[nxt]):
            nxt -= 1
        result.append(path[nxt])
        anchor = nxt
    return result


def route_polyline(
    region: BaseGeometry,
    start: Point2D,
    goal: Point2D,
    *,
    grid_steps: int = GRID_STEPS,
) -> Optional[List[Point2D]]:
    """Return a polyline from ``start`` to ``goal`` inside ``region``.

    ``None`` means no route was found on the grid.
    """

    if region.is_empty:
        return None
    prepared = prep(region)
    if _visible(prepared, start, goal):
        return [start, goal]

    grid = _Grid(region, grid_steps)
    source = _entry_node(grid, prepared, start)
    target = _entry_node(grid, prepared, goal)
    if source is None or target is None:
        logger.debug("No grid entry for route %s -> %s", start, goal)
        return None

    goal_x, goal_y = grid.point(target)

    def _h(node: Node) -> float:
        x, y = grid.point(node)
        return math.hypot(x - goal_x, y - goal_y)

    open_set: List[Tuple[float, Node]] = []
    heapq.heappush(open_set, (0.0, source))
    came_from: Dict[Node, Optional[Node]] = {source: None}
    g_score: Dict[Node, float] = {source: 0.0}

    found = False
    while open_set:
        _, current = heapq.heappop(open_set)
        if current == target:
            found = True
            break
        cx, cy = grid.point(current)
        for di, dj in _NEIGHBOURS:
            neighbor = (current[0] + di, current[1] + dj)
            if not grid.free(neighbor):
                continue
            if di and dj and not (grid.free((current[0] + di, current[1])) and grid.free((current[0], current[1] + dj))):
                continue
            nx_val, ny_val = grid.point(neighbor)
            tent_g = g_score[current] + math.hypot(nx_val - cx, ny_val - cy)
            if tent_g < g_score.get(neighbor, float("inf")):
                g_score[neighbor] = tent_g
                came_from[neighbor] = current
                heapq.heappush(open_set, (tent_g + _h(neighbor), neighbor))

    if not found:
        logger.debug("A* found no route %s -> %s", start, goal)
        return None

    path: List[Point2D] = []
    node: Optional[Node] = target
    while node is not None:
        path.append(grid.point(node))
        node = came_from.get(node)
    path.reverse()
    path = [start] + path + [goal]
    return _simplify_path(prepared, path)


__all__ = ["GRID_STEPS", "route_polyline"]
