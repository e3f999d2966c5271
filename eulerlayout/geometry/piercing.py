"""Placement of circles that pierce existing curves.

A single-piercing circle crosses one curve and splits exactly two zones; a
double-piercing circle sits on the crossing point of two curves and splits
the four zones meeting there.  In both cases the centre lies on the boundary
shared by all split regions and the radius is limited by the distance to every
other zone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import shapely
from scipy.optimize import minimize_scalar
from shapely.geometry import LinearRing, Point
from shapely.geometry.base import BaseGeometry

from .polygons import Point2D

logger = logging.getLogger(__name__)

TOUCH_TOLERANCE = 0.5
MIN_CLEARANCE = 1.0
SAMPLES_PER_RING = 256


@dataclass
class PiercingSolution:
    """Centre of the piercing circle and the clearance around it."""

    center: Point2D
    radius: float


class _Evaluator:
    def __init__(self, regions: Sequence[BaseGeometry], obstacles: Sequence[BaseGeometry]) -> None:
        self.regions = [region for region in regions]
        self.obstacles = [obstacle for obstacle in obstacles if not obstacle.is_empty]
        for geom in self.regions + self.obstacles:
            shapely.prepare(geom)

    def clearance(self, points: np.ndarray) -> np.ndarray:
        """Clearance of each candidate, ``-1`` when it does not touch every region."""

        geoms = shapely.points(points)
        touches = np.ones(len(points), dtype=bool)
        for region in self.regions:
            touches &= shapely.distance(region, geoms) <= TOUCH_TOLERANCE
        if self.obstacles:
            clear = np.min(
                np.vstack([shapely.distance(obstacle, geoms) for obstacle in self.obstacles]),
                axis=0,
            )
        else:
            clear = np.full(len(points), np.inf)
        return np.where(touches, clear, -1.0)

    def clearance_at(self, point: Point2D) -> float:
        return float(self.clearance(np.asarray([point], dtype=float))[0])


def _rings(outlines: Sequence[BaseGeometry]) -> List[LinearRing]:
    rings: List[LinearRing] = []
    for outline in outlines:
        if outline.is_empty:
            continue
        for polygon in getattr(outline, "geoms", [outline]):
            rings.append(polygon.exterior)
    return rings


def _finite(radius: float, regions: Sequence[BaseGeometry]) -> float:
    if np.isfinite(radius):
        return radius
    bounds = shapely.total_bounds(list(regions))
    return float(max(bounds[2] - bounds[0], bounds[3] - bounds[1]))


def _refine(
    evaluator: _Evaluator,
    ring: LinearRing,
    offset: float,
    step: float,
    point: Point2D,
    score: float,
) -> Tuple[Point2D, float]:
    """Bounded scalar search along ``ring`` around a sampled optimum."""

    def objective(value: float) -> float:
        pt = ring.interpolate(value % ring.length)
        clearance = evaluator.clearance_at((pt.x, pt.y))
        return -clearance if clearance >= 0 else 1.0

    refined = minimize_scalar(
        objective,
        bounds=(offset - step, offset + step),
        method="bounded",
        options={"xatol": 1e-3},
    )
    if refined.success and -refined.fun > score:
        pt: Point = ring.interpolate(float(refined.x) % ring.length)
        return (float(pt.x), float(pt.y)), float(-refined.fun)
    return point, score


def single_piercing(
    regions: Sequence[BaseGeometry],
    obstacles: Sequence[BaseGeometry],
    outlines: Sequence[BaseGeometry],
) -> Optional[PiercingSolution]:
    """Best centre on a curve boundary touching both ``regions``.

    Boundary samples are scored first; the best one is then refined with a
    bounded scalar search along its ring.
    """

    if len(regions) != 2:
        raise ValueError("single piercing splits exactly two regions")
    evaluator = _Evaluator(regions, obstacles)

    best_score = -1.0
    best_point: Optional[Point2D] = None
    best_ring: Optional[LinearRing] = None
    best_offset = 0.0
    step = 0.0
    for ring in _rings(outlines):
        length = ring.length
        if length <= 0:
            continue
        offsets = np.linspace(0.0, length, SAMPLES_PER_RING, endpoint=False)
        points = shapely.get_coordinates(shapely.line_interpolate_point(ring, offsets))
        scores = evaluator.clearance(points)
        idx = int(np.argmax(scores))
        if scores[idx] > best_score:
            best_score = float(scores[idx])
            best_point = (float(points[idx, 0]), float(points[idx, 1]))
            best_ring = ring
            best_offset = float(offsets[idx])
            step = length / SAMPLES_PER_RING

    if best_point is None or best_score < MIN_CLEARANCE:
        logger.debug("Single piercing infeasible (best clearance %.3f)", best_score)
        return None

    if np.isfinite(best_score):
        best_point, best_score = _refine(evaluator, best_ring, best_offset, step, best_point, best_score)

    radius = _finite(best_score, regions)
    logger.debug("Single piercing at (%.2f, %.2f) with clearance %.2f", best_point[0], best_point[1], radius)
    return PiercingSolution(best_point, radius)


def double_piercing(
    regions: Sequence[BaseGeometry],
    obstacles: Sequence[BaseGeometry],
    outlines: Sequence[BaseGeometry],
) -> Optional[PiercingSolution]:
    """Best crossing point of two curves that touches all four ``regions``."""

    if len(regions) != 4:
        raise ValueError("double piercing splits exactly four regions")
    rings = _rings(outlines)
    candidates: List[np.ndarray] = []
    for i in range(len(rings)):
        for j in range(i + 1, len(rings)):
            crossing = rings[i].intersection(rings[j])
            if crossing.is_empty:
                continue
            candidates.append(shapely.get_coordinates(crossing))
    if not candidates:
        logger.debug("Double piercing infeasible: curves never cross")
        return None

    points = np.vstack(candidates)
    evaluator = _Evaluator(regions, obstacles)
    scores = evaluator.clearance(points)
    idx = int(np.argmax(scores))
    if scores[idx] < MIN_CLEARANCE:
        logger.debug("Double piercing infeasible (best clearance %.3f)", float(scores[idx]))
        return None
    center = (float(points[idx, 0]), float(points[idx, 1]))
    radius = _finite(float(scores[idx]), regions)
    logger.debug("Double piercing at (%.2f, %.2f) with clearance %.2f", center[0], center[1], radius)
    return PiercingSolution(center, radius)


__all__ = ["PiercingSolution", "double_piercing", "single_piercing"]
