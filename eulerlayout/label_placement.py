"""Anchor points for curve labels.

A good label point lies outside its own curve, inside as few other curves as
possible and away from their boundaries.  Candidates are the curve's polygon
vertices pushed outwards from its centroid.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Sequence

import numpy as np

from .curves import CircleCurve, Curve
from .geometry.polygons import Point2D, centroid, contains_point, exterior_vertices, signed_distance

logger = logging.getLogger(__name__)

MIN_OFFSET = 150.0
MAX_OFFSET = 300.0
PATH_OFFSET = 150.0
CONTAINMENT_WEIGHT = 2000.0
# Boundary distances below this count as "inside" noise from polygonization.
NEAR_BOUNDARY_THRESHOLD = -20.0


def _offset(curve: Curve) -> float:
    raw = curve.radius / 3.0 if isinstance(curve, CircleCurve) else PATH_OFFSET
    return float(np.clip(raw, MIN_OFFSET, MAX_OFFSET))


def candidate_points(curve: Curve) -> List[Point2D]:
    polygon = curve.polygon
    if polygon.is_empty:
        return []
    cx, cy = centroid(polygon)
    magnitude = _offset(curve)
    points: List[Point2D] = []
    for x, y in exterior_vertices(polygon):
        dx, dy = x - cx, y - cy
        norm = math.hypot(dx, dy)
        if norm == 0:
            continue
        points.append((x + dx / norm * magnitude, y + dy / norm * magnitude))
    return points


def _score(point: Point2D, others: Sequence[Curve]) -> float:
    containing = sum(1 for other in others if contains_point(other.polygon, point))
    distances = [signed_distance(other.polygon, point) for other in others]
    near = [d for d in distances if d >= NEAR_BOUNDARY_THRESHOLD]
    min_distance = min(near) if near else 0.0
    return CONTAINMENT_WEIGHT * containing - min_distance


def place_label(curve: Curve, others: Sequence[Curve]) -> Point2D:
    candidates = candidate_points(curve)
    if not candidates:
        return centroid(curve.polygon) if not curve.polygon.is_empty else (0.0, 0.0)
    return min(candidates, key=lambda point: _score(point, others))


def place_labels(curves: Iterable[Curve]) -> Dict[str, Point2D]:
    """Label anchor for every curve, keyed by label."""

    curves = list(curves)
    anchors: Dict[str, Point2D] = {}
    for curve in curves:
        others = [other for other in curves if other is not curve]
        anchors[curve.label] = place_label(curve, others)
    logger.debug("Placed %d label(s)", len(anchors))
    return anchors


__all__ = ["candidate_points", "place_label", "place_labels"]
