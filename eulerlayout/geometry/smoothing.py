"""Closed Catmull-Rom smoothing of polygon outlines into cubic Bezier segments."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .polygons import Point2D

CubicSegment = Tuple[Point2D, Point2D, Point2D]  # (control 1, control 2, end)


def _dedupe_ring(points: Sequence[Point2D]) -> np.ndarray:
    arr = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(arr) > 1 and np.allclose(arr[0], arr[-1]):
        arr = arr[:-1]
    keep = [0]
    for idx in range(1, len(arr)):
        if not np.allclose(arr[idx], arr[keep[-1]]):
            keep.append(idx)
    return arr[keep]


def closed_cubic_segments(points: Sequence[Point2D], tension: float = 1.0) -> Tuple[Point2D, List[CubicSegment]]:
    """Return the start point and one cubic segment per ring edge.

    The curve interpolates every input point; ``tension`` scales the tangent
    length (``0`` gives the straight polygon back).
    """

    ring = _dedupe_ring(points)
    if len(ring) < 3:
        raise ValueError("smoothing needs at least three distinct points")
    n = len(ring)
    prev_pts = np.roll(ring, 1, axis=0)
    next_pts = np.roll(ring, -1, axis=0)
    next2_pts = np.roll(ring, -2, axis=0)
    c1 = ring + (next_pts - prev_pts) * (tension / 6.0)
    c2 = next_pts - (next2_pts - ring) * (tension / 6.0)

    segments: List[CubicSegment] = []
    for idx in range(n):
        segments.append(
            (
                (float(c1[idx, 0]), float(c1[idx, 1])),
                (float(c2[idx, 0]), float(c2[idx, 1])),
                (float(next_pts[idx, 0]), float(next_pts[idx, 1])),
            )
        )
    return (float(ring[0, 0]), float(ring[0, 1])), segments


def sample_cubic(p0: Point2D, c1: Point2D, c2: Point2D, p3: Point2D, steps: int) -> List[Point2D]:
    """Points of the cubic at ``t = 1/steps, ..., 1`` (the start is omitted)."""

    t = np.linspace(1.0 / steps, 1.0, steps)[:, None]
    a = np.asarray(p0, dtype=float)
    b = np.asarray(c1, dtype=float)
    c = np.asarray(c2, dtype=float)
    d = np.asarray(p3, dtype=float)
    u = 1.0 - t
    pts = u ** 3 * a + 3 * u ** 2 * t * b + 3 * u * t ** 2 * c + t ** 3 * d
    return [(float(x), float(y)) for x, y in pts]


__all__ = ["CubicSegment", "closed_cubic_segments", "sample_cubic"]
