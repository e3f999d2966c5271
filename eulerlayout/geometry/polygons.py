"""Region algebra over shapely polygons."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import shapely
from shapely.geometry import GeometryCollection, MultiPolygon, Point, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]
BBox = Tuple[float, float, float, float]
Area = Union[Polygon, MultiPolygon]

# Vertices per quarter circle when a circle is polygonized.
CIRCLE_QUAD_SEGS = 16


def circle_polygon(cx: float, cy: float, radius: float, quad_segs: int = CIRCLE_QUAD_SEGS) -> Polygon:
    if radius <= 0:
        return Polygon()
    return Point(cx, cy).buffer(radius, quad_segs=quad_segs)


def as_area(geom: Optional[BaseGeometry]) -> Area:
    """Keep only the areal parts of an overlay result."""

    if geom is None or geom.is_empty:
        return Polygon()
    if isinstance(geom, (Polygon, MultiPolygon)):
        return geom
    if isinstance(geom, GeometryCollection):
        parts: List[Polygon] = []
        for part in geom.geoms:
            if isinstance(part, Polygon) and not part.is_empty:
                parts.append(part)
            elif isinstance(part, MultiPolygon):
                parts.extend(p for p in part.geoms if not p.is_empty)
        if not parts:
            return Polygon()
        if len(parts) == 1:
            return parts[0]
        return MultiPolygon(parts)
    return Polygon()


def intersection(areas: Sequence[BaseGeometry]) -> Area:
    if not areas:
        return Polygon()
    return as_area(reduce(lambda acc, item: acc.intersection(item), areas[1:], areas[0]))


def union(areas: Iterable[BaseGeometry]) -> Area:
    parts = [area for area in areas if area is not None and not area.is_empty]
    if not parts:
        return Polygon()
    return as_area(unary_union(parts))


def difference(area: BaseGeometry, holes: Iterable[BaseGeometry]) -> Area:
    cutter = union(holes)
    if cutter.is_empty:
        return as_area(area)
    return as_area(area.difference(cutter))


def bounding_box(geoms: Iterable[BaseGeometry]) -> Optional[BBox]:
    """Joint bounds of non-empty geometries, or ``None`` when there are none."""

    bounds = [geom.bounds for geom in geoms if geom is not None and not geom.is_empty]
    if not bounds:
        return None
    arr = np.asarray(bounds, dtype=float)
    return (
        float(arr[:, 0].min()),
        float(arr[:, 1].min()),
        float(arr[:, 2].max()),
        float(arr[:, 3].max()),
    )


def bbox_polygon(bounds: BBox) -> Polygon:
    return box(*bounds)


def bbox_center(bounds: BBox) -> Point2D:
    min_x, min_y, max_x, max_y = bounds
    return ((min_x + max_x) / 2.0, (min_y + max_y) / 2.0)


def centroid(geom: BaseGeometry) -> Point2D:
    c = geom.centroid
    return (float(c.x), float(c.y))


def contains_point(geom: BaseGeometry, point: Point2D) -> bool:
    return bool(geom.contains(Point(point)))


def boundary_distance(geom: BaseGeometry, point: Point2D) -> float:
    if geom.is_empty:
        return float("inf")
    return float(geom.boundary.distance(Point(point)))


def signed_distance(geom: BaseGeometry, point: Point2D) -> float:
    """Distance to the boundary, negative inside the region.

    Interior rings belong to the boundary, so points inside a hole measure
    against the hole's edge.
    """

    distance = boundary_distance(geom, point)
    if distance != float("inf") and contains_point(geom, point):
        return -distance
    return distance


def vertices(geom: BaseGeometry) -> List[Point2D]:
    """All ring coordinates of ``geom`` (closing duplicates removed)."""

    if geom.is_empty:
        return []
    seen = set()
    result: List[Point2D] = []
    for x, y in shapely.get_coordinates(geom):
        key = (float(x), float(y))
        if key in seen:
            continue
        seen.add(key)
        result.append(key)
    return result


def exterior_vertices(polygon: Polygon) -> List[Point2D]:
    if polygon.is_empty:
        return []
    coords = list(polygon.exterior.coords)
    return [(float(x), float(y)) for x, y in coords[:-1]]


def rounded_vertices(geom: BaseGeometry) -> set:
    return {(int(round(x)), int(round(y))) for x, y in vertices(geom)}


def largest_polygon(geom: BaseGeometry) -> Polygon:
    area = as_area(geom)
    if isinstance(area, MultiPolygon):
        return max(area.geoms, key=lambda part: part.area)
    return area


def scale_point(point: Point2D, ratio: float, pivot: Point2D) -> Point2D:
    return (
        point[0] * ratio + (1.0 - ratio) * pivot[0],
        point[1] * ratio + (1.0 - ratio) * pivot[1],
    )


__all__ = [
    "Area",
    "BBox",
    "CIRCLE_QUAD_SEGS",
    "Point2D",
    "as_area",
    "bbox_center",
    "bbox_polygon",
    "boundary_distance",
    "bounding_box",
    "centroid",
    "circle_polygon",
    "contains_point",
    "difference",
    "exterior_vertices",
    "intersection",
    "largest_polygon",
    "rounded_vertices",
    "scale_point",
    "signed_distance",
    "union",
    "vertices",
]
