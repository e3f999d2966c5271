"""Geometry helpers: region algebra, visual centres, piercing, routing, smoothing."""

from .piercing import PiercingSolution, double_piercing, single_piercing
from .polygons import Point2D, circle_polygon, signed_distance
from .polylabel import visual_center
from .routing import route_polyline
from .smoothing import closed_cubic_segments

__all__ = [
    "PiercingSolution",
    "Point2D",
    "circle_polygon",
    "closed_cubic_segments",
    "double_piercing",
    "route_polyline",
    "signed_distance",
    "single_piercing",
    "visual_center",
]
