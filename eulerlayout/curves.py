"""Concrete curves: circles and closed paths.

``Curve`` is a plain union of the two frozen dataclasses below.  Both expose
the same capabilities (``label``, ``kind``, ``polygon``, ``shape``,
``translate``, ``scale``, ``as_dict``); code that needs variant-specific data
dispatches on the type.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, ClassVar, Dict, List, Sequence, Tuple, Union

from shapely.geometry import Polygon

from .geometry.polygons import Point2D, circle_polygon, largest_polygon, scale_point
from .geometry.smoothing import closed_cubic_segments, sample_cubic

# Samples per cubic segment when a path is polygonized.
CUBIC_SAMPLES = 10


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathElement = Union[MoveTo, LineTo, CubicTo, ClosePath]


def _map_element(element: PathElement, fn) -> PathElement:
    if isinstance(element, (MoveTo, LineTo)):
        x, y = fn((element.x, element.y))
        return type(element)(x, y)
    if isinstance(element, CubicTo):
        c1x, c1y = fn((element.c1x, element.c1y))
        c2x, c2y = fn((element.c2x, element.c2y))
        x, y = fn((element.x, element.y))
        return CubicTo(c1x, c1y, c2x, c2y, x, y)
    return element


def _element_dict(element: PathElement) -> Dict[str, Any]:
    if isinstance(element, MoveTo):
        return {"op": "move", "to": [element.x, element.y]}
    if isinstance(element, LineTo):
        return {"op": "line", "to": [element.x, element.y]}
    if isinstance(element, CubicTo):
        return {
            "op": "cubic",
            "c1": [element.c1x, element.c1y],
            "c2": [element.c2x, element.c2y],
            "to": [element.x, element.y],
        }
    return {"op": "close"}


@dataclass(frozen=True)
class CircleCurve:
    label: str
    center_x: float
    center_y: float
    radius: float

    kind: ClassVar[str] = "circle"

    @property
    def center(self) -> Point2D:
        return (self.center_x, self.center_y)

    @cached_property
    def polygon(self) -> Polygon:
        return circle_polygon(self.center_x, self.center_y, self.radius)

    @cached_property
    def shape(self) -> Dict[str, Any]:
        return {"kind": self.kind, "center": [self.center_x, self.center_y], "radius": self.radius}

    def translate(self, dx: float, dy: float) -> "CircleCurve":
        return replace(self, center_x=self.center_x + dx, center_y=self.center_y + dy)

    def scale(self, ratio: float, pivot: Point2D) -> "CircleCurve":
        cx, cy = scale_point(self.center, ratio, pivot)
        return CircleCurve(self.label, cx, cy, self.radius * ratio)

    def as_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "shape": self.shape}

    def __str__(self) -> str:
        return f"Circle[{self.label}: ({self.center_x:.1f}, {self.center_y:.1f}) r={self.radius:.1f}]"


@dataclass(frozen=True)
class PathCurve:
    label: str
    elements: Tuple[PathElement, ...]

    kind: ClassVar[str] = "path"

    @classmethod
    def smooth(cls, label: str, points: Sequence[Point2D]) -> "PathCurve":
        """Closed cubic path interpolating the given outline."""

        start, segments = closed_cubic_segments(points)
        elements: List[PathElement] = [MoveTo(*start)]
        for (c1x, c1y), (c2x, c2y), (x, y) in segments:
            elements.append(CubicTo(c1x, c1y, c2x, c2y, x, y))
        elements.append(ClosePath())
        return cls(label, tuple(elements))

    @classmethod
    def from_polygon(cls, label: str, points: Sequence[Point2D]) -> "PathCurve":
        elements: List[PathElement] = [MoveTo(*points[0])]
        elements.extend(LineTo(x, y) for x, y in points[1:])
        elements.append(ClosePath())
        return cls(label, tuple(elements))

    def outline(self) -> List[Point2D]:
        """Polyline approximation of the first closed sub-path."""

        points: List[Point2D] = []
        current: Point2D = (0.0, 0.0)
        for element in self.elements:
            if isinstance(element, MoveTo):
                if points:
                    break
                current = (element.x, element.y)
                points.append(current)
            elif isinstance(element, LineTo):
                current = (element.x, element.y)
                points.append(current)
            elif isinstance(element, CubicTo):
                end = (element.x, element.y)
                points.extend(
                    sample_cubic(
                        current,
                        (element.c1x, element.c1y),
                        (element.c2x, element.c2y),
                        end,
                        CUBIC_SAMPLES,
                    )
                )
                current = end
            else:
                break
        return points

    @cached_property
    def polygon(self) -> Polygon:
        points = self.outline()
        if len(points) < 3:
            return Polygon()
        polygon = Polygon(points)
        if not polygon.is_valid:
            polygon = largest_polygon(polygon.buffer(0))
        return polygon

    @cached_property
    def shape(self) -> Dict[str, Any]:
        return {"kind": self.kind, "elements": [_element_dict(el) for el in self.elements]}

    def translate(self, dx: float, dy: float) -> "PathCurve":
        return PathCurve(
            self.label,
            tuple(_map_element(el, lambda p: (p[0] + dx, p[1] + dy)) for el in self.elements),
        )

    def scale(self, ratio: float, pivot: Point2D) -> "PathCurve":
        return PathCurve(
            self.label,
            tuple(_map_element(el, lambda p: scale_point(p, ratio, pivot)) for el in self.elements),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "shape": self.shape}

    def __str__(self) -> str:
        return f"Path[{self.label}: {len(self.elements)} element(s)]"


Curve = Union[CircleCurve, PathCurve]


def sort_curves(curves: Sequence[Curve]) -> Tuple[Curve, ...]:
    return tuple(sorted(curves, key=lambda curve: curve.label))


__all__ = [
    "CircleCurve",
    "ClosePath",
    "CubicTo",
    "Curve",
    "LineTo",
    "MoveTo",
    "PathCurve",
    "PathElement",
    "sort_curves",
]
