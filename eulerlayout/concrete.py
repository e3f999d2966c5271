"""Concrete zones and diagrams built from curves."""

from __future__ import annotations

import logging
import math
from functools import cached_property
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from shapely.geometry import MultiPolygon, Polygon

from .abstract import AbstractZone, Description, OUTSIDE
from .curves import Curve, sort_curves
from .errors import InvariantViolation
from .geometry.polygons import (
    Area,
    BBox,
    Point2D,
    bbox_center,
    bbox_polygon,
    boundary_distance,
    bounding_box,
    difference,
    exterior_vertices,
    intersection,
    rounded_vertices,
)
from .geometry.polylabel import visual_center

logger = logging.getLogger(__name__)


class Zone:
    """Region of the plane inside the curves of ``az`` and outside all others."""

    def __init__(self, az: AbstractZone, curves: Sequence[Curve]) -> None:
        self.az = az
        self.curves = tuple(curves)
        self.containing_curves = tuple(curve for curve in self.curves if curve.label in az)
        self.excluding_curves = tuple(curve for curve in self.curves if curve.label not in az)
        if len(self.containing_curves) != az.num_labels:
            raise InvariantViolation(
                f"zone {az.to_informal()!r} has {az.num_labels} label(s) "
                f"but {len(self.containing_curves)} containing curve(s)"
            )

    def is_outside(self) -> bool:
        return self.az.is_outside()

    @cached_property
    def polygon(self) -> Area:
        excluded = [curve.polygon for curve in self.excluding_curves]
        if self.is_outside():
            bounds = bounding_box(excluded)
            if bounds is None:
                return Polygon()
            return difference(bbox_polygon(bounds), excluded)
        base = intersection([curve.polygon for curve in self.containing_curves])
        return difference(base, excluded)

    @cached_property
    def visual_center(self) -> Point2D:
        if self.is_outside():
            raise InvariantViolation("the outside zone has no visual centre")
        return visual_center(self.polygon)

    @cached_property
    def _rounded_vertices(self) -> frozenset:
        return frozenset(rounded_vertices(self.polygon))

    def is_topologically_adjacent(self, other: "Zone") -> bool:
        """Abstract neighbours whose polygons share a vertex."""

        if not self.az.is_neighbour(other.az):
            return False
        return bool(self._rounded_vertices & other._rounded_vertices)

    def separating_curve(self, other: "Zone") -> Curve:
        mine = {curve.label: curve for curve in self.containing_curves}
        theirs = {curve.label: curve for curve in other.containing_curves}
        labels = set(mine) ^ set(theirs)
        if len(labels) != 1:
            raise InvariantViolation(
                f"zones {self.az.to_informal()!r} and {other.az.to_informal()!r} "
                "are not separated by exactly one curve"
            )
        label = next(iter(labels))
        return mine.get(label) or theirs[label]

    def shortest_distance_to_other_zone(self, point: Point2D) -> float:
        return abs(boundary_distance(self.polygon, point))

    def as_dict(self) -> Dict[str, Any]:
        polygon = self.polygon
        parts = list(polygon.geoms) if isinstance(polygon, MultiPolygon) else [polygon]
        data: Dict[str, Any] = {
            "zone": self.az.to_informal(),
            "polygons": [
                [list(pt) for pt in exterior_vertices(part)] for part in parts if not part.is_empty
            ],
        }
        if not self.is_outside() and not polygon.is_empty:
            data["anchor"] = list(self.visual_center)
        return data

    def __repr__(self) -> str:
        return f"Zone({self.az.to_informal()!r})"


class EulerDiagram:
    """Curves together with the description they were meant to realize.

    ``actual_description`` lists the zones the curves produce; zones it has
    beyond ``original_description`` are shaded.
    """

    def __init__(
        self,
        original_description: Description,
        actual_description: Description,
        curves: Iterable[Curve],
    ) -> None:
        self.original_description = original_description
        self.actual_description = actual_description
        self.curves: Tuple[Curve, ...] = sort_curves(list(curves))

    @cached_property
    def zones(self) -> Tuple[Zone, ...]:
        return tuple(
            Zone(az, self.curves)
            for az in self.actual_description.abstract_zones
            if not az.is_outside()
        )

    @cached_property
    def _zones_by_az(self) -> Dict[AbstractZone, Zone]:
        return {zone.az: zone for zone in self.zones}

    @cached_property
    def outside_zone(self) -> Zone:
        return Zone(OUTSIDE, self.curves)

    @property
    def shaded_zones(self) -> Tuple[Zone, ...]:
        return tuple(zone for zone in self.zones if zone.az not in self.original_description)

    @property
    def all_zones(self) -> Tuple[Zone, ...]:
        return self.zones + (self.outside_zone,)

    def get_zone(self, az: AbstractZone) -> Zone:
        if az.is_outside():
            return self.outside_zone
        zone = self._zones_by_az.get(az)
        if zone is None:
            raise InvariantViolation(f"no zone {az.to_informal()!r} in diagram {self}")
        return zone

    def get_curve(self, label: str) -> Optional[Curve]:
        for curve in self.curves:
            if curve.label == label:
                return curve
        return None

    def bbox(self) -> Optional[BBox]:
        return bounding_box(curve.polygon for curve in self.curves)

    def center(self) -> Point2D:
        bounds = self.bbox()
        if bounds is None:
            return (0.0, 0.0)
        return bbox_center(bounds)

    def translate(self, dx: float, dy: float) -> "EulerDiagram":
        return EulerDiagram(
            self.original_description,
            self.actual_description,
            [curve.translate(dx, dy) for curve in self.curves],
        )

    def scale(self, ratio: float, pivot: Optional[Point2D] = None) -> "EulerDiagram":
        if ratio <= 0 or math.isnan(ratio):
            raise ValueError(f"scale ratio must be positive, got {ratio!r}")
        pivot = pivot if pivot is not None else self.center()
        return EulerDiagram(
            self.original_description,
            self.actual_description,
            [curve.scale(ratio, pivot) for curve in self.curves],
        )

    def as_dict(self, labels: Optional[Dict[str, Point2D]] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "description": self.original_description.to_informal(),
            "actual_description": self.actual_description.to_informal(),
            "curves": [curve.as_dict() for curve in self.curves],
            "zones": [],
        }
        for zone in self.zones:
            entry = zone.as_dict()
            entry["shaded"] = zone.az not in self.original_description
            data["zones"].append(entry)
        if labels is not None:
            for entry in data["curves"]:
                anchor = labels.get(entry["label"])
                if anchor is not None:
                    entry["label_anchor"] = list(anchor)
        return data

    def __str__(self) -> str:
        curves = ", ".join(curve.label for curve in self.curves)
        return f"EulerDiagram[{self.actual_description.to_informal()!r}; curves: {curves}]"

    __repr__ = __str__


__all__ = ["EulerDiagram", "Zone"]
