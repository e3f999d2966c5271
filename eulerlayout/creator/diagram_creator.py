"""Incremental construction of Euler diagrams.

Atomic descriptions are drawn one curve at a time by replaying their label
decomposition.  A curve is a circle whenever the zones it has to split allow a
single or double piercing; otherwise it follows a cycle of the modified Euler
dual.  Non-atomic descriptions are drawn component by component and each
component is scaled into the zone it belongs to.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Set

from ..abstract import AbstractZone, Description, OUTSIDE
from ..concrete import EulerDiagram
from ..curves import CircleCurve, Curve, PathCurve
from ..decomposition.components import decompose_components
from ..decomposition.labels import DecompositionStrategy, ICurvesStrategy, RecompositionStep, decompose
from ..dual.med import MED, MEDCycle
from ..errors import GeometricInfeasibility, InvariantViolation
from ..geometry.piercing import PiercingSolution, double_piercing, single_piercing
from ..logging_utils import apply_debug_logging
from .config import get_creator_options
from .model import CreatorOptions

logger = logging.getLogger(__name__)


class EulerDiagramCreator:
    """Draws one description; create a fresh instance per description."""

    def __init__(
        self,
        options: Optional[CreatorOptions] = None,
        strategy: Optional[DecompositionStrategy] = None,
    ) -> None:
        self.options = options if options is not None else get_creator_options()
        self.strategy = strategy or ICurvesStrategy(self.options.aux_cycle_length_cap)
        self.abstract_zones: Set[AbstractZone] = set()

    # ------------------------------------------------------------------
    # entry points
    # ------------------------------------------------------------------

    def draw_euler_diagram(self, description: Description) -> EulerDiagram:
        components = decompose_components(description, self.options.max_workers)
        logger.info("Description %r has %d component(s)", description, len(components))
        if len(components) == 1:
            return self.draw_atomic_diagram(description)

        diagrams = self._draw_components(components)
        result = diagrams[0]
        embedded: Dict[AbstractZone, int] = {}
        for diagram in diagrams[1:]:
            result = draw_into_zone(result, diagram, embedded, self.options)
        return result

    def draw_atomic_diagram(self, description: Description) -> EulerDiagram:
        steps = list(reversed(decompose(description, self.strategy)))
        diagram = EulerDiagram(description, Description([OUTSIDE], description.parent), [])
        for step in steps:
            curve = self.draw_curve(diagram, step)
            actual = Description(self.abstract_zones | {OUTSIDE}, description.parent)
            diagram = EulerDiagram(description, actual, diagram.curves + (curve,))
            logger.debug("Added %s", curve)
        return diagram

    def _draw_components(self, components: List[Description]) -> List[EulerDiagram]:
        def _draw(component: Description) -> EulerDiagram:
            return EulerDiagramCreator(self.options, self.strategy).draw_atomic_diagram(component)

        workers = self.options.max_workers
        if workers and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                return list(executor.map(_draw, components))
        return [_draw(component) for component in components]

    # ------------------------------------------------------------------
    # curves
    # ------------------------------------------------------------------

    def draw_curve(self, diagram: EulerDiagram, step: RecompositionStep) -> Curve:
        label = step.new_label
        radius = self.options.base_radius

        if not diagram.curves:
            self._record(step.split_zones, label)
            return CircleCurve(label, radius, radius, radius)

        if step.is_nested():
            raise InvariantViolation(
                f"curve {label!r} would be nested in a single zone of an atomic diagram"
            )

        circle: Optional[CircleCurve] = None
        if step.is_maybe_single_piercing():
            circle = self._try_single_piercing(diagram, step)
        elif step.is_maybe_double_piercing():
            circle = self._try_double_piercing(diagram, step)
        if circle is not None:
            self._record(step.split_zones, label)
            return circle

        cycle = MED(diagram, self.options.ring_sides, self.options.ring_clearance).compute_cycle(step.split_zones)
        if cycle is None:
            raise GeometricInfeasibility(f"no MED cycle for curve {label!r} in {diagram}")
        curve = self._curve_from_cycle(diagram, label, cycle)
        self._record(cycle.zones(), label)
        return curve

    def _record(self, zones, label: str) -> None:
        self.abstract_zones.update(zone + label for zone in zones)

    def _try_single_piercing(self, diagram: EulerDiagram, step: RecompositionStep) -> Optional[CircleCurve]:
        radius = self.options.base_radius
        if len(diagram.curves) == 1:
            return CircleCurve(step.new_label, 2 * radius, radius, radius)
        return self._piercing_circle(diagram, step.new_label, step.split_zones, single_piercing)

    def _try_double_piercing(self, diagram: EulerDiagram, step: RecompositionStep) -> Optional[CircleCurve]:
        radius = self.options.base_radius
        if len(diagram.curves) == 2:
            return CircleCurve(step.new_label, 1.5 * radius, 2 * radius, radius)
        return self._piercing_circle(diagram, step.new_label, step.split_zones, double_piercing)

    def _piercing_circle(self, diagram: EulerDiagram, label: str, zones, solver) -> Optional[CircleCurve]:
        split = set(zones)
        regions = [diagram.get_zone(zone).polygon for zone in sorted(split)]
        obstacles = [zone.polygon for zone in diagram.all_zones if zone.az not in split]
        outlines = [curve.polygon for curve in diagram.curves]
        solution: Optional[PiercingSolution] = solver(regions, obstacles, outlines)
        if solution is None:
            return None
        cx, cy = solution.center
        return CircleCurve(label, cx, cy, solution.radius / self.options.radius_reduction)

    def _curve_from_cycle(self, diagram: EulerDiagram, label: str, cycle: MEDCycle) -> Curve:
        zones = cycle.zones()
        if len(zones) == 2:
            circle = self._piercing_circle(diagram, label, zones, single_piercing)
            if circle is None:
                raise GeometricInfeasibility(f"cycle for {label!r} is not a single piercing")
            return circle
        if len(zones) == 4:
            circle = self._piercing_circle(diagram, label, zones, double_piercing)
            if circle is None:
                raise GeometricInfeasibility(f"cycle for {label!r} is not a double piercing")
            return circle
        return PathCurve.smooth(label, cycle.polygon)


def draw_into_zone(
    accumulated: EulerDiagram,
    incoming: EulerDiagram,
    embedded: Dict[AbstractZone, int],
    options: CreatorOptions,
) -> EulerDiagram:
    """Place ``incoming`` inside the zone of ``accumulated`` named by its parent."""

    parent = incoming.original_description.parent
    original = accumulated.original_description + incoming.original_description
    actual = accumulated.actual_description + incoming.actual_description

    acc_box = accumulated.bbox()
    inc_box = incoming.bbox()
    if acc_box is None or inc_box is None:
        return EulerDiagram(original, actual, accumulated.curves + incoming.curves)

    if parent.is_outside():
        dx = acc_box[2] + options.embed_margin - inc_box[0]
        dy = (acc_box[1] + acc_box[3]) / 2.0 - (inc_box[1] + inc_box[3]) / 2.0
        moved = incoming.translate(dx, dy)
        logger.debug("Embedded %r beside the diagram (dx=%.1f, dy=%.1f)", incoming.original_description, dx, dy)
    else:
        zone = accumulated.get_zone(parent)
        center = zone.visual_center
        clearance = zone.shortest_distance_to_other_zone(center)
        diagonal = math.hypot(inc_box[2] - inc_box[0], inc_box[3] - inc_box[1])
        score = embedded.get(parent, 0) + 1
        embedded[parent] = score
        ratio = clearance / diagonal / max(math.sqrt(score) * 0.5, 0.75)
        pivot = incoming.center()
        moved = incoming.scale(ratio, pivot).translate(center[0] - pivot[0], center[1] - pivot[1])
        logger.debug(
            "Embedded %r into zone %r (scale %.4f, clearance %.1f)",
            incoming.original_description,
            parent.to_informal(),
            ratio,
            clearance,
        )

    return EulerDiagram(original, actual, accumulated.curves + moved.curves)


apply_debug_logging(globals(), logger=logger, skip={"_record", "_draw_components"})
