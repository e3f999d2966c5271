import math

import pytest
from shapely.geometry import box

from eulerlayout.abstract import OUTSIDE, az, desc
from eulerlayout.concrete import EulerDiagram
from eulerlayout.curves import CircleCurve
from eulerlayout.geometry.piercing import double_piercing, single_piercing


def _two_circles() -> EulerDiagram:
    description = desc("a b ab")
    curves = [CircleCurve("a", 300.0, 300.0, 300.0), CircleCurve("b", 600.0, 300.0, 300.0)]
    return EulerDiagram(description, description, curves)


def _polygons(diagram, names):
    return [diagram.get_zone(az(name) if name else OUTSIDE).polygon for name in names]


def test_single_piercing_stays_clear_of_other_zones():
    diagram = _two_circles()
    regions = _polygons(diagram, ["a", ""])
    obstacles = _polygons(diagram, ["ab", "b"])
    outlines = [curve.polygon for curve in diagram.curves]

    solution = single_piercing(regions, obstacles, outlines)

    assert solution is not None
    cx, cy = solution.center
    assert math.hypot(cx - 300.0, cy - 300.0) == pytest.approx(300.0, abs=1.0)
    assert cx < 10.0
    assert solution.radius == pytest.approx(300.0, abs=2.0)


def test_single_piercing_without_obstacles_has_finite_radius():
    diagram = _two_circles()
    regions = _polygons(diagram, ["a", ""])
    solution = single_piercing(regions, [], [diagram.get_curve("a").polygon])
    assert solution is not None
    assert math.isfinite(solution.radius)
    assert solution.radius > 0.0


def test_single_piercing_infeasible_when_regions_never_meet():
    diagram = _two_circles()
    regions = _polygons(diagram, ["a", "b"])
    outlines = [curve.polygon for curve in diagram.curves]
    assert single_piercing(regions, _polygons(diagram, ["ab", ""]), outlines) is None


def test_double_piercing_sits_on_crossing():
    diagram = _two_circles()
    regions = _polygons(diagram, ["a", "ab", "b", ""])
    outlines = [curve.polygon for curve in diagram.curves]

    solution = double_piercing(regions, [], outlines)

    assert solution is not None
    cx, cy = solution.center
    assert cx == pytest.approx(450.0, abs=1.0)
    assert abs(cy - 300.0) == pytest.approx(math.sqrt(300.0 ** 2 - 150.0 ** 2), abs=1.0)
    assert solution.radius > 0.0


def test_double_piercing_needs_crossing_curves():
    far_apart = [CircleCurve("a", 0.0, 0.0, 10.0), CircleCurve("b", 100.0, 0.0, 10.0)]
    regions = [box(0, 0, 1, 1)] * 4
    assert double_piercing(regions, [], [curve.polygon for curve in far_apart]) is None


def test_piercing_checks_region_count():
    with pytest.raises(ValueError):
        single_piercing([box(0, 0, 1, 1)], [], [])
    with pytest.raises(ValueError):
        double_piercing([box(0, 0, 1, 1)] * 2, [], [])
