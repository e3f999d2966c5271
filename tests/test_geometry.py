import math

import pytest
from shapely.geometry import LineString, Point, Polygon, box

from eulerlayout.errors import GeometricInfeasibility
from eulerlayout.geometry.polygons import (
    bounding_box,
    circle_polygon,
    difference,
    exterior_vertices,
    intersection,
    scale_point,
    signed_distance,
    union,
    vertices,
)
from eulerlayout.geometry.polylabel import visual_center
from eulerlayout.geometry.routing import route_polyline
from eulerlayout.geometry.smoothing import closed_cubic_segments, sample_cubic


def test_circle_polygon_approximates_circle():
    circle = circle_polygon(10.0, 20.0, 5.0)
    assert circle.area == pytest.approx(math.pi * 25.0, rel=1e-2)
    assert circle.bounds == pytest.approx((5.0, 15.0, 15.0, 25.0))
    assert circle_polygon(0.0, 0.0, 0.0).is_empty


def test_region_algebra():
    left = box(0, 0, 2, 2)
    right = box(1, 0, 3, 2)
    assert intersection([left, right]).area == pytest.approx(2.0)
    assert union([left, right]).area == pytest.approx(6.0)
    assert difference(left, [right]).area == pytest.approx(2.0)
    assert intersection([]).is_empty
    assert union([]).is_empty


def test_touching_regions_intersect_to_empty_area():
    assert intersection([box(0, 0, 1, 1), box(1, 0, 2, 1)]).is_empty


def test_bounding_box_skips_empty_geometries():
    assert bounding_box([Polygon(), box(1, 2, 3, 4), box(-1, 0, 0, 1)]) == (-1.0, 0.0, 3.0, 4.0)
    assert bounding_box([Polygon()]) is None


def test_signed_distance_is_negative_inside():
    square = box(0, 0, 10, 10)
    assert signed_distance(square, (5.0, 5.0)) == pytest.approx(-5.0)
    assert signed_distance(square, (12.0, 5.0)) == pytest.approx(2.0)


def test_signed_distance_measures_holes():
    ring = box(0, 0, 10, 10).difference(box(4, 4, 6, 6))
    assert signed_distance(ring, (5.0, 5.0)) == pytest.approx(1.0)
    assert signed_distance(ring, (2.0, 5.0)) == pytest.approx(-2.0)


def test_vertices_drop_closing_duplicates():
    square = box(0, 0, 1, 1)
    assert len(vertices(square)) == 4
    assert len(exterior_vertices(square)) == 4


def test_scale_point_about_pivot():
    assert scale_point((2.0, 2.0), 0.5, (0.0, 0.0)) == (1.0, 1.0)
    assert scale_point((2.0, 2.0), 3.0, (2.0, 2.0)) == (2.0, 2.0)


def test_visual_center_of_square_is_its_middle():
    x, y = visual_center(box(0, 0, 100, 100))
    assert x == pytest.approx(50.0, abs=1.0)
    assert y == pytest.approx(50.0, abs=1.0)


def test_visual_center_of_l_shape_lies_inside():
    l_shape = box(0, 0, 100, 30).union(box(0, 0, 30, 100))
    center = visual_center(l_shape)
    assert l_shape.contains(Point(center))
    assert signed_distance(l_shape, center) < -10.0


def test_visual_center_avoids_hole():
    ring = box(0, 0, 100, 100).difference(box(30, 30, 70, 70))
    center = visual_center(ring)
    assert ring.contains(Point(center))


def test_visual_center_of_empty_region_raises():
    with pytest.raises(GeometricInfeasibility):
        visual_center(Polygon())


def test_route_is_direct_when_visible():
    assert route_polyline(box(0, 0, 10, 10), (1.0, 1.0), (9.0, 9.0)) == [(1.0, 1.0), (9.0, 9.0)]


def test_route_goes_around_obstacle():
    region = box(0, 0, 300, 300).difference(box(100, 0, 200, 200))
    start, goal = (50.0, 50.0), (250.0, 50.0)

    path = route_polyline(region, start, goal)

    assert path is not None
    assert path[0] == start
    assert path[-1] == goal
    assert region.buffer(1e-6).contains(LineString(path))
    assert max(y for _, y in path) > 200.0


def test_route_between_disconnected_parts_fails():
    region = box(0, 0, 10, 10).union(box(20, 0, 30, 10))
    assert route_polyline(region, (5.0, 5.0), (25.0, 5.0)) is None
    assert route_polyline(Polygon(), (0.0, 0.0), (1.0, 1.0)) is None


def test_closed_cubic_segments_interpolate_points():
    square = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    start, segments = closed_cubic_segments(square)

    assert start == (0.0, 0.0)
    assert len(segments) == 4
    assert [end for _, _, end in segments] == square[1:] + square[:1]


def test_zero_tension_gives_straight_edges():
    triangle = [(0.0, 0.0), (4.0, 0.0), (0.0, 3.0), (0.0, 0.0)]
    start, segments = closed_cubic_segments(triangle, tension=0.0)
    assert len(segments) == 3
    c1, c2, end = segments[0]
    assert c1 == start
    assert c2 == end == (4.0, 0.0)


def test_smoothing_needs_three_distinct_points():
    with pytest.raises(ValueError):
        closed_cubic_segments([(0.0, 0.0), (1.0, 1.0), (1.0, 1.0)])


def test_sample_cubic_ends_at_endpoint():
    points = sample_cubic((0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0), 8)
    assert len(points) == 8
    assert points[-1] == pytest.approx((4.0, 0.0))
    assert points[3][1] > 0.0
