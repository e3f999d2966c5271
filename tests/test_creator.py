import pytest

from eulerlayout.abstract import OUTSIDE, az, desc
from eulerlayout.concrete import EulerDiagram
from eulerlayout.creator import (
    CreatorOptions,
    DiagramFail,
    DiagramOK,
    EulerDiagramCreator,
    create_diagram,
    draw_euler_diagram,
    draw_into_zone,
    get_creator_options,
    set_creator_options,
)
from eulerlayout.curves import CircleCurve
from eulerlayout.decomposition.labels import RecompositionStep
from eulerlayout.errors import GeometricInfeasibility, InvariantViolation

VENN3 = "a b c ab ac bc abc"


def _circle_tuple(curve):
    assert isinstance(curve, CircleCurve)
    return (curve.label, curve.center_x, curve.center_y, curve.radius)


def test_first_curves_use_fixed_positions():
    diagram = draw_euler_diagram(VENN3)

    assert [_circle_tuple(curve) for curve in diagram.curves] == [
        ("a", 300.0, 300.0, 300.0),
        ("b", 600.0, 300.0, 300.0),
        ("c", 450.0, 600.0, 300.0),
    ]
    assert diagram.shaded_zones == ()
    assert diagram.actual_description == desc(VENN3)


def test_two_overlapping_curves():
    diagram = draw_euler_diagram("a b ab")
    assert [_circle_tuple(curve) for curve in diagram.curves] == [
        ("a", 300.0, 300.0, 300.0),
        ("b", 600.0, 300.0, 300.0),
    ]
    assert diagram.get_zone(az("ab")).polygon.area > 0

    a, b = diagram.curves
    crossings = a.polygon.exterior.intersection(b.polygon.exterior)
    assert crossings.geom_type == "MultiPoint"
    assert len(crossings.geoms) == 2
    assert all(point.x == pytest.approx(450.0) for point in crossings.geoms)


def test_base_radius_option_scales_layout():
    diagram = draw_euler_diagram("a b ab", CreatorOptions(base_radius=100.0))
    assert [_circle_tuple(curve) for curve in diagram.curves] == [
        ("a", 100.0, 100.0, 100.0),
        ("b", 200.0, 100.0, 100.0),
    ]


def test_third_curve_pierces_existing_curve():
    diagram = draw_euler_diagram("a ab abc")

    b = diagram.get_curve("b")
    assert isinstance(b, CircleCurve)
    for zone in ("a", "ab", "abc"):
        assert diagram.get_zone(az(zone)).polygon.area > 0
    assert {zone.az for zone in diagram.shaded_zones} == {az("c"), az("ac")}


def test_disjoint_components_are_placed_side_by_side():
    diagram = draw_euler_diagram("a b")

    a = diagram.get_curve("a")
    b = diagram.get_curve("b")
    assert _circle_tuple(a) == ("a", 300.0, 300.0, 300.0)
    assert b.center_x == pytest.approx(300.0 + 600.0 + 4000.0)
    assert b.center_y == pytest.approx(300.0)
    assert not a.polygon.intersects(b.polygon)
    assert diagram.actual_description == desc("a b")


def test_nested_component_is_scaled_into_its_zone():
    diagram = draw_euler_diagram("a abc")

    outer = diagram.get_curve("a").polygon
    assert outer.contains(diagram.get_curve("b").polygon)
    assert outer.contains(diagram.get_curve("c").polygon)
    assert diagram.get_zone(az("abc")).polygon.area > 0
    assert {zone.az for zone in diagram.shaded_zones} == {az("ab"), az("ac")}


def test_construction_is_deterministic():
    first = draw_euler_diagram(VENN3 + " d ad")
    second = draw_euler_diagram(VENN3 + " d ad")
    assert [curve.as_dict() for curve in first.curves] == [curve.as_dict() for curve in second.curves]


def test_nested_step_in_atomic_diagram_is_an_invariant_violation():
    creator = EulerDiagramCreator()
    diagram = creator.draw_atomic_diagram(desc("a"))
    step = RecompositionStep(desc("a"), desc("a ab"), "b", frozenset({az("a")}))

    with pytest.raises(InvariantViolation):
        creator.draw_curve(diagram, step)


def test_draw_into_outside_translates_beside():
    options = CreatorOptions()
    left = EulerDiagram(desc("a"), desc("a"), [CircleCurve("a", 0.0, 0.0, 10.0)])
    right = EulerDiagram(desc("b"), desc("b"), [CircleCurve("b", 0.0, 0.0, 10.0)])

    merged = draw_into_zone(left, right, {}, options)

    assert merged.get_curve("b").center == pytest.approx((10.0 + 4000.0 + 10.0, 0.0))
    assert merged.original_description == desc("a b")


def test_draw_into_zone_counts_embeddings():
    options = CreatorOptions()
    host = EulerDiagram(desc("a"), desc("a"), [CircleCurve("a", 0.0, 0.0, 100.0)])
    guest = EulerDiagram(desc("b", az("a")), desc("b", az("a")), [CircleCurve("b", 500.0, 500.0, 50.0)])
    embedded = {}

    merged = draw_into_zone(host, guest, embedded, options)

    assert embedded == {az("a"): 1}
    assert merged.original_description == desc("a ab")
    assert host.get_curve("a").polygon.contains(merged.get_curve("b").polygon)


def test_create_diagram_wraps_success():
    result = create_diagram("a b ab")
    assert isinstance(result, DiagramOK)
    assert len(result.diagram.curves) == 2


def test_create_diagram_reports_malformed_input():
    result = create_diagram("a, b")
    assert isinstance(result, DiagramFail)
    assert result.kind == "malformed-input"
    assert "[line 1, col 2]" in result.message


@pytest.mark.parametrize(
    "error, kind",
    [
        (InvariantViolation("broken"), "invariant-violation"),
        (GeometricInfeasibility("no room"), "infeasible"),
    ],
)
def test_create_diagram_reports_construction_failures(monkeypatch, error, kind):
    def _fail(self, description):
        raise error

    monkeypatch.setattr(EulerDiagramCreator, "draw_euler_diagram", _fail)

    result = create_diagram("a b ab")

    assert isinstance(result, DiagramFail)
    assert result.kind == kind
    assert result.error is error


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_radius": 0.0},
        {"radius_reduction": 0.5},
        {"ring_sides": 2},
        {"max_workers": 0},
    ],
)
def test_creator_options_validate(kwargs):
    with pytest.raises(ValueError):
        CreatorOptions(**kwargs)


def test_creator_options_defaults_are_copied():
    options = get_creator_options()
    options.base_radius = 1.0
    assert get_creator_options().base_radius == 300.0

    original = get_creator_options()
    try:
        set_creator_options(CreatorOptions(base_radius=50.0))
        assert EulerDiagramCreator().options.base_radius == 50.0
    finally:
        set_creator_options(original)
    assert get_creator_options() == CreatorOptions()


def test_thread_pool_drawing_matches_sequential():
    sequential = draw_euler_diagram("a b c")
    pooled = draw_euler_diagram("a b c", CreatorOptions(max_workers=3))
    assert {curve.label for curve in pooled.curves} == {"a", "b", "c"}
    assert pooled.actual_description == sequential.actual_description
    assert OUTSIDE in pooled.actual_description
