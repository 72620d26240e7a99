"""Test synthetic shape strokes.

Tests for inkmark.ink.shapes:
    - Stroke counts per shape (1 / 4 / 3 / 10)
    - Ellipse: 361 samples, closed, inside bounds, touches every side
    - Rectangle: corner multiset, clockwise order
    - Triangle: apex at the horizontal midpoint of the bounds
    - Star: scale invariance and origin anchoring
    - Style: thickness floor from the tool, ink precedence, opacity
    - Degenerate bounds produce coincident points, never errors

Run:
    pytest tests/test_shapes.py -v
"""

import math
from collections import Counter

import pytest

from inkmark.ink.model import DEFAULT_INK, InkingTool, InkStyle
from inkmark.ink.shapes import (
    ELLIPSE_SAMPLES,
    STAR_RATIOS,
    STROKE_COUNTS,
    ShapeKind,
    effective_thickness,
    shape_drawing,
)
from inkmark.utils.geometry import Point, Rect


def _points(drawing):
    return [p.location for s in drawing for p in s.path.points]


# ============================================================================
# SHAPE KIND
# ============================================================================

@pytest.mark.parametrize("name,kind", [
    ("circle", ShapeKind.ELLIPSE),
    ("ellipse", ShapeKind.ELLIPSE),
    ("Rectangle", ShapeKind.RECTANGLE),
    (" STAR ", ShapeKind.STAR),
    ("triangle", ShapeKind.TRIANGLE),
])
def test_shape_kind_parse(name, kind):
    assert ShapeKind.parse(name) is kind


def test_shape_kind_parse_unknown():
    with pytest.raises(ValueError, match="Unknown shape 'hexagon'"):
        ShapeKind.parse("hexagon")


@pytest.mark.parametrize("shape", list(ShapeKind))
def test_stroke_counts(shape, wide_bounds, created_at):
    drawing = shape_drawing(shape, wide_bounds, created_at=created_at)
    assert len(drawing) == STROKE_COUNTS[shape]


@pytest.mark.parametrize("shape", [ShapeKind.RECTANGLE, ShapeKind.TRIANGLE, ShapeKind.STAR])
def test_polygon_strokes_are_segments(shape, wide_bounds):
    drawing = shape_drawing(shape, wide_bounds)
    assert all(s.path.is_segment for s in drawing)


@pytest.mark.parametrize("shape", [ShapeKind.RECTANGLE, ShapeKind.TRIANGLE, ShapeKind.STAR])
def test_polygon_outline_is_connected_and_closed(shape, wide_bounds):
    strokes = shape_drawing(shape, wide_bounds).strokes
    for current, following in zip(strokes, strokes[1:]):
        assert current.path.points[-1].location == following.path.points[0].location
    assert strokes[-1].path.points[-1].location == strokes[0].path.points[0].location


# ============================================================================
# ELLIPSE
# ============================================================================

def test_ellipse_sample_count(wide_bounds):
    (stroke,) = shape_drawing(ShapeKind.ELLIPSE, wide_bounds).strokes
    assert len(stroke.path) == ELLIPSE_SAMPLES == 361


@pytest.mark.parametrize("bounds", [
    Rect(0.0, 0.0, 90.0, 90.0),
    Rect(12.0, 30.0, 200.0, 80.0),
    Rect(-5.0, 7.5, 33.0, 141.0),
])
def test_ellipse_closed_and_inside_bounds(bounds):
    pts = _points(shape_drawing(ShapeKind.ELLIPSE, bounds))
    assert pts[0].x == pytest.approx(pts[-1].x, abs=1e-9)
    assert pts[0].y == pytest.approx(pts[-1].y, abs=1e-9)
    assert all(bounds.contains(p, tol=1e-9) for p in pts)


def test_ellipse_touches_all_sides(wide_bounds):
    pts = _points(shape_drawing(ShapeKind.ELLIPSE, wide_bounds))
    assert min(p.x for p in pts) == pytest.approx(wide_bounds.min_x)
    assert max(p.x for p in pts) == pytest.approx(wide_bounds.max_x)
    assert min(p.y for p in pts) == pytest.approx(wide_bounds.min_y)
    assert max(p.y for p in pts) == pytest.approx(wide_bounds.max_y)


def test_ellipse_starts_at_zero_degrees(wide_bounds):
    first = _points(shape_drawing(ShapeKind.ELLIPSE, wide_bounds))[0]
    assert first == Point(wide_bounds.max_x, wide_bounds.mid_y)


def test_ellipse_ninety_degree_sample_is_bottom(square_bounds):
    # +Y is down, so 90° lands on the bottom edge
    pts = _points(shape_drawing(ShapeKind.ELLIPSE, square_bounds))
    assert pts[90].x == pytest.approx(45.0)
    assert pts[90].y == pytest.approx(90.0)


# ============================================================================
# RECTANGLE / TRIANGLE
# ============================================================================

def test_rectangle_end_to_end(square_bounds):
    drawing = shape_drawing(ShapeKind.RECTANGLE, square_bounds)
    assert len(drawing) == 4
    assert all(len(s.path) == 2 for s in drawing)

    corners = Counter(p.as_tuple() for p in _points(drawing))
    assert corners == Counter({(0.0, 0.0): 2, (90.0, 0.0): 2, (90.0, 90.0): 2, (0.0, 90.0): 2})


def test_rectangle_clockwise_from_top_left(wide_bounds):
    starts = [s.path.points[0].location for s in shape_drawing(ShapeKind.RECTANGLE, wide_bounds)]
    assert tuple(starts) == wide_bounds.corners()


def test_triangle_vertices(wide_bounds):
    segs = [s.path.locations() for s in shape_drawing(ShapeKind.TRIANGLE, wide_bounds)]
    bottom_left = Point(wide_bounds.min_x, wide_bounds.max_y)
    apex = Point(wide_bounds.mid_x, wide_bounds.min_y)
    bottom_right = Point(wide_bounds.max_x, wide_bounds.max_y)
    assert segs == [
        (bottom_left, apex),
        (apex, bottom_right),
        (bottom_right, bottom_left),
    ]


def test_triangle_apex_uses_midpoint_for_offset_bounds():
    segs = shape_drawing(ShapeKind.TRIANGLE, Rect(100.0, 0.0, 50.0, 50.0)).strokes
    assert segs[0].path.points[1].location == Point(125.0, 0.0)


# ============================================================================
# STAR
# ============================================================================

def test_star_vertices_follow_ratio_table():
    bounds = Rect(10.0, 20.0, 30.0, 30.0)
    starts = [s.path.points[0].location for s in shape_drawing(ShapeKind.STAR, bounds)]
    expected = [(10.0 + rx * 10.0, 20.0 + ry * 10.0) for rx, ry in STAR_RATIOS[:-1]]
    assert len(starts) == len(expected) == 10
    for got, (ex, ey) in zip(starts, expected):
        assert got.x == pytest.approx(ex)
        assert got.y == pytest.approx(ey)


def test_star_scale_invariant():
    small = _points(shape_drawing(ShapeKind.STAR, Rect(5.0, 7.0, 40.0, 30.0)))
    large = _points(shape_drawing(ShapeKind.STAR, Rect(-3.0, 11.0, 80.0, 60.0)))
    for s, l in zip(small, large):
        assert (l.x - (-3.0)) == pytest.approx(2.0 * (s.x - 5.0))
        assert (l.y - 11.0) == pytest.approx(2.0 * (s.y - 7.0))


def test_star_grid_uses_longer_side():
    pts = _points(shape_drawing(ShapeKind.STAR, Rect(0.0, 0.0, 60.0, 30.0)))
    assert max(p.x for p in pts) == pytest.approx(60.0)
    assert max(p.y for p in pts) == pytest.approx(60.0)


# ============================================================================
# STYLE
# ============================================================================

def test_control_point_defaults(square_bounds, created_at):
    drawing = shape_drawing(ShapeKind.RECTANGLE, square_bounds, thickness=5.0,
                            opacity=0.4, created_at=created_at)
    for stroke in drawing:
        assert stroke.ink == DEFAULT_INK
        assert stroke.path.created_at == created_at
        for p in stroke.path.points:
            assert (p.size.width, p.size.height) == (5.0, 5.0)
            assert p.opacity == 0.4
            assert (p.time_offset, p.force, p.azimuth, p.altitude) == (0.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("requested,width,expected", [
    (3.0, 8.0, 8.0),
    (10.0, 8.0, 10.0),
    (3.0, 0.0, 3.0),
])
def test_tool_width_is_a_floor(requested, width, expected):
    tool = InkingTool(width=width)
    assert effective_thickness(requested, tool) == expected
    drawing = shape_drawing(ShapeKind.TRIANGLE, Rect(0.0, 0.0, 10.0, 10.0), tool, thickness=requested)
    assert drawing.strokes[0].path.points[0].size.width == expected


def test_no_tool_keeps_requested_thickness():
    assert effective_thickness(1.5, None) == 1.5


def test_tool_ink_wins_over_ink_argument(square_bounds):
    marker = InkStyle(tool="marker", color=(0, 0, 255, 255))
    pencil = InkStyle(tool="pencil", color=(0, 0, 0, 255))
    drawing = shape_drawing(ShapeKind.STAR, square_bounds, InkingTool(ink=marker), ink=pencil)
    assert {s.ink for s in drawing} == {marker}

    drawing = shape_drawing(ShapeKind.STAR, square_bounds, ink=pencil)
    assert {s.ink for s in drawing} == {pencil}


def test_paths_share_creation_time(wide_bounds):
    drawing = shape_drawing(ShapeKind.STAR, wide_bounds)
    assert len({s.path.created_at for s in drawing}) == 1


# ============================================================================
# DEGENERATE BOUNDS
# ============================================================================

@pytest.mark.parametrize("shape", list(ShapeKind))
def test_zero_area_bounds_coincident_points(shape):
    bounds = Rect(4.0, 6.0, 0.0, 0.0)
    pts = _points(shape_drawing(shape, bounds))
    assert len(pts) > 0
    assert all(p == Point(4.0, 6.0) for p in pts)


@pytest.mark.parametrize("bounds", [Rect(0.0, 0.0, 0.0, 50.0), Rect(0.0, 0.0, 50.0, 0.0)])
def test_zero_width_or_height_ellipse_collapses_to_center(bounds):
    pts = _points(shape_drawing(ShapeKind.ELLIPSE, bounds))
    assert len(pts) == ELLIPSE_SAMPLES
    assert all(p == bounds.center for p in pts)
    assert all(not math.isnan(p.x) and not math.isnan(p.y) for p in pts)
