"""Synthetic stroke generation for primitive shapes.

Turns a shape selector, a bounding rectangle and style parameters into a
``Drawing`` that a freehand-ink canvas can append like any hand-drawn
content.  Shapes are emitted as stroked paths, never filled geometry.

Shapes and stroke counts:
    ELLIPSE    1 stroke, 361-sample closed polyline (0°..360° inclusive)
    RECTANGLE  4 two-point strokes, clockwise from top-left
    TRIANGLE   3 two-point strokes, bottom-left → top-center → bottom-right
    STAR      10 two-point strokes on a 3×3 grid

Vertex tables are ratios, so every polygon scales with its bounds:
    - RECTANGLE_RATIOS / TRIANGLE_RATIOS are fractions of (width, height)
    - STAR_RATIOS are grid cells of size max(width, height) / 3, which keeps
      the star's proportions fixed even for non-square bounds

Generation is total over valid ``Rect`` values: zero-width or zero-height
bounds give coincident points, not errors.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence

from inkmark.ink.model import (
    DEFAULT_INK,
    ControlPoint,
    Drawing,
    InkingTool,
    InkStyle,
    Stroke,
    StrokePath,
)
from inkmark.utils.geometry import Point, Rect, Size

logger = logging.getLogger(__name__)

ELLIPSE_SAMPLES = 361
"""Samples at 0°, 1°, ..., 360°; first and last coincide."""

DEFAULT_THICKNESS = 3.0

Ratio = tuple[float, float]

RECTANGLE_RATIOS: tuple[Ratio, ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (1.0, 1.0),
    (0.0, 1.0),
    (0.0, 0.0),
)

TRIANGLE_RATIOS: tuple[Ratio, ...] = (
    (0.0, 1.0),
    (0.5, 0.0),
    (1.0, 1.0),
    (0.0, 1.0),
)

STAR_RATIOS: tuple[Ratio, ...] = (
    (1.5, 0.0),     # top tip
    (2.0, 1.0),
    (3.0, 1.0),     # right tip
    (2.125, 1.75),
    (2.5, 3.0),     # bottom-right tip
    (1.5, 2.25),
    (0.5, 3.0),     # bottom-left tip
    (0.875, 1.75),
    (0.0, 1.0),     # left tip
    (1.0, 1.0),
    (1.5, 0.0),
)

STAR_GRID = 3.0


class ShapeKind(Enum):
    """Closed set of generated shapes.

    Values are the recognizer keys used to request a shape and to label
    the undo action ("Undo adding circle").
    """

    ELLIPSE = "circle"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"
    STAR = "star"

    @classmethod
    def parse(cls, name: str) -> ShapeKind:
        """Look up by key ("circle") or member name ("ellipse"), any case."""
        key = name.strip().lower()
        for kind in cls:
            if key in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(
            f"Unknown shape {name!r}, expected one of "
            f"{', '.join(k.value for k in cls)}"
        )


STROKE_COUNTS = {
    ShapeKind.ELLIPSE: 1,
    ShapeKind.RECTANGLE: 4,
    ShapeKind.TRIANGLE: 3,
    ShapeKind.STAR: 10,
}


def effective_thickness(thickness: float, tool: Optional[InkingTool]) -> float:
    """Requested thickness, raised to the tool width when a tool is active."""
    if tool is None:
        return thickness
    return max(thickness, tool.width)


def ellipse_locations(bounds: Rect) -> list[Point]:
    """Sample the ellipse inscribed in ``bounds`` at 1° steps, 0°..360°.

    Notes
    -----
    A circle of diameter min(width, height) is centered in the bounds and
    its x (or y) extent is stretched by larger/smaller, so the curve
    touches all four sides.  With a zero smaller side the radius is zero
    and every sample sits on the center.
    """
    scale_x = scale_y = 1.0
    if bounds.width > bounds.height:
        diameter = bounds.height
        if bounds.height > 0:
            scale_x = bounds.width / bounds.height
    else:
        diameter = bounds.width
        if bounds.width > 0:
            scale_y = bounds.height / bounds.width

    radius = diameter / 2.0
    cx, cy = bounds.mid_x, bounds.mid_y

    locations = []
    for degrees in range(ELLIPSE_SAMPLES):
        angle = degrees * math.pi / 180
        locations.append(Point(
            cx + radius * math.cos(angle) * scale_x,
            cy + radius * math.sin(angle) * scale_y,
        ))
    return locations


def ratio_locations(bounds: Rect, ratios: Sequence[Ratio]) -> list[Point]:
    """Map unit-box ratios onto ``bounds`` (x by width, y by height)."""
    origin = Point(bounds.x, bounds.y)
    return [origin.translated(rx * bounds.width, ry * bounds.height) for rx, ry in ratios]


def star_locations(bounds: Rect) -> list[Point]:
    """Map STAR_RATIOS onto a square grid anchored at the bounds origin."""
    cell = max(bounds.width, bounds.height) / STAR_GRID
    origin = Point(bounds.x, bounds.y)
    return [origin.translated(rx * cell, ry * cell) for rx, ry in STAR_RATIOS]


def shape_outline(shape: ShapeKind, bounds: Rect) -> list[Point]:
    """Ordered outline vertices; consecutive pairs become segments.

    For the ellipse this is the sampled curve itself.
    """
    if shape is ShapeKind.ELLIPSE:
        return ellipse_locations(bounds)
    if shape is ShapeKind.RECTANGLE:
        return ratio_locations(bounds, RECTANGLE_RATIOS)
    if shape is ShapeKind.TRIANGLE:
        return ratio_locations(bounds, TRIANGLE_RATIOS)
    if shape is ShapeKind.STAR:
        return star_locations(bounds)
    raise ValueError(f"Unsupported shape: {shape!r}")


def shape_drawing(
    shape: ShapeKind,
    bounds: Rect,
    tool: Optional[InkingTool] = None,
    *,
    opacity: float = 1.0,
    thickness: float = DEFAULT_THICKNESS,
    ink: Optional[InkStyle] = None,
    created_at: Optional[datetime] = None,
) -> Drawing:
    """Generate a stroked drawing of ``shape`` inscribed in ``bounds``.

    Parameters
    ----------
    shape : ShapeKind
        Shape to draw.
    bounds : Rect
        Region the shape is inscribed into.
    tool : InkingTool, optional
        Caller's active tool. Its ink wins over ``ink`` and its width is a
        floor on ``thickness``.
    opacity : float
        Opacity of every control point, [0, 1].
    thickness : float
        Requested nib size (square).
    ink : InkStyle, optional
        Ink used when no tool is given; defaults to a red pen.
    created_at : datetime, optional
        Shared creation time of every path; defaults to now (UTC).

    Returns
    -------
    Drawing
        ``STROKE_COUNTS[shape]`` strokes.  The ellipse is one 361-point
        path, every other shape is made of two-point segments.
    """
    style = tool.ink if tool is not None else (ink or DEFAULT_INK)
    nib = effective_thickness(thickness, tool)
    size = Size(nib, nib)
    created_at = created_at or datetime.now(timezone.utc)

    def control(location: Point) -> ControlPoint:
        return ControlPoint(location=location, time_offset=0.0, size=size,
                            opacity=opacity, force=0.0, azimuth=0.0, altitude=0.0)

    outline = shape_outline(shape, bounds)

    if shape is ShapeKind.ELLIPSE:
        paths = [StrokePath(tuple(control(p) for p in outline), created_at)]
    else:
        paths = [
            StrokePath((control(start), control(end)), created_at)
            for start, end in zip(outline, outline[1:])
        ]

    drawing = Drawing(tuple(Stroke(style, path) for path in paths))
    logger.debug(
        "Generated %s in (%.1f, %.1f, %.1f, %.1f): %d strokes, thickness %.2f",
        shape.value, bounds.x, bounds.y, bounds.width, bounds.height,
        len(drawing), nib,
    )
    return drawing
