"""
Ink model and synthetic shape strokes.

Defines the immutable drawing vocabulary (control points, paths, strokes,
drawings) and the generator that turns a shape request into a drawing.
"""

from inkmark.ink.model import (
    DEFAULT_INK,
    ControlPoint,
    Drawing,
    InkingTool,
    InkStyle,
    Stroke,
    StrokePath,
)
from inkmark.ink.shapes import STROKE_COUNTS, ShapeKind, shape_drawing

__all__ = [
    "DEFAULT_INK",
    "ControlPoint",
    "Drawing",
    "InkingTool",
    "InkStyle",
    "STROKE_COUNTS",
    "ShapeKind",
    "Stroke",
    "StrokePath",
    "shape_drawing",
]
