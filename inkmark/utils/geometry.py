"""Geometric value types shared by every layer.

Provides:
    - Point, Size, Rect: immutable floating-point primitives
    - AffineTransform: 2D linear map plus translation (a, b, c, d, tx, ty)
    - Aspect sizing: aspect_fit_size(), aspect_fill_size(), padded_size()

Used by:
    - Shape generator: bounds a shape is inscribed into, control-point sizes
    - Orientation normalizer: track transforms and natural media sizes
    - Canvas: default shape placement
    - Raster image ops: padded output sizes

All coordinates use a top-left origin with +Y down. Values are plain Python
floats; nothing here allocates arrays.

Transform convention matches the usual row-vector form:
    x' = a*x + c*y + tx
    y' = b*x + d*y + ty
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Point:
    """2D location."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def translated(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class Size:
    """Width/height pair. Also used for control-point thickness."""

    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


Size.ZERO = Size(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle given by origin and non-negative size.

    Parameters
    ----------
    x, y : float
        Origin (top-left corner).
    width, height : float
        Extent, must be >= 0.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rect size must be non-negative, got {self.width} x {self.height}"
            )

    @classmethod
    def from_size(cls, size: Size) -> Rect:
        return cls(0.0, 0.0, size.width, size.height)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2.0

    @property
    def center(self) -> Point:
        return Point(self.mid_x, self.mid_y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners clockwise from top-left: TL, TR, BR, BL."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        )

    def contains(self, point: Point, tol: float = 1e-9) -> bool:
        """Inclusive containment test with absolute tolerance."""
        return (
            self.min_x - tol <= point.x <= self.max_x + tol
            and self.min_y - tol <= point.y <= self.max_y + tol
        )


@dataclass(frozen=True, slots=True)
class AffineTransform:
    """2D affine transform ``(a, b, c, d, tx, ty)``.

    ``(a, b, c, d)`` is the rotation/reflection/scale part, ``(tx, ty)`` the
    translation. See module docstring for the mapping convention.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @property
    def linear(self) -> Tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    @property
    def translation(self) -> Tuple[float, float]:
        return (self.tx, self.ty)

    def with_translation(self, tx: float, ty: float) -> AffineTransform:
        return AffineTransform(self.a, self.b, self.c, self.d, tx, ty)

    def apply(self, point: Point) -> Point:
        return Point(
            self.a * point.x + self.c * point.y + self.tx,
            self.b * point.x + self.d * point.y + self.ty,
        )


def aspect_fit_size(container: Size, content: Size) -> Size:
    """Size of ``content`` once scaled to fit inside ``container``.

    Parameters
    ----------
    container : Size
        Available area (e.g. an image view frame).
    content : Size
        Unscaled content size (e.g. the decoded image).

    Returns
    -------
    Size
        Scaled content size, aspect ratio preserved, never larger than
        ``container`` on either axis. ``Size.ZERO`` for empty content.

    Notes
    -----
    Only the axis with the looser fit is shrunk; the other keeps the
    container extent.
    """
    if content.is_empty:
        return Size.ZERO

    scale_w = container.width / content.width
    scale_h = container.height / content.height

    width, height = container.width, container.height
    if scale_h < scale_w:
        width = scale_h * content.width
    elif scale_w < scale_h:
        height = scale_w * content.height
    return Size(width, height)


def aspect_fill_size(container: Size, content: Size) -> Size:
    """Size of ``content`` once scaled to cover all of ``container``.

    Mirror image of :func:`aspect_fit_size`: the axis with the tighter fit
    grows past the container so no empty area remains. ``Size.ZERO`` for
    empty content.
    """
    if content.is_empty:
        return Size.ZERO

    scale_w = container.width / content.width
    scale_h = container.height / content.height

    width, height = container.width, container.height
    if scale_h > scale_w:
        width = scale_h * content.width
    elif scale_w > scale_h:
        height = scale_w * content.height
    return Size(width, height)


def padded_size(size: Size, x: float, y: float) -> Size:
    """Grow ``size`` by a border of ``x`` left/right and ``y`` top/bottom."""
    return Size(size.width + 2 * x, size.height + 2 * y)
