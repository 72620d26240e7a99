"""Ink data model: the vocabulary between shape geometry and the canvas.

Every value here is an immutable, slotted dataclass.  A *Drawing* is what
the shape generator produces and what the canvas appends; it carries no
rendering logic.

Hierarchy
---------
``Drawing`` → ``Stroke`` (ink + path) → ``StrokePath`` → ``ControlPoint``

Order is significant at every level: control points define the direction
of a path, strokes define paint layering within a drawing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional

from inkmark.utils.geometry import Point, Rect, Size
from inkmark.utils.validators import TOOL_KINDS

Color = tuple[int, int, int, int]
"""RGBA, 8 bits per channel."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ControlPoint:
    """One sample along a stroke path.

    Parameters
    ----------
    location : Point
        Position in canvas points.
    time_offset : float
        Seconds since the start of the stroke.
    size : Size
        Nib size at this sample (thickness).
    opacity : float
        In [0, 1].
    force : float
        Pen pressure; 0 for synthetic strokes.
    azimuth, altitude : float
        Pen attitude in radians; 0 for synthetic strokes.
    """

    location: Point
    time_offset: float = 0.0
    size: Size = Size(3.0, 3.0)
    opacity: float = 1.0
    force: float = 0.0
    azimuth: float = 0.0
    altitude: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be in [0, 1], got {self.opacity}")
        if self.time_offset < 0:
            raise ValueError(f"time_offset must be >= 0, got {self.time_offset}")
        if self.force < 0:
            raise ValueError(f"force must be >= 0, got {self.force}")
        if self.size.width < 0 or self.size.height < 0:
            raise ValueError(f"size must be non-negative, got {self.size.as_tuple()}")


@dataclass(frozen=True, slots=True)
class StrokePath:
    """Ordered control points plus a creation timestamp.

    Two points make a straight segment; many points approximate a curve.
    """

    points: tuple[ControlPoint, ...]
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if len(self.points) < 1:
            raise ValueError("StrokePath requires >= 1 control point, got 0")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return iter(self.points)

    @property
    def is_segment(self) -> bool:
        return len(self.points) == 2

    def locations(self) -> tuple[Point, ...]:
        return tuple(p.location for p in self.points)


@dataclass(frozen=True, slots=True)
class InkStyle:
    """Rendering appearance, independent of geometry.

    Parameters
    ----------
    tool : str
        One of ``TOOL_KINDS`` (``"pen"``, ``"marker"``, ...).
    color : tuple[int, int, int, int]
        RGBA in [0, 255].
    """

    tool: str = "pen"
    color: Color = (255, 59, 48, 255)

    def __post_init__(self) -> None:
        if self.tool not in TOOL_KINDS:
            raise ValueError(
                f"tool must be one of {TOOL_KINDS}, got {self.tool!r}"
            )
        if len(self.color) != 4 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(
                f"color must be 4 channels in [0, 255], got {self.color!r}"
            )


DEFAULT_INK = InkStyle()
"""Pen in system red, used when the caller supplies no ink."""


@dataclass(frozen=True, slots=True)
class InkingTool:
    """The caller's active tool: an ink and a nib width."""

    ink: InkStyle = DEFAULT_INK
    width: float = 3.0

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"tool width must be >= 0, got {self.width}")


@dataclass(frozen=True, slots=True)
class Stroke:
    """One renderable unit."""

    ink: InkStyle
    path: StrokePath


@dataclass(frozen=True, slots=True)
class Drawing:
    """Ordered collection of strokes treated as one paintable unit."""

    strokes: tuple[Stroke, ...] = ()

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self.strokes)

    def append(self, other: Drawing) -> Drawing:
        """New drawing with ``other``'s strokes painted after this one's."""
        return Drawing(self.strokes + other.strokes)

    def bounds(self) -> Optional[Rect]:
        """Axis-aligned box around every control point, None when empty."""
        xs = [p.location.x for s in self.strokes for p in s.path.points]
        ys = [p.location.y for s in self.strokes for p in s.path.points]
        if not xs:
            return None
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
