"""Orientation correction for recorded media tracks.

A capture device stores rotation as a track transform whose linear part
``(a, b, c, d)`` is one of eight rotations/reflections, but the stored
translation is not reliable.  ``normalize_transform`` replaces the
translation so the rotated content lands with its origin at (0, 0), which
lets overlays drawn in the content's natural coordinates be composited
without per-orientation branching downstream.

Canonical table (W, H = natural width, height):

    ==================  ==============  ========
    orientation         (a, b, c, d)    (tx, ty)
    ==================  ==============  ========
    UP                  ( 1,  0,  0,  1)  (0, 0)
    UP_MIRRORED_V       ( 1,  0,  0, -1)  (0, H)
    UP_MIRRORED_H       (-1,  0,  0,  1)  (W, 0)
    DOWN                (-1,  0,  0, -1)  (W, H)
    LEFT                ( 0, -1,  1,  0)  (0, W)
    RIGHT               ( 0,  1, -1,  0)  (H, 0)
    RIGHT_MIRRORED      ( 0,  1,  1,  0)  (0, 0)
    LEFT_MIRRORED       ( 0, -1, -1,  0)  (H, W)
    ==================  ==============  ========

Matching is exact.  Any other linear part is ``UNRECOGNIZED`` and passes
through with its translation unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from inkmark.utils.geometry import AffineTransform, Size

logger = logging.getLogger(__name__)


class Orientation(Enum):
    """Canonical track orientations, plus the pass-through case."""

    UP = "up"
    UP_MIRRORED_V = "up_mirrored_vertical"
    UP_MIRRORED_H = "up_mirrored_horizontal"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RIGHT_MIRRORED = "right_mirrored"
    LEFT_MIRRORED = "left_mirrored"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_quarter_turn(self) -> bool:
        """True when width and height swap on screen."""
        return self in _QUARTER_TURNS


_QUARTER_TURNS = frozenset({
    Orientation.LEFT,
    Orientation.RIGHT,
    Orientation.RIGHT_MIRRORED,
    Orientation.LEFT_MIRRORED,
})

Linear = Tuple[float, float, float, float]
TranslationRule = Callable[[Size], Tuple[float, float]]

CANONICAL_ORIENTATIONS: Dict[Linear, Orientation] = {
    (1, 0, 0, 1): Orientation.UP,
    (1, 0, 0, -1): Orientation.UP_MIRRORED_V,
    (-1, 0, 0, 1): Orientation.UP_MIRRORED_H,
    (-1, 0, 0, -1): Orientation.DOWN,
    (0, -1, 1, 0): Orientation.LEFT,
    (0, 1, -1, 0): Orientation.RIGHT,
    (0, 1, 1, 0): Orientation.RIGHT_MIRRORED,
    (0, -1, -1, 0): Orientation.LEFT_MIRRORED,
}

TRANSLATION_RULES: Dict[Orientation, TranslationRule] = {
    Orientation.UP: lambda s: (0.0, 0.0),
    Orientation.UP_MIRRORED_V: lambda s: (0.0, s.height),
    Orientation.UP_MIRRORED_H: lambda s: (s.width, 0.0),
    Orientation.DOWN: lambda s: (s.width, s.height),
    Orientation.LEFT: lambda s: (0.0, s.width),
    Orientation.RIGHT: lambda s: (s.height, 0.0),
    Orientation.RIGHT_MIRRORED: lambda s: (0.0, 0.0),
    Orientation.LEFT_MIRRORED: lambda s: (s.height, s.width),
}


def classify(transform: AffineTransform) -> Orientation:
    """Orientation of the linear part, ``UNRECOGNIZED`` if not canonical."""
    return CANONICAL_ORIENTATIONS.get(transform.linear, Orientation.UNRECOGNIZED)


def normalize_transform(transform: AffineTransform, natural_size: Size) -> AffineTransform:
    """Replace the translation of a canonical track transform.

    Parameters
    ----------
    transform : AffineTransform
        Track's stored (preferred) transform.
    natural_size : Size
        Untransformed content size.

    Returns
    -------
    AffineTransform
        Same linear part; translation from the canonical table, or the
        input translation unchanged when the linear part is unrecognized.
    """
    orientation = classify(transform)
    if orientation is Orientation.UNRECOGNIZED:
        logger.debug(
            "Unrecognized linear component %s; keeping translation %s",
            transform.linear, transform.translation,
        )
        return transform

    tx, ty = TRANSLATION_RULES[orientation](natural_size)
    return transform.with_translation(tx, ty)


def oriented_size(transform: AffineTransform, natural_size: Size) -> Size:
    """On-screen size of the content: W/H swapped for quarter turns."""
    if classify(transform).is_quarter_turn:
        return Size(natural_size.height, natural_size.width)
    return natural_size


@dataclass(frozen=True, slots=True)
class MediaTrack:
    """Video track metadata needed to place overlays."""

    natural_size: Size
    preferred_transform: AffineTransform = AffineTransform()

    @property
    def orientation(self) -> Orientation:
        return classify(self.preferred_transform)

    @property
    def fixed_preferred_transform(self) -> AffineTransform:
        return normalize_transform(self.preferred_transform, self.natural_size)

    @property
    def render_size(self) -> Size:
        return oriented_size(self.preferred_transform, self.natural_size)
