"""
Media track orientation correction for overlay alignment.
"""

from inkmark.media.orientation import (
    CANONICAL_ORIENTATIONS,
    MediaTrack,
    Orientation,
    classify,
    normalize_transform,
    oriented_size,
)

__all__ = [
    "CANONICAL_ORIENTATIONS",
    "MediaTrack",
    "Orientation",
    "classify",
    "normalize_transform",
    "oriented_size",
]
