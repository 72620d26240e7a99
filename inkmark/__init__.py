"""inkmark: shape strokes, raster thresholding and media orientation for annotation overlays.

This package holds the numeric core of a photo/video annotation editor:
synthetic stroke generation for primitive shapes, a black-and-white pixel
threshold pass, and the transform correction that lines overlays up with
rotated video frames.

Architecture layers (strict one-way dependency):
    cli → inkmark/{canvas,ink,raster,media}/ → inkmark/{configs,utils}/

Key invariants:
    - Geometry in floating-point points, top-left origin, +Y down
    - Pixels are 8-bit RGBA, row-major, premultiplied alpha
    - Value types are frozen dataclasses; only caller pixel buffers mutate
    - YAML-only configs
"""

__version__ = "1.4.0"
