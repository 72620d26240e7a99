"""
Pixel-level conversions on caller-owned RGBA8 bitmaps.
"""

from inkmark.raster.buffer import PixelBuffer
from inkmark.raster.errors import ConversionError, PixelBufferLayoutError
from inkmark.raster.image_ops import convert_to_grayscale, resize_image_to, with_padding
from inkmark.raster.threshold import (
    DEFAULT_THRESHOLD,
    convert_image,
    convert_rows,
    convert_to_black_and_white,
    row_ranges,
)

__all__ = [
    "ConversionError",
    "DEFAULT_THRESHOLD",
    "PixelBuffer",
    "PixelBufferLayoutError",
    "convert_image",
    "convert_rows",
    "convert_to_black_and_white",
    "convert_to_grayscale",
    "resize_image_to",
    "row_ranges",
    "with_padding",
]
