"""Whole-image helpers around the threshold pass.

Provides:
    - convert_to_grayscale(): Rec. 709 luma, alpha preserved
    - resize_image_to(): resample to an exact size
    - with_padding(): transparent border, content centered

All functions take and return Pillow images and never modify their input.
"""

import numpy as np
from PIL import Image

from inkmark.raster.errors import ConversionError
from inkmark.utils.geometry import Size, padded_size

# Rec. 709 luma coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722


def convert_to_grayscale(img: Image.Image) -> Image.Image:
    """Monochrome copy of ``img`` as "RGBA".

    Raises
    ------
    ConversionError
        If the image has no pixels.
    """
    if img.width == 0 or img.height == 0:
        raise ConversionError(f"Cannot convert empty image ({img.width}x{img.height}) to grayscale")

    rgba = np.asarray(img.convert("RGBA"), dtype=np.float32)
    luma = LUMA_R * rgba[..., 0] + LUMA_G * rgba[..., 1] + LUMA_B * rgba[..., 2]
    luma = np.clip(np.rint(luma), 0, 255).astype(np.uint8)

    out = np.empty(rgba.shape, dtype=np.uint8)
    out[..., 0] = out[..., 1] = out[..., 2] = luma
    out[..., 3] = rgba[..., 3].astype(np.uint8)
    return Image.frombytes("RGBA", img.size, out.tobytes())


def resize_image_to(img: Image.Image, size: Size) -> Image.Image:
    """Resample ``img`` to ``size`` (rounded to whole pixels, at least 1x1)."""
    target = (max(1, round(size.width)), max(1, round(size.height)))
    return img.resize(target, Image.Resampling.LANCZOS)


def with_padding(img: Image.Image, x: int, y: int) -> Image.Image:
    """Add a transparent border of ``x`` px left/right and ``y`` px top/bottom.

    Raises
    ------
    ValueError
        If either padding is negative.
    """
    if x < 0 or y < 0:
        raise ValueError(f"Padding must be non-negative, got x={x}, y={y}")

    size = padded_size(Size(img.width, img.height), x, y)
    canvas = Image.new("RGBA", (int(size.width), int(size.height)), (0, 0, 0, 0))
    canvas.paste(img.convert("RGBA"), (x, y))
    return canvas
