"""Caller-owned RGBA8 pixel buffers.

A ``PixelBuffer`` describes bytes the caller owns: width, height, byte
stride and the data itself.  Samples are 8-bit RGBA, row-major,
premultiplied alpha.  Rows may carry padding (``stride > width * 4``).

``pixels()`` checks the layout and returns a numpy view onto the caller's
bytes, so converters mutate the buffer in place without copying.  Nothing
keeps a reference to the data beyond the call that uses it.

Pillow bridge:
    PixelBuffer.from_image(img)   decode side, via premultiplied "RGBa"
    buffer.to_image()             encode side, back to straight "RGBA"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from PIL import Image

from inkmark.raster.errors import PixelBufferLayoutError

CHANNELS = 4
"""R, G, B, A."""


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """Layout of a caller-owned RGBA8 bitmap.

    Parameters
    ----------
    width, height : int
        Pixel dimensions.
    stride : int
        Bytes per row, >= ``width * 4``.
    data : buffer
        Writable, C-contiguous byte buffer (``bytearray``, ``memoryview``,
        uint8 ``numpy.ndarray``) of at least ``stride * height`` bytes.
    """

    width: int
    height: int
    stride: int
    data: Any

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> PixelBuffer:
        """Pack an ``(H, W, 4)`` uint8 array into a new tightly-packed buffer."""
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS or pixels.dtype != np.uint8:
            raise PixelBufferLayoutError(
                f"Expected (H, W, 4) uint8 pixels, got shape {pixels.shape} dtype {pixels.dtype}"
            )
        h, w, _ = pixels.shape
        return cls(w, h, w * CHANNELS, bytearray(np.ascontiguousarray(pixels).tobytes()))

    @classmethod
    def from_image(cls, img: Image.Image) -> PixelBuffer:
        """Decode a Pillow image into a premultiplied RGBA8 buffer."""
        rgba = img.convert("RGBA").convert("RGBa")
        w, h = rgba.size
        return cls(w, h, w * CHANNELS, bytearray(rgba.tobytes()))

    @property
    def row_bytes(self) -> int:
        """Meaningful bytes per row (excludes padding)."""
        return self.width * CHANNELS

    def validate(self) -> memoryview:
        """Check the layout; return a flat byte view of ``data``.

        Raises
        ------
        PixelBufferLayoutError
            If the data cannot be read as a ``height`` x ``width`` RGBA8 grid
            with this stride.
        """
        if self.width < 0 or self.height < 0:
            raise PixelBufferLayoutError(
                f"Pixel buffer size must be non-negative, got {self.width} x {self.height}"
            )
        if self.stride < self.row_bytes:
            raise PixelBufferLayoutError(
                f"Stride {self.stride} is smaller than {self.width} px * {CHANNELS} channels "
                f"= {self.row_bytes} bytes"
            )

        try:
            view = memoryview(self.data)
        except TypeError as e:
            raise PixelBufferLayoutError(
                f"Pixel data of type {type(self.data).__name__} does not expose a buffer"
            ) from e

        if view.itemsize != 1:
            raise PixelBufferLayoutError(
                f"Pixel data must be 8-bit samples, got item size {view.itemsize}"
            )
        if not view.c_contiguous:
            raise PixelBufferLayoutError("Pixel data must be C-contiguous")
        if view.readonly:
            raise PixelBufferLayoutError("Pixel data is read-only; conversion happens in place")

        required = self.stride * self.height
        if view.nbytes < required:
            raise PixelBufferLayoutError(
                f"Pixel data holds {view.nbytes} bytes, layout needs "
                f"{self.stride} stride * {self.height} rows = {required}"
            )
        return view.cast('B')

    def pixels(self) -> np.ndarray:
        """``(height, width, 4)`` uint8 view onto the caller's bytes.

        Raises
        ------
        PixelBufferLayoutError
            See :meth:`validate`.
        """
        view = self.validate()
        if self.width == 0 or self.height == 0:
            return np.zeros((self.height, self.width, CHANNELS), dtype=np.uint8)

        flat = np.frombuffer(view, dtype=np.uint8, count=self.stride * self.height)
        rows = flat.reshape(self.height, self.stride)[:, :self.row_bytes]
        return rows.reshape(self.height, self.width, CHANNELS)

    def to_image(self) -> Image.Image:
        """Encode into a straight-alpha Pillow "RGBA" image (copies the pixels).

        Un-premultiplying rounds, so translucent pixels may not match the
        image they were decoded from; opaque pixels do.
        """
        pixels = np.ascontiguousarray(self.pixels())
        return Image.frombytes("RGBa", (self.width, self.height), pixels.tobytes()).convert("RGBA")
