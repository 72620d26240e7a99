"""One-sided black threshold over RGBA8 pixel buffers.

Every pixel whose red, green and blue samples are all strictly greater
than the threshold is rewritten to opaque black ``(0, 0, 0, 255)``.  All
other pixels are left exactly as they are: dark pixels never turn white.
The default threshold is 44 on the 0-255 scale.

Properties:
    - Idempotent: a second pass changes nothing
    - Boundary: a channel equal to the threshold keeps the pixel
    - All-or-nothing: the layout is validated before the first write

Parallelism:
    Rows are independent.  ``convert_to_black_and_white`` splits the
    buffer into row ranges and, with ``max_workers > 1``, runs them on a
    thread pool (numpy releases the GIL for the masked writes).  Callers
    that need cancellation can drive ``convert_rows`` over ``row_ranges``
    themselves and check their own flag between chunks.

One buffer must not be passed to two conversions at the same time.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from inkmark.raster.buffer import PixelBuffer
from inkmark.utils.profiler import timer

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 44
BLACK = np.array([0, 0, 0, 255], dtype=np.uint8)


def _check_threshold(threshold: int) -> None:
    if not 0 <= threshold <= 255:
        raise ValueError(f"threshold must be in [0, 255], got {threshold}")


def row_ranges(height: int, rows_per_chunk: Optional[int] = None) -> List[Tuple[int, int]]:
    """Split ``height`` rows into ``[start, stop)`` ranges.

    Parameters
    ----------
    height : int
        Number of rows.
    rows_per_chunk : int, optional
        Rows per range; None (or anything >= height) yields one range.

    Returns
    -------
    list[tuple[int, int]]
        Contiguous, non-overlapping ranges covering ``0..height``.
        Empty for ``height == 0``.
    """
    if rows_per_chunk is not None and rows_per_chunk < 1:
        raise ValueError(f"rows_per_chunk must be >= 1, got {rows_per_chunk}")
    step = rows_per_chunk or max(height, 1)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


def _threshold_rows(rows: np.ndarray, threshold: int) -> int:
    """Blacken qualifying pixels of an ``(n, width, 4)`` view; return count."""
    rgb = rows[..., :3]
    mask = np.all(rgb > threshold, axis=-1)
    count = int(np.count_nonzero(mask))
    if count:
        rows[mask] = BLACK
    return count


def convert_rows(
    buffer: PixelBuffer,
    start: int,
    stop: int,
    threshold: int = DEFAULT_THRESHOLD,
) -> int:
    """Apply the threshold to rows ``[start, stop)`` of ``buffer``.

    Raises
    ------
    PixelBufferLayoutError
        If the buffer layout is invalid (checked before any write).
    ValueError
        If the row range or threshold is out of bounds.
    """
    _check_threshold(threshold)
    pixels = buffer.pixels()
    if not 0 <= start <= stop <= buffer.height:
        raise ValueError(f"Row range [{start}, {stop}) outside 0..{buffer.height}")
    return _threshold_rows(pixels[start:stop], threshold)


def convert_to_black_and_white(
    buffer: PixelBuffer,
    threshold: int = DEFAULT_THRESHOLD,
    *,
    rows_per_chunk: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> int:
    """Rewrite near-white pixels of ``buffer`` to opaque black, in place.

    Parameters
    ----------
    buffer : PixelBuffer
        Caller-owned RGBA8 bitmap, borrowed for the duration of the call.
    threshold : int
        A pixel is rewritten when R, G and B are all > threshold.
    rows_per_chunk : int, optional
        Rows per work unit; None processes the image as one unit.
    max_workers : int, optional
        Thread count for row ranges; None or 1 runs on the calling thread.

    Returns
    -------
    int
        Number of pixels rewritten.

    Raises
    ------
    PixelBufferLayoutError
        If the bytes cannot be read as a pixel grid; the buffer is untouched.
    ValueError
        If ``threshold`` is outside [0, 255].
    """
    _check_threshold(threshold)
    pixels = buffer.pixels()
    ranges = row_ranges(buffer.height, rows_per_chunk)

    with timer("threshold"):
        if max_workers is not None and max_workers > 1 and len(ranges) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                counts = list(pool.map(
                    lambda r: _threshold_rows(pixels[r[0]:r[1]], threshold), ranges
                ))
        else:
            counts = [_threshold_rows(pixels[a:b], threshold) for a, b in ranges]

    converted = sum(counts)
    logger.debug(
        "Threshold %d on %dx%d buffer: %d of %d pixels set to black (%d row ranges)",
        threshold, buffer.width, buffer.height, converted,
        buffer.width * buffer.height, len(ranges),
    )
    return converted


def convert_image(
    img: Image.Image,
    threshold: int = DEFAULT_THRESHOLD,
    *,
    rows_per_chunk: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Image.Image:
    """Threshold a Pillow image; returns a new "RGBA" image.

    The input image is not modified.

    Notes
    -----
    The pass runs on premultiplied samples, so the image goes through
    Pillow's "RGBa" mode and back.  That round trip is lossy for
    translucent pixels: channels the threshold leaves alone can still
    shift by the premultiply rounding, e.g. (40, 250, 250, 200) comes back
    as (39, 249, 249, 200) and (20, 20, 20, 3) as (0, 0, 0, 3).  Opaque
    pixels and alpha values are exact.
    """
    buffer = PixelBuffer.from_image(img)
    convert_to_black_and_white(
        buffer, threshold, rows_per_chunk=rows_per_chunk, max_workers=max_workers
    )
    return buffer.to_image()
