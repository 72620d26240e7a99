"""Shared fixtures for inkmark tests."""

from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
import pytest

from inkmark.raster.buffer import PixelBuffer
from inkmark.utils.geometry import Rect


@pytest.fixture()
def created_at() -> datetime:
    """Fixed creation time so generated drawings compare equal."""
    return datetime(2026, 3, 2, 9, 14, 55, tzinfo=timezone.utc)


@pytest.fixture()
def square_bounds() -> Rect:
    return Rect(0.0, 0.0, 90.0, 90.0)


@pytest.fixture()
def wide_bounds() -> Rect:
    return Rect(12.0, 30.0, 200.0, 80.0)


def _make_buffer(pixels, stride_padding: int = 0) -> PixelBuffer:
    """Build a PixelBuffer from nested RGBA rows, optionally with row padding.

    Padding bytes are filled with 0xAB so tests can check they stay untouched.
    """
    arr = np.asarray(pixels, dtype=np.uint8)
    h, w, _ = arr.shape
    stride = w * 4 + stride_padding
    data = bytearray(b"\xab" * (stride * h))
    for row in range(h):
        data[row * stride: row * stride + w * 4] = arr[row].tobytes()
    return PixelBuffer(w, h, stride, data)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture()
def make_buffer():
    return _make_buffer
