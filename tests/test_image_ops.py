"""Test whole-image helpers (grayscale, resize, padding) and sizing math.

Run:
    pytest tests/test_image_ops.py -v
"""

import numpy as np
import pytest
from PIL import Image

from inkmark.raster.errors import ConversionError
from inkmark.raster.image_ops import convert_to_grayscale, resize_image_to, with_padding
from inkmark.utils.geometry import Size


def test_grayscale_keeps_alpha():
    img = Image.new("RGBA", (2, 1))
    img.putpixel((0, 0), (255, 0, 0, 128))
    img.putpixel((1, 0), (255, 255, 255, 255))

    out = convert_to_grayscale(img)
    arr = np.asarray(out)
    assert out.mode == "RGBA"
    assert arr[0, 0, 0] == arr[0, 0, 1] == arr[0, 0, 2] == 54
    assert arr[0, 0, 3] == 128
    np.testing.assert_array_equal(arr[0, 1], [255, 255, 255, 255])


def test_grayscale_does_not_modify_input():
    img = Image.new("RGB", (3, 3), (10, 200, 30))
    convert_to_grayscale(img)
    assert img.getpixel((1, 1)) == (10, 200, 30)


def test_grayscale_empty_image():
    with pytest.raises(ConversionError, match="empty image"):
        convert_to_grayscale(Image.new("RGBA", (0, 4)))


def test_resize_exact_size():
    out = resize_image_to(Image.new("RGBA", (40, 20)), Size(10.4, 5.6))
    assert out.size == (10, 6)


def test_resize_never_below_one_pixel():
    out = resize_image_to(Image.new("RGBA", (40, 20)), Size(0.0, 0.2))
    assert out.size == (1, 1)


def test_padding_centers_content():
    img = Image.new("RGBA", (4, 3), (9, 9, 9, 255))
    out = with_padding(img, 2, 1)
    arr = np.asarray(out)

    assert out.size == (8, 5)
    np.testing.assert_array_equal(arr[1:4, 2:6], np.full((3, 4, 4), [9, 9, 9, 255]))
    assert arr[0].sum() == 0 and arr[4].sum() == 0
    assert arr[:, :2].sum() == 0 and arr[:, 6:].sum() == 0


def test_padding_rejects_negative():
    with pytest.raises(ValueError, match="non-negative"):
        with_padding(Image.new("RGBA", (2, 2)), -1, 0)
