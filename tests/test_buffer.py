from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from core.errors import DecodeError, EncodeError, OutOfRangeError
from core.imaging.buffer import PixelBuffer


def test_load_converts_to_rgba(write_image):
    path = write_image("photo.png", width=6, height=3, color=(10, 20, 30))

    buffer = PixelBuffer.load(path)

    assert buffer.size == (6, 3)
    assert buffer.get(5, 2) == (10, 20, 30, 255)


def test_load_missing_file_raises_decode_error(tmp_path):
    with pytest.raises(DecodeError):
        PixelBuffer.load(tmp_path / "nope.png")


def test_load_corrupt_file_raises_decode_error(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"definitely not a jpeg")

    with pytest.raises(DecodeError):
        PixelBuffer.load(path)


def test_get_and_set_bounds():
    buffer = PixelBuffer.blank(3, 2, (0, 0, 0, 0))
    buffer.set(2, 1, (1, 2, 3))

    assert buffer.get(2, 1) == (1, 2, 3, 255)
    for x, y in [(-1, 0), (3, 0), (0, 2), (0, -1)]:
        with pytest.raises(OutOfRangeError):
            buffer.get(x, y)
        with pytest.raises(OutOfRangeError):
            buffer.set(x, y, (0, 0, 0, 0))


def test_crop_returns_independent_region():
    data = np.arange(4 * 5 * 4, dtype=np.uint8).reshape(4, 5, 4)
    buffer = PixelBuffer(data)

    cropped = buffer.crop(1, 2, 3, 2)
    cropped.set(0, 0, (0, 0, 0, 0))

    assert cropped.size == (3, 2)
    assert buffer.get(1, 2) == tuple(int(v) for v in data[2, 1])


@pytest.mark.parametrize("rect", [(0, 0, 6, 1), (4, 0, 2, 1), (0, 3, 1, 2), (-1, 0, 1, 1), (0, 0, 0, 1)])
def test_crop_outside_bounds(rect):
    buffer = PixelBuffer.blank(5, 4)

    with pytest.raises(OutOfRangeError):
        buffer.crop(*rect)


def test_resize_nearest_neighbor_keeps_block_colors():
    buffer = PixelBuffer.blank(2, 1, (255, 0, 0, 255))
    buffer.set(1, 0, (0, 0, 255, 255))

    resized = buffer.resize(4, 2)

    assert resized.size == (4, 2)
    assert [resized.get(x, 1)[:3] for x in range(4)] == [(255, 0, 0)] * 2 + [(0, 0, 255)] * 2


def test_pixels_view_is_read_only():
    buffer = PixelBuffer.blank(2, 2)

    with pytest.raises(ValueError):
        buffer.pixels[0, 0, 0] = 1


def test_encode_jpeg_and_png(tmp_path):
    buffer = PixelBuffer.blank(8, 8, (50, 60, 70, 128))

    jpeg = buffer.encode(tmp_path / "out.jpg", quality=80)
    png = buffer.encode(tmp_path / "out.png")

    with Image.open(jpeg) as img:
        assert img.format == "JPEG" and img.mode == "RGB" and img.size == (8, 8)
    assert PixelBuffer.load(png).get(3, 3) == (50, 60, 70, 128)


def test_encode_failures_raise_encode_error(tmp_path):
    buffer = PixelBuffer.blank(2, 2)

    with pytest.raises(EncodeError):
        buffer.encode(tmp_path / "missing" / "out.jpg")
    with pytest.raises(EncodeError):
        buffer.encode(tmp_path / "out.unknownformat")
    with pytest.raises(OSError):
        buffer.encode(tmp_path / "missing" / "out.png")
