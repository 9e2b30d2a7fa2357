# Path: core/imaging/buffer.py
# Purpose: Hold a decoded raster image as an RGBA8 numpy array.
# Layer: core/imaging.
# Details: Wraps Pillow for decode/encode/resize; every other stage works on the array directly.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from core.errors import DecodeError, EncodeError, OutOfRangeError

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)
TRANSPARENT: RGBA = (0, 0, 0, 0)

# Fixed so that thumbnails and any resized input are reproducible pixel for pixel.
RESAMPLING = Image.Resampling.NEAREST

_JPEG_SUFFIXES = {".jpg", ".jpeg", ".jfif"}


class PixelBuffer:
    """Width x height RGBA8 samples stored row-major in a ``(height, width, 4)`` array."""

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"Expected a (height, width, 4) array, got shape {data.shape}.")
        if data.shape[0] < 1 or data.shape[1] < 1:
            raise OutOfRangeError(f"Buffer must be at least 1x1, got {data.shape[1]}x{data.shape[0]}.")
        self._data = np.ascontiguousarray(data, dtype=np.uint8)

    # Construction
    @classmethod
    def load(cls, path: Path | str) -> "PixelBuffer":
        """Decode an image file into an RGBA buffer, honoring EXIF orientation.

        Raises:
            DecodeError: if the file is missing, unreadable, or not an image.
        """

        path = Path(path)
        try:
            with Image.open(path) as img:
                img.load()
                oriented = ImageOps.exif_transpose(img)
                rgba = oriented.convert("RGBA")
        except FileNotFoundError as exc:
            raise DecodeError(f"Image not found: {path}") from exc
        except UnidentifiedImageError as exc:
            raise DecodeError(f"Unsupported or corrupt image: {path}") from exc
        except (OSError, ValueError, SyntaxError) as exc:
            raise DecodeError(f"Failed to decode {path}: {exc}") from exc

        buffer = cls.from_image(rgba)
        logger.debug("Decoded %s as %dx%d", path, buffer.width, buffer.height)
        return buffer

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Copy a Pillow image into a new buffer."""

        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def blank(cls, width: int, height: int, fill: Sequence[int] = TRANSPARENT) -> "PixelBuffer":
        """Create a buffer filled with a single RGBA color."""

        if width < 1 or height < 1:
            raise OutOfRangeError(f"Buffer must be at least 1x1, got {width}x{height}.")
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[...] = as_rgba(fill)
        return cls(data)

    # Geometry
    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the samples, indexed ``[y, x, channel]``."""

        view = self._data.view()
        view.flags.writeable = False
        return view

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer.")

    # Pixel access
    def get(self, x: int, y: int) -> RGBA:
        self._check_point(x, y)
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)

    def set(self, x: int, y: int, rgba: Sequence[int]) -> None:
        self._check_point(x, y)
        self._data[y, x] = as_rgba(rgba)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._data.copy())

    def crop(self, x: int, y: int, width: int, height: int) -> "PixelBuffer":
        """Return the ``width`` x ``height`` rectangle whose top-left corner is ``(x, y)``."""

        if width < 1 or height < 1:
            raise OutOfRangeError(f"Crop size must be positive, got {width}x{height}.")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise OutOfRangeError(
                f"Crop ({x}, {y}, {width}, {height}) exceeds {self.width}x{self.height} buffer."
            )
        return PixelBuffer(self._data[y : y + height, x : x + width].copy())

    def resize(self, width: int, height: int) -> "PixelBuffer":
        """Resample to ``width`` x ``height`` with nearest-neighbor interpolation."""

        if width < 1 or height < 1:
            raise OutOfRangeError(f"Resize target must be positive, got {width}x{height}.")
        if (width, height) == self.size:
            return self.copy()
        resized = self.to_image().resize((width, height), resample=RESAMPLING)
        return PixelBuffer.from_image(resized)

    # Output
    def to_image(self) -> Image.Image:
        return Image.fromarray(self._data.copy())

    def encode(self, path: Path | str, quality: int = 90) -> Path:
        """Write the buffer to ``path``; the format follows the file suffix.

        JPEG has no alpha channel, so only the RGB samples are written.

        Raises:
            EncodeError: if the format is unknown or the file cannot be written.
        """

        path = Path(path)
        image = self.to_image()
        params = {}
        if path.suffix.lower() in _JPEG_SUFFIXES:
            image = image.convert("RGB")
            params["quality"] = int(quality)
        try:
            image.save(path, **params)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Encoded %dx%d buffer to %s", self.width, self.height, path)
        return path

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"


def as_rgba(color: Sequence[int]) -> np.ndarray:
    """Normalize an RGB or RGBA sequence into four uint8 samples (alpha defaults to opaque)."""

    values = [int(c) for c in color]
    if len(values) == 3:
        values.append(255)
    if len(values) != 4:
        raise ValueError(f"Expected an RGB or RGBA color, got {tuple(color)!r}.")
    if any(v < 0 or v > 255 for v in values):
        raise ValueError(f"Color channels must be within 0-255, got {tuple(values)!r}.")
    return np.array(values, dtype=np.uint8)
