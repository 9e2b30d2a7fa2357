# Path: core/imaging/edges.py
# Purpose: Detect edges by comparing the neighbors on either side of each interior pixel.
# Layer: core/imaging.
# Details: Produces a boolean EdgeMask; rendering it onto a white or transparent layer is a separate step.

from __future__ import annotations

from typing import Sequence

import numpy as np

from .buffer import BLACK, TRANSPARENT, WHITE, PixelBuffer, as_rgba


class EdgeMask:
    """Boolean grid with the same size as its source; True marks an edge pixel."""

    __slots__ = ("_mask",)

    def __init__(self, mask: np.ndarray) -> None:
        if mask.ndim != 2:
            raise ValueError(f"Expected a 2D mask, got shape {mask.shape}.")
        self._mask = mask.astype(bool, copy=False)

    @classmethod
    def empty(cls, width: int, height: int) -> "EdgeMask":
        return cls(np.zeros((height, width), dtype=bool))

    @property
    def width(self) -> int:
        return int(self._mask.shape[1])

    @property
    def height(self) -> int:
        return int(self._mask.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def array(self) -> np.ndarray:
        view = self._mask.view()
        view.flags.writeable = False
        return view

    def __getitem__(self, point: tuple[int, int]) -> bool:
        x, y = point
        return bool(self._mask[y, x])

    def count(self) -> int:
        """Number of edge pixels."""

        return int(np.count_nonzero(self._mask))

    def render(self, background: Sequence[int] = WHITE, color: Sequence[int] = BLACK) -> PixelBuffer:
        """Draw the mask as ``color`` pixels over a uniform ``background``."""

        layer = PixelBuffer.blank(self.width, self.height, background)
        data = np.array(layer.pixels)
        data[self._mask] = as_rgba(color)
        return PixelBuffer(data)


class EdgeDetector:
    """Mark interior pixels whose horizontal or vertical neighbors differ strongly.

    For pixel ``(x, y)``:

    * ``diffX`` is the sum over R, G, B of ``|C(x-1, y) - C(x+1, y)|``
    * ``diffY`` is the sum over R, G, B of ``|C(x, y-1) - C(x, y+1)|``

    and the pixel is an edge iff either exceeds ``threshold``. The one-pixel
    border is never an edge. Differences are read from the untouched source, so
    the whole-array computation equals a row-major scan pixel for pixel.
    """

    def __init__(self, threshold: int = 100) -> None:
        self.threshold = threshold

    def detect(self, buffer: PixelBuffer) -> EdgeMask:
        mask = np.zeros((buffer.height, buffer.width), dtype=bool)
        if buffer.width < 3 or buffer.height < 3:
            return EdgeMask(mask)

        rgb = buffer.pixels[:, :, :3].astype(np.int16)
        left = rgb[1:-1, :-2]
        right = rgb[1:-1, 2:]
        top = rgb[:-2, 1:-1]
        bottom = rgb[2:, 1:-1]

        diff_x = np.abs(left - right).sum(axis=2)
        diff_y = np.abs(top - bottom).sum(axis=2)
        mask[1:-1, 1:-1] = (diff_x > self.threshold) | (diff_y > self.threshold)
        return EdgeMask(mask)

    def outline(self, buffer: PixelBuffer, transparent: bool = False) -> PixelBuffer:
        """Detect edges and render them black over white, or over transparency."""

        background = TRANSPARENT if transparent else WHITE
        return self.detect(buffer).render(background=background)
