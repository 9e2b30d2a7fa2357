# Path: core/imaging/composite.py
# Purpose: Lay a binary edge mask over a base image.
# Layer: core/imaging.
# Details: The edge layer is either fully opaque or fully transparent, so source-over reduces to a select.

from __future__ import annotations

from typing import Sequence

import numpy as np

from core.errors import OutOfRangeError

from .buffer import BLACK, PixelBuffer
from .edges import EdgeMask


def overlay(base: PixelBuffer, mask: EdgeMask, mask_color: Sequence[int] = BLACK) -> PixelBuffer:
    """Return a copy of ``base`` with every masked pixel replaced by opaque ``mask_color``."""

    if mask.size != base.size:
        raise OutOfRangeError(f"Mask size {mask.size} does not match base size {base.size}.")

    color = [int(c) for c in mask_color][:3] + [255]
    data = np.array(base.pixels)
    data[mask.array] = np.asarray(color, dtype=np.uint8)
    return PixelBuffer(data)


class Compositor:
    """Object form of :func:`overlay` with a configurable line color."""

    def __init__(self, mask_color: Sequence[int] = BLACK) -> None:
        self.mask_color = tuple(mask_color)

    def overlay(self, base: PixelBuffer, mask: EdgeMask) -> PixelBuffer:
        return overlay(base, mask, self.mask_color)
