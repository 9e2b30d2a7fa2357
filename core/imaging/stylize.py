# Path: core/imaging/stylize.py
# Purpose: Give photos a flat "cartoon" look by boosting saturation and posterizing.
# Layer: core/imaging.
# Details: Purely per-pixel; alpha is left untouched.

from __future__ import annotations

import numpy as np

from .buffer import PixelBuffer


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def posterize(values, step: int = 32):
    """Snap channel values to the nearest multiple of ``step``, capped at 255.

    Idempotent: every output is either a multiple of ``step`` or 255, and both
    map back to themselves.
    """

    array = np.asarray(values, dtype=np.float64)
    quantized = np.clip(_round_half_up(array / step) * step, 0, 255)
    if np.ndim(values) == 0:
        return int(quantized)
    return quantized.astype(np.uint8)


def boost_saturation(rgb: np.ndarray, boost: float = 0.5) -> np.ndarray:
    """Push each channel away from the pixel's channel mean.

    ``rgb`` is ``(..., 3)``; the result is clamped to 0-255 and truncated to
    whole 8-bit values, which is what storing it in the image does.
    """

    channels = rgb.astype(np.float64)
    avg = channels.sum(axis=-1, keepdims=True) / 3.0
    boosted = np.clip(channels + (channels - avg) * boost, 0, 255)
    return np.trunc(boosted)


class Stylizer:
    """Saturation boost followed by posterization."""

    def __init__(self, boost: float = 0.5, step: int = 32) -> None:
        self.boost = boost
        self.step = step

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Return a stylized copy of ``buffer``.

        The mean used for the boost is taken from all three original channels
        before any of them is quantized.
        """

        data = np.array(buffer.pixels)
        boosted = boost_saturation(data[:, :, :3], self.boost)
        data[:, :, :3] = posterize(boosted, self.step)
        return PixelBuffer(data)
