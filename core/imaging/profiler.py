# Path: core/imaging/profiler.py
# Purpose: Average the RGB color of one or more buffers.
# Layer: core/imaging.
# Details: Accumulates exact integer sums so the result does not depend on float summation order.

from __future__ import annotations

from typing import Iterable

import numpy as np

from core.errors import EmptyInputError
from core.models.domain import ColorSample, StyleProfile

from .buffer import PixelBuffer


class ColorProfiler:
    """Accumulate channel sums across buffers, then finalize into a StyleProfile.

    Buffers can be fed one at a time with :meth:`add` so callers never need to
    hold every decoded image in memory; :meth:`compute` does the whole thing
    for an in-memory sequence.
    """

    def __init__(self) -> None:
        self._sample = ColorSample()

    @property
    def sample(self) -> ColorSample:
        return self._sample

    def add(self, buffer: PixelBuffer) -> None:
        """Fold every pixel of ``buffer`` into the running sums; alpha is ignored."""

        rgb = buffer.pixels[:, :, :3].reshape(-1, 3)
        sums = rgb.sum(axis=0, dtype=np.int64)
        self._sample.sum_r += int(sums[0])
        self._sample.sum_g += int(sums[1])
        self._sample.sum_b += int(sums[2])
        self._sample.count += buffer.width * buffer.height

    def finalize(self) -> StyleProfile:
        if self._sample.count == 0:
            raise EmptyInputError("Cannot profile colors of zero pixels.")
        return self._sample.finalize()

    @classmethod
    def compute(cls, buffers: Iterable[PixelBuffer]) -> StyleProfile:
        """Return the average color and total pixel count over ``buffers``."""

        profiler = cls()
        for buffer in buffers:
            profiler.add(buffer)
        return profiler.finalize()
