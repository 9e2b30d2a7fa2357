# Path: core/imaging/thumbnail.py
# Purpose: Produce fixed-size, center-cropped square previews.
# Layer: core/imaging.
# Details: Crops to the largest centered square, resizes, and optionally encodes as thumbnail-<id>.jpg.

from __future__ import annotations

import logging
from pathlib import Path

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)


def thumbnail_filename(template_id: str) -> str:
    return f"thumbnail-{template_id}.jpg"


class Thumbnailer:
    """Square thumbnails of a fixed edge length."""

    def __init__(self, size: int = 200, quality: int = 80) -> None:
        self.size = size
        self.quality = quality

    def make(self, buffer: PixelBuffer) -> PixelBuffer:
        """Crop the centered ``min(w, h)`` square and resize it to ``size`` x ``size``."""

        side = min(buffer.width, buffer.height)
        x = (buffer.width - side) // 2
        y = (buffer.height - side) // 2
        return buffer.crop(x, y, side, side).resize(self.size, self.size)

    def create(self, buffer: PixelBuffer, template_id: str, output_dir: Path | str) -> Path:
        """Make the thumbnail and write it as ``thumbnail-<template_id>.jpg`` in ``output_dir``."""

        output_path = Path(output_dir) / thumbnail_filename(template_id)
        self.make(buffer).encode(output_path, quality=self.quality)
        logger.info("Wrote thumbnail %s", output_path)
        return output_path
