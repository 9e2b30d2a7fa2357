# Path: core/pipeline/templates.py
# Purpose: Profile the images of a new template: one thumbnail plus an aggregate color.
# Layer: core/pipeline.
# Details: Decodes images one at a time so only a single buffer is alive at once.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from tqdm import tqdm

from config.settings import ProcessingSettings
from core.errors import EmptyInputError
from core.imaging.buffer import PixelBuffer
from core.imaging.profiler import ColorProfiler
from core.imaging.thumbnail import Thumbnailer
from core.models.domain import TemplateProfile

logger = logging.getLogger(__name__)


class TemplateProfiler:
    """Build the thumbnail and StyleProfile stored with a template."""

    def __init__(
        self,
        output_dir: Path | str,
        settings: Optional[ProcessingSettings] = None,
        show_progress: bool = False,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.settings = settings or ProcessingSettings()
        self.thumbnailer = Thumbnailer(size=self.settings.thumbnail_size, quality=self.settings.thumbnail_quality)
        self.show_progress = show_progress

    def profile(self, image_paths: Sequence[Path | str], template_id: str) -> TemplateProfile:
        """
        Thumbnail the first image and average the colors of all of them.

        External calls:
        - core/imaging/thumbnail.py::Thumbnailer.create - writes thumbnail-<template_id>.jpg.
        - core/imaging/profiler.py::ColorProfiler.add - folds each decoded image into the running sums.

        Raises:
            EmptyInputError: if no paths are given or every image is empty.
            DecodeError: if any image cannot be decoded.
        """

        if not image_paths:
            raise EmptyInputError("Template profiling needs at least one image.")

        paths = list(image_paths)
        profiler = ColorProfiler()
        first = PixelBuffer.load(paths[0])
        thumbnail_path = self.thumbnailer.create(first, template_id, self.output_dir)
        profiler.add(first)
        del first

        for path in tqdm(
            paths[1:],
            desc="Profiling template",
            unit="img",
            initial=1,
            total=len(paths),
            disable=not self.show_progress,
        ):
            profiler.add(PixelBuffer.load(path))

        style = profiler.finalize()
        logger.info(
            "Profiled template %s: %d images, dominant color %s over %d pixels",
            template_id,
            len(image_paths),
            style.dominant_color,
            style.color_count,
        )
        return TemplateProfile(thumbnail_path=thumbnail_path, style=style)
