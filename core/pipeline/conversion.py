# Path: core/pipeline/conversion.py
# Purpose: Orchestrate outline and colored-illustration generation for one photo.
# Layer: core/pipeline.
# Details: Decodes the photo once, runs each requested branch independently, and names outputs by timestamp.

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Dict, Optional

from config.settings import ProcessingSettings
from core.errors import ConversionError
from core.imaging.buffer import PixelBuffer
from core.imaging.composite import Compositor
from core.imaging.edges import EdgeDetector
from core.imaging.stylize import Stylizer
from core.models.domain import ConversionResult, StyleProfile

logger = logging.getLogger(__name__)


def outline_filename(timestamp: int) -> str:
    return f"outline-{timestamp}.jpg"


def colored_filename(timestamp: int) -> str:
    return f"colored-{timestamp}.jpg"


class ConversionPipeline:
    """High-level service turning a saved photo into outline and/or colored images."""

    def __init__(self, output_dir: Path | str, settings: Optional[ProcessingSettings] = None) -> None:
        self.output_dir = Path(output_dir)
        self.settings = settings or ProcessingSettings()
        self.detector = EdgeDetector(threshold=self.settings.edge_threshold)
        self.stylizer = Stylizer(boost=self.settings.saturation_boost, step=self.settings.posterize_step)
        self.compositor = Compositor()
        self._stamp_lock = threading.Lock()
        self._last_stamp = 0

    def render_outline(self, source: PixelBuffer) -> PixelBuffer:
        """Black edges over an opaque white background."""

        return self.detector.outline(source)

    def render_colored(self, source: PixelBuffer) -> PixelBuffer:
        """Stylize a copy of ``source`` and draw the edges of the original over it."""

        stylized = self.stylizer.apply(source.copy())
        mask = self.detector.detect(source)
        return self.compositor.overlay(stylized, mask)

    def convert(
        self,
        photo_path: Path | str,
        generate_outline: bool = True,
        generate_colored: bool = True,
        style: Optional[StyleProfile] = None,
        timestamp: Optional[int] = None,
    ) -> ConversionResult:
        """
        Run the requested branches and return the paths they wrote.

        ``style`` is the target template's profile. It is accepted so callers
        pass the template along, but stylization uses fixed constants and does
        not read it.

        External calls:
        - core/imaging/buffer.py::PixelBuffer.load - decode the photo; a DecodeError fails the whole call.
        - core/imaging/edges.py::EdgeDetector.detect - edges of the untouched source for both branches.
        - core/imaging/stylize.py::Stylizer.apply - cartoon colors for the colored branch.

        Raises:
            DecodeError: if the photo cannot be decoded.
            ConversionError: if either branch fails; the other branch is still attempted.
        """

        source = PixelBuffer.load(photo_path)
        stamp = self._reserve_stamp(timestamp, generate_outline, generate_colored)
        logger.debug("Converting %s (%dx%d) at %d", photo_path, source.width, source.height, stamp)

        result = ConversionResult()
        failures: Dict[str, Exception] = {}

        if generate_outline:
            target = self.output_dir / outline_filename(stamp)
            try:
                result.outline = self.render_outline(source).encode(target, quality=self.settings.output_quality)
                logger.info("Wrote outline %s", target)
            except Exception as exc:  # noqa: BLE001 - collected into ConversionError below
                logger.exception("Outline generation failed for %s", photo_path)
                failures["outline"] = exc

        if generate_colored:
            target = self.output_dir / colored_filename(stamp)
            try:
                result.colored = self.render_colored(source).encode(target, quality=self.settings.output_quality)
                logger.info("Wrote colored illustration %s", target)
            except Exception as exc:  # noqa: BLE001 - collected into ConversionError below
                logger.exception("Colored generation failed for %s", photo_path)
                failures["colored"] = exc

        if failures:
            raise ConversionError(
                f"Conversion of {photo_path} failed in: {', '.join(sorted(failures))}",
                result=result,
                causes=failures,
            ) from next(iter(failures.values()))
        return result

    def _reserve_stamp(self, timestamp: Optional[int], outline: bool, colored: bool) -> int:
        """Pick a stamp whose requested output files do not exist yet.

        Default stamps are also strictly increasing per pipeline, so concurrent
        requests in the same millisecond never share output names.
        """

        with self._stamp_lock:
            if timestamp is None:
                stamp = max(int(time.time() * 1000), self._last_stamp + 1)
            else:
                stamp = timestamp
            while (outline and (self.output_dir / outline_filename(stamp)).exists()) or (
                colored and (self.output_dir / colored_filename(stamp)).exists()
            ):
                stamp += 1
            self._last_stamp = max(self._last_stamp, stamp)
            return stamp
