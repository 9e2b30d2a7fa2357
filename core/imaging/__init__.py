# Path: core/imaging/__init__.py
# Purpose: Package initializer for the pixel pipeline.
# Layer: core/imaging.
# Details: Exposes the buffer type and each processing stage.

from .buffer import BLACK, RESAMPLING, TRANSPARENT, WHITE, PixelBuffer
from .composite import Compositor, overlay
from .edges import EdgeDetector, EdgeMask
from .profiler import ColorProfiler
from .stylize import Stylizer, boost_saturation, posterize
from .thumbnail import Thumbnailer, thumbnail_filename

__all__ = [
    "BLACK",
    "RESAMPLING",
    "TRANSPARENT",
    "WHITE",
    "PixelBuffer",
    "Compositor",
    "overlay",
    "EdgeDetector",
    "EdgeMask",
    "ColorProfiler",
    "Stylizer",
    "boost_saturation",
    "posterize",
    "Thumbnailer",
    "thumbnail_filename",
]
