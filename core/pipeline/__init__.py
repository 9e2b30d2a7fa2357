# Path: core/pipeline/__init__.py
# Purpose: Package initializer for request-level orchestration.
# Layer: core/pipeline.
# Details: Exposes the conversion pipeline and the template profiler.

from .conversion import ConversionPipeline, colored_filename, outline_filename
from .templates import TemplateProfiler

__all__ = ["ConversionPipeline", "TemplateProfiler", "colored_filename", "outline_filename"]
