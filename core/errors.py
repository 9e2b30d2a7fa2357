# Path: core/errors.py
# Purpose: Define the typed failures raised by the imaging core and template service.
# Layer: core.
# Details: Each kind also subclasses the closest builtin so generic callers can still catch it.

from __future__ import annotations

from typing import Dict, Optional


class ImageProcessingError(Exception):
    """Base class for every failure raised by the pixel pipeline."""


class DecodeError(ImageProcessingError, ValueError):
    """The input file is missing, corrupt, or not a supported raster format."""


class OutOfRangeError(ImageProcessingError, IndexError):
    """Pixel access or crop geometry falls outside the buffer."""


class EmptyInputError(ImageProcessingError, ValueError):
    """Color profiling was asked to average zero pixels."""


class EncodeError(ImageProcessingError, OSError):
    """Writing an encoded image to disk failed."""


class ConversionError(ImageProcessingError):
    """One or more branches of a conversion failed.

    ``result`` holds whatever outputs were written before the failure and
    ``causes`` maps the branch name (``"outline"`` or ``"colored"``) to its error.
    """

    def __init__(self, message: str, result=None, causes: Optional[Dict[str, Exception]] = None) -> None:
        super().__init__(message)
        self.result = result
        self.causes: Dict[str, Exception] = causes or {}


class TemplateError(Exception):
    """Base class for template registry failures."""


class TemplateValidationError(TemplateError, ValueError):
    """A template request is missing its name or has the wrong number of images."""


class TemplateNotFoundError(TemplateError, KeyError):
    """No template is registered under the requested id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "template not found"


__all__ = [
    "ImageProcessingError",
    "DecodeError",
    "OutOfRangeError",
    "EmptyInputError",
    "EncodeError",
    "ConversionError",
    "TemplateError",
    "TemplateValidationError",
    "TemplateNotFoundError",
]
