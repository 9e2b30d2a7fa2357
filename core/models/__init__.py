# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across imaging, template, and API layers.

from .domain import RGB, ColorSample, ConversionResult, StyleProfile, Template, TemplateProfile

__all__ = ["RGB", "ColorSample", "ConversionResult", "StyleProfile", "Template", "TemplateProfile"]
