# Path: core/templates/__init__.py
# Purpose: Package initializer for the template registry.
# Layer: core/templates.
# Details: Exposes the repository interface, its in-memory implementation, and the lifecycle service.

from .repository import InMemoryTemplateRepository, TemplateRepository
from .service import STYLE_DATA_FILE, TemplateService

__all__ = ["InMemoryTemplateRepository", "TemplateRepository", "TemplateService", "STYLE_DATA_FILE"]
