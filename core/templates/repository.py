# Path: core/templates/repository.py
# Purpose: Define the TemplateRepository interface and an in-memory implementation.
# Layer: core/templates.
# Details: The repository is owned by the application and injected into handlers; the core pipeline never sees it.

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from core.errors import TemplateNotFoundError
from core.models.domain import Template


class TemplateRepository(ABC):
    """Abstract storage for registered templates."""

    @abstractmethod
    def list(self) -> List[Template]:
        """Return every template in registration order."""

    @abstractmethod
    def get(self, template_id: str) -> Optional[Template]:
        """Return the template with ``template_id`` if present."""

    @abstractmethod
    def add(self, template: Template) -> None:
        """Store a new template; ids must be unique."""

    @abstractmethod
    def remove(self, template_id: str) -> Template:
        """Remove and return a template, raising TemplateNotFoundError when absent."""

    def __contains__(self, template_id: str) -> bool:
        return self.get(template_id) is not None


class InMemoryTemplateRepository(TemplateRepository):
    """Process-local repository; a lock serializes concurrent request handlers."""

    def __init__(self) -> None:
        self._templates: Dict[str, Template] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Template]:
        with self._lock:
            return list(self._templates.values())

    def get(self, template_id: str) -> Optional[Template]:
        with self._lock:
            return self._templates.get(template_id)

    def add(self, template: Template) -> None:
        with self._lock:
            if template.id in self._templates:
                raise ValueError(f"Template {template.id} already exists.")
            self._templates[template.id] = template

    def remove(self, template_id: str) -> Template:
        with self._lock:
            try:
                return self._templates.pop(template_id)
            except KeyError:
                raise TemplateNotFoundError(f"Template {template_id} not found") from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)
