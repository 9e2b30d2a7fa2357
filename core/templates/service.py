# Path: core/templates/service.py
# Purpose: Create, look up, and delete templates, including their on-disk data.
# Layer: core/templates.
# Details: Validates requests, runs TemplateProfiler, writes style-data.json, and stores records in the repository.

from __future__ import annotations

import json
import logging
import shutil
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from config.settings import AppSettings
from core.errors import TemplateNotFoundError, TemplateValidationError
from core.imaging.thumbnail import thumbnail_filename
from core.models.domain import Template
from core.pipeline.templates import TemplateProfiler

from .repository import TemplateRepository

logger = logging.getLogger(__name__)

STYLE_DATA_FILE = "style-data.json"


class TemplateService:
    """Template lifecycle on top of a TemplateRepository."""

    def __init__(
        self,
        repository: TemplateRepository,
        settings: Optional[AppSettings] = None,
        profiler: Optional[TemplateProfiler] = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or AppSettings()
        self.profiler = profiler or TemplateProfiler(
            self.settings.storage.output_dir, settings=self.settings.processing
        )
        self._id_lock = threading.Lock()
        self._last_id = 0

    @property
    def models_dir(self) -> Path:
        return self.settings.storage.models_dir

    def template_dir(self, template_id: str) -> Path:
        return self.models_dir / template_id

    def list_templates(self) -> List[Template]:
        return self.repository.list()

    def get_template(self, template_id: str) -> Template:
        template = self.repository.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template {template_id} not found")
        return template

    def create_template(self, name: Optional[str], image_paths: Sequence[Path | str]) -> Template:
        """
        Register a template from already-saved images.

        External calls:
        - core/pipeline/templates.py::TemplateProfiler.profile - thumbnail plus StyleProfile.
        - core/templates/repository.py::TemplateRepository.add - store the finished record.

        Raises:
            TemplateValidationError: if the name is blank or the image count is out of bounds.
            ImageProcessingError: if profiling fails; the template directory is removed again.
        """

        name = (name or "").strip()
        minimum = self.settings.min_template_images
        maximum = self.settings.max_template_images
        if not name:
            raise TemplateValidationError("A template name is required.")
        if len(image_paths) < minimum:
            raise TemplateValidationError(f"A template needs at least {minimum} images, got {len(image_paths)}.")
        if len(image_paths) > maximum:
            raise TemplateValidationError(f"A template accepts at most {maximum} images, got {len(image_paths)}.")

        template_id = self._next_id()
        template_dir = self.template_dir(template_id)
        template_dir.mkdir(parents=True, exist_ok=True)
        try:
            profile = self.profiler.profile(image_paths, template_id)
            (template_dir / STYLE_DATA_FILE).write_text(json.dumps(profile.style.to_dict()), encoding="utf-8")
        except Exception:
            shutil.rmtree(template_dir, ignore_errors=True)
            (self.settings.storage.output_dir / thumbnail_filename(template_id)).unlink(missing_ok=True)
            raise

        template = Template(
            id=template_id,
            name=name,
            image_count=len(image_paths),
            thumbnail_url=f"/outputs/{profile.thumbnail_path.name}",
            style=profile.style,
            created_at=datetime.now(timezone.utc),
        )
        self.repository.add(template)
        logger.info("Created template %s (%s) from %d images", template_id, name, len(image_paths))
        return template

    def delete_template(self, template_id: str) -> Template:
        """Remove the template record and its data directory."""

        if template_id not in self.repository:
            raise TemplateNotFoundError(f"Template {template_id} not found")
        template_dir = self.template_dir(template_id)
        if template_dir.exists():
            shutil.rmtree(template_dir)
        template = self.repository.remove(template_id)
        logger.info("Deleted template %s", template_id)
        return template

    def _next_id(self) -> str:
        """Millisecond timestamp, bumped so two templates never share an id."""

        with self._id_lock:
            candidate = max(int(time.time() * 1000), self._last_id + 1)
            while str(candidate) in self.repository:
                candidate += 1
            self._last_id = candidate
            return str(candidate)
