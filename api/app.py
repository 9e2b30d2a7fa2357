# Path: api/app.py
# Purpose: Expose a FastAPI application for template management and photo conversion.
# Layer: api.
# Details: Owns the template repository and pipelines, and maps core failures onto JSON error responses.

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from config.settings import AppSettings
from core.errors import ImageProcessingError, TemplateNotFoundError, TemplateValidationError
from core.pipeline.conversion import ConversionPipeline
from core.templates.repository import InMemoryTemplateRepository, TemplateRepository
from core.templates.service import TemplateService

from .uploads import UploadTooLargeError, save_upload

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _flag(value: Optional[str]) -> bool:
    return value == "true"


def create_app(
    settings: Optional[AppSettings] = None,
    repository: Optional[TemplateRepository] = None,
) -> FastAPI:
    """Create a FastAPI app wired to a template repository and the conversion pipeline."""

    settings = settings or AppSettings()
    storage = settings.storage
    storage.ensure()

    repository = repository if repository is not None else InMemoryTemplateRepository()
    service = TemplateService(repository, settings=settings)
    pipeline = ConversionPipeline(storage.output_dir, settings=settings.processing)

    app = FastAPI(title="Outline Studio API", version="0.1.0")
    app.state.settings = settings
    app.state.templates = service
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TemplateValidationError)
    async def handle_validation(request: Request, exc: TemplateValidationError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(TemplateNotFoundError)
    async def handle_not_found(request: Request, exc: TemplateNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(UploadTooLargeError)
    async def handle_too_large(request: Request, exc: UploadTooLargeError) -> JSONResponse:
        return _error(413, str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return _error(500, "server error")

    @app.get("/")
    def index():
        """Serve the front-end page when one is installed."""

        page = storage.static_dir / "index.html"
        if page.is_file():
            return FileResponse(page)
        return {"status": "ok", "service": app.title}

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.get("/api/templates")
    def list_templates() -> List[Dict[str, Any]]:
        return [template.to_dict() for template in service.list_templates()]

    @app.post("/api/templates", status_code=201)
    def create_template(
        name: Optional[str] = Form(None),
        images: Optional[List[UploadFile]] = File(None),
    ):
        """Register a template from 5-10 uploaded images."""

        images = images or []
        if not name or len(images) < settings.min_template_images:
            return _error(400, f"A template name and at least {settings.min_template_images} images are required.")

        paths = [save_upload(image, storage.upload_dir, settings.max_upload_bytes) for image in images]
        try:
            template = service.create_template(name, paths)
        except ImageProcessingError:
            logger.exception("Template creation failed")
            return _error(500, "server error")
        return JSONResponse(status_code=201, content=template.to_dict())

    @app.delete("/api/templates/{template_id}")
    def delete_template(template_id: str) -> Dict[str, bool]:
        service.delete_template(template_id)
        return {"success": True}

    @app.post("/api/convert")
    def convert(
        template_id: Optional[str] = Form(None, alias="templateId"),
        photo: Optional[UploadFile] = File(None),
        generate_outline: Optional[str] = Form(None, alias="generateOutline"),
        generate_colored: Optional[str] = Form(None, alias="generateColored"),
    ):
        """Convert an uploaded photo into an outline and/or a colored illustration."""

        if not template_id or photo is None:
            return _error(400, "A template id and a photo are required.")

        template = service.get_template(template_id)
        photo_path = save_upload(photo, storage.upload_dir, settings.max_upload_bytes)
        try:
            result = pipeline.convert(
                photo_path,
                generate_outline=_flag(generate_outline),
                generate_colored=_flag(generate_colored),
                style=template.style,
            )
        except ImageProcessingError:
            logger.exception("Conversion of %s failed", photo_path)
            return _error(500, "conversion failed")

        payload: Dict[str, str] = {}
        if result.outline is not None:
            payload["outline"] = f"/outputs/{result.outline.name}"
        if result.colored is not None:
            payload["colored"] = f"/outputs/{result.colored.name}"
        return payload

    app.mount("/outputs", StaticFiles(directory=storage.output_dir), name="outputs")
    app.mount("/uploads", StaticFiles(directory=storage.upload_dir), name="uploads")
    app.mount("/", StaticFiles(directory=storage.static_dir, html=True), name="static")

    return app
