# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes processing constants, storage locations, upload limits, and server options.

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class ProcessingSettings(BaseModel):
    """Constants of the pixel pipeline; changing them changes every output image."""

    edge_threshold: int = Field(default=100, description="Sum of absolute RGB differences that marks an edge.")
    saturation_boost: float = Field(default=0.5, description="Fraction by which channels are pushed away from their mean.")
    posterize_step: int = Field(default=32, description="Bucket size used when quantizing a channel.")
    thumbnail_size: int = Field(default=200, description="Edge length of square template thumbnails.")
    thumbnail_quality: int = Field(default=80, description="JPEG quality used for thumbnails.")
    output_quality: int = Field(default=90, description="JPEG quality used for outline and colored outputs.")


class StorageSettings(BaseModel):
    """Directories used by the HTTP layer and template service."""

    upload_dir: Path = Field(default=Path("uploads"), description="Where uploaded photos and template images land.")
    static_dir: Path = Field(default=Path("public"), description="Root of statically served files.")
    output_dir: Path = Field(default=Path("public/outputs"), description="Where thumbnails and conversions are written.")
    models_dir: Path = Field(default=Path("models"), description="Per-template data directories.")

    def rooted_at(self, root: Path) -> "StorageSettings":
        """Return a copy with every relative directory resolved under ``root``."""

        return StorageSettings(
            upload_dir=root / self.upload_dir,
            static_dir=root / self.static_dir,
            output_dir=root / self.output_dir,
            models_dir=root / self.models_dir,
        )

    def ensure(self) -> None:
        """Create all directories if they are missing."""

        for directory in (self.upload_dir, self.static_dir, self.output_dir, self.models_dir):
            directory.mkdir(parents=True, exist_ok=True)


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    min_template_images: int = Field(default=5, description="Fewest images accepted for a new template.")
    max_template_images: int = Field(default=10, description="Most images accepted for a new template.")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, description="Per-file upload limit.")
    host: str = Field(default="127.0.0.1", description="Interface the HTTP server binds to.")
    port: int = Field(default=3000, description="Port the HTTP server listens on.")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Origins allowed by CORS.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings, applying environment overrides when present."""

        settings = cls()
        if os.environ.get("PORT"):
            settings.port = int(os.environ["PORT"])
        if os.environ.get("HOST"):
            settings.host = os.environ["HOST"]
        if os.environ.get("LOG_LEVEL"):
            settings.log_level = os.environ["LOG_LEVEL"].upper()
        if os.environ.get("OUTLINE_DATA_DIR"):
            settings.storage = settings.storage.rooted_at(Path(os.environ["OUTLINE_DATA_DIR"]))
        return settings


__all__ = ["AppSettings", "ProcessingSettings", "StorageSettings"]
