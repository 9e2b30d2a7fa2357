# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .logging_setup import configure_logging
from .settings import AppSettings, ProcessingSettings, StorageSettings

__all__ = ["AppSettings", "ProcessingSettings", "StorageSettings", "configure_logging"]
