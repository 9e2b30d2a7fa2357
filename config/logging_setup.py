# Path: config/logging_setup.py
# Purpose: Configure standard library logging for scripts and the HTTP server.
# Layer: config.
# Details: Modules log through ``logging.getLogger(__name__)``; this installs the root handler once.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a stream handler on the root logger at the requested level."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
