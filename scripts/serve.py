# Path: scripts/serve.py
# Purpose: CLI entrypoint that runs the HTTP API with uvicorn.
# Layer: scripts.
# Details: Loads settings from the environment, then applies command line overrides.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from api import create_app
from config import AppSettings, configure_logging


def main() -> None:
    """Start the API server."""

    settings = AppSettings.from_env()
    parser = argparse.ArgumentParser(description="Serve the outline/cartoon conversion API")
    parser.add_argument("--host", type=str, default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", type=str, default=settings.log_level, help="Logging verbosity")
    args = parser.parse_args()

    settings.host = args.host
    settings.port = args.port
    settings.log_level = args.log_level.upper()
    configure_logging(settings.log_level)

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
