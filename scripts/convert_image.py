# Path: scripts/convert_image.py
# Purpose: CLI tool to turn a photo into an outline and/or a colored illustration.
# Layer: scripts.
# Details: Runs ConversionPipeline directly, without the HTTP layer or a template.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.errors import ImageProcessingError
from core.pipeline.conversion import ConversionPipeline


def main() -> int:
    """Convert one photo and print the written paths."""

    parser = argparse.ArgumentParser(description="Generate outline and colored images from a photo")
    parser.add_argument("photo", type=Path, help="Photo to convert")
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for generated images")
    parser.add_argument("--outline", action="store_true", help="Generate the outline drawing")
    parser.add_argument("--colored", action="store_true", help="Generate the colored illustration")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging verbosity")
    args = parser.parse_args()

    configure_logging(args.log_level)
    outline, colored = args.outline, args.colored
    if not outline and not colored:
        outline = colored = True

    settings = AppSettings()
    args.output_dir.mkdir(parents=True, exist_ok=True)
    pipeline = ConversionPipeline(args.output_dir, settings=settings.processing)
    try:
        result = pipeline.convert(args.photo, generate_outline=outline, generate_colored=colored)
    except ImageProcessingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for label, path in (("outline", result.outline), ("colored", result.colored)):
        if path is not None:
            print(f"{label}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
