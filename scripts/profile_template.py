# Path: scripts/profile_template.py
# Purpose: CLI tool to compute a template thumbnail and StyleProfile from image files.
# Layer: scripts.
# Details: Accepts files and folders; folders contribute their supported images in sorted order.

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.errors import ImageProcessingError
from core.pipeline.templates import TemplateProfiler

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}


def collect_images(inputs: Iterable[Path]) -> List[Path]:
    """Expand folders into their image files; plain files are kept as given."""

    paths: List[Path] = []
    for item in inputs:
        if item.is_dir():
            paths.extend(
                sorted(p for p in item.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS)
            )
        else:
            paths.append(item)
    return paths


def main() -> int:
    """Profile images and print the result as JSON."""

    parser = argparse.ArgumentParser(description="Profile template images")
    parser.add_argument("inputs", type=Path, nargs="+", help="Image files or folders")
    parser.add_argument("--template-id", type=str, default="cli", help="Id used in the thumbnail file name")
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for the thumbnail")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging verbosity")
    args = parser.parse_args()

    configure_logging(args.log_level)
    settings = AppSettings()
    args.output_dir.mkdir(parents=True, exist_ok=True)
    profiler = TemplateProfiler(args.output_dir, settings=settings.processing, show_progress=True)
    try:
        profile = profiler.profile(collect_images(args.inputs), args.template_id)
    except ImageProcessingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps({"thumbnail": str(profile.thumbnail_path), "styleData": profile.style.to_dict()}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
