# Path: api/uploads.py
# Purpose: Persist multipart uploads to the upload directory under collision-free names.
# Layer: api.
# Details: Streams in chunks and enforces the per-file size limit before the core ever sees the file.

from __future__ import annotations

import re
import time
from pathlib import Path

from fastapi import UploadFile

CHUNK_SIZE = 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class UploadTooLargeError(Exception):
    """An uploaded file exceeded the configured size limit."""


def safe_filename(filename: str | None) -> str:
    """Strip directories and anything outside ``[A-Za-z0-9._-]`` from a client filename."""

    name = Path((filename or "").replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


def save_upload(upload: UploadFile, upload_dir: Path, max_bytes: int) -> Path:
    """Write ``upload`` as ``<ms-timestamp>-<safe name>`` and return its path.

    A partially written file is removed when the size limit is hit.
    """

    stamp = int(time.time() * 1000)
    name = safe_filename(upload.filename)
    target = upload_dir / f"{stamp}-{name}"
    while target.exists():
        stamp += 1
        target = upload_dir / f"{stamp}-{name}"
    written = 0
    try:
        with target.open("wb") as handle:
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise UploadTooLargeError(f"{upload.filename} exceeds the {max_bytes} byte limit.")
                handle.write(chunk)
    except UploadTooLargeError:
        target.unlink(missing_ok=True)
        raise
    return target
