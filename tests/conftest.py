from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence

import numpy as np
import pytest
from PIL import Image

from config.settings import AppSettings, StorageSettings
from core.imaging.buffer import PixelBuffer


def solid(width: int, height: int, color: Sequence[int]) -> PixelBuffer:
    return PixelBuffer.blank(width, height, color)


def png_bytes(width: int, height: int, color: Sequence[int]) -> bytes:
    stream = io.BytesIO()
    Image.new("RGB", (width, height), tuple(color)).save(stream, format="PNG")
    return stream.getvalue()


@pytest.fixture
def single_dot() -> PixelBuffer:
    """5x5 white image with one black pixel at (2, 2)."""

    buffer = solid(5, 5, (255, 255, 255))
    buffer.set(2, 2, (0, 0, 0, 255))
    return buffer


@pytest.fixture
def write_image(tmp_path: Path) -> Callable[..., Path]:
    """Save a uniform RGB image (or an explicit array) as PNG under tmp_path."""

    def _write(name: str, width: int = 4, height: int = 4, color=(128, 128, 128), array=None) -> Path:
        path = tmp_path / name
        if array is not None:
            Image.fromarray(np.asarray(array, dtype=np.uint8)).save(path)
        else:
            Image.new("RGB", (width, height), tuple(color)).save(path)
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    app_settings = AppSettings(storage=StorageSettings().rooted_at(tmp_path / "data"))
    app_settings.storage.ensure()
    return app_settings
