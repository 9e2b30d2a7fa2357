# Path: core/models/domain.py
# Purpose: Define domain models shared across imaging, template, and API workflows.
# Layer: core/models.
# Details: Lightweight dataclasses simplify serialization between the API, the registry, and the core pipeline.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class StyleProfile:
    """Aggregate color statistics computed once when a template is registered."""

    dominant_color: RGB
    color_count: int

    def to_dict(self) -> Dict[str, Any]:
        r, g, b = self.dominant_color
        return {"dominantColor": {"r": r, "g": g, "b": b}, "colorCount": self.color_count}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StyleProfile":
        color = payload["dominantColor"]
        return cls(
            dominant_color=(int(color["r"]), int(color["g"]), int(color["b"])),
            color_count=int(payload["colorCount"]),
        )


@dataclass
class ColorSample:
    """Running per-channel sums and pixel count, finalized into a StyleProfile."""

    sum_r: int = 0
    sum_g: int = 0
    sum_b: int = 0
    count: int = 0

    def finalize(self) -> StyleProfile:
        """Average the sums, rounding halves up like ``Math.round``."""

        return StyleProfile(
            dominant_color=(
                _round_half_up(self.sum_r, self.count),
                _round_half_up(self.sum_g, self.count),
                _round_half_up(self.sum_b, self.count),
            ),
            color_count=self.count,
        )


def _round_half_up(total: int, count: int) -> int:
    # Exact integer form of floor(total / count + 0.5).
    return (2 * total + count) // (2 * count)


@dataclass
class Template:
    """A registered template as stored by the repository and returned by the API."""

    id: str
    name: str
    image_count: int
    thumbnail_url: str
    style: StyleProfile
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "imageCount": self.image_count,
            "thumbnailUrl": self.thumbnail_url,
            "styleData": self.style.to_dict(),
            "createdAt": self.created_at.isoformat().replace("+00:00", "Z"),
        }


@dataclass(frozen=True)
class TemplateProfile:
    """Output of template profiling: where the thumbnail went and the computed style."""

    thumbnail_path: Path
    style: StyleProfile


@dataclass
class ConversionResult:
    """Paths written by a conversion; a branch that was not requested stays None."""

    outline: Optional[Path] = None
    colored: Optional[Path] = None
