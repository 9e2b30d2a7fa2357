from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from core.errors import ConversionError, DecodeError, EncodeError
from core.imaging.buffer import PixelBuffer
from core.models.domain import StyleProfile
from core.pipeline.conversion import ConversionPipeline
from tests.conftest import solid


@pytest.fixture
def dot_photo(tmp_path, single_dot):
    path = tmp_path / "dot.png"
    single_dot.encode(path)
    return path


def test_outline_only(tmp_path, dot_photo):
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = ConversionPipeline(out_dir).convert(dot_photo, generate_outline=True, generate_colored=False, timestamp=42)

    assert result.outline == out_dir / "outline-42.jpg"
    assert result.colored is None
    assert not (out_dir / "colored-42.jpg").exists()
    with Image.open(result.outline) as img:
        assert img.size == (5, 5)


def test_both_branches_share_timestamp(tmp_path, dot_photo):
    result = ConversionPipeline(tmp_path).convert(dot_photo, timestamp=1700000000123)

    assert result.outline.name == "outline-1700000000123.jpg"
    assert result.colored.name == "colored-1700000000123.jpg"
    assert result.outline.exists() and result.colored.exists()


def test_default_timestamp_is_milliseconds(tmp_path, dot_photo):
    result = ConversionPipeline(tmp_path).convert(dot_photo, generate_colored=False)

    stamp = int(result.outline.stem.split("-", 1)[1])
    assert stamp > 10**12


def test_render_outline_is_black_on_white(single_dot):
    outline = ConversionPipeline(".").render_outline(single_dot)

    assert outline.get(1, 2) == (0, 0, 0, 255)
    assert outline.get(2, 2) == (255, 255, 255, 255)


def test_render_colored_uses_edges_of_original():
    source = solid(5, 5, (200, 100, 50))
    source.set(2, 2, (0, 0, 0, 255))

    colored = ConversionPipeline(".").render_colored(source)

    assert colored.get(0, 0) == (255, 96, 32, 255)
    assert colored.get(1, 2) == (0, 0, 0, 255)
    assert colored.get(2, 1) == (0, 0, 0, 255)
    assert colored.get(2, 2) == (0, 0, 0, 255)
    assert source.get(0, 0) == (200, 100, 50, 255)


def test_style_is_accepted_and_ignored(tmp_path, dot_photo):
    style = StyleProfile(dominant_color=(255, 0, 0), color_count=100)
    first = ConversionPipeline(tmp_path / "a")
    second = ConversionPipeline(tmp_path / "b")
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()

    one = first.convert(dot_photo, generate_outline=False, style=style, timestamp=1)
    two = second.convert(dot_photo, generate_outline=False, timestamp=1)

    assert one.colored.read_bytes() == two.colored.read_bytes()


def test_decode_failure_fails_whole_conversion(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"\x89PNG broken")

    with pytest.raises(DecodeError):
        ConversionPipeline(tmp_path).convert(bad)
    assert list(tmp_path.glob("outline-*")) == []


def test_branch_failures_are_collected(tmp_path, dot_photo):
    pipeline = ConversionPipeline(tmp_path / "does-not-exist")

    with pytest.raises(ConversionError) as info:
        pipeline.convert(dot_photo, timestamp=7)

    assert set(info.value.causes) == {"outline", "colored"}
    assert all(isinstance(exc, EncodeError) for exc in info.value.causes.values())
    assert info.value.result.outline is None and info.value.result.colored is None


def test_one_failing_branch_does_not_stop_the_other(tmp_path, dot_photo, monkeypatch):
    pipeline = ConversionPipeline(tmp_path)

    def broken(source):
        raise RuntimeError("renderer crashed")

    monkeypatch.setattr(pipeline, "render_outline", broken)

    with pytest.raises(ConversionError) as info:
        pipeline.convert(dot_photo, timestamp=9)

    assert set(info.value.causes) == {"outline"}
    assert isinstance(info.value.causes["outline"], RuntimeError)
    assert info.value.result.colored == tmp_path / "colored-9.jpg"
    assert info.value.result.colored.exists()


def test_existing_outputs_are_not_overwritten(tmp_path, dot_photo):
    (tmp_path / "outline-5.jpg").write_bytes(b"earlier")

    result = ConversionPipeline(tmp_path).convert(dot_photo, timestamp=5)

    assert result.outline == tmp_path / "outline-6.jpg"
    assert result.colored == tmp_path / "colored-6.jpg"
    assert (tmp_path / "outline-5.jpg").read_bytes() == b"earlier"


def test_back_to_back_conversions_get_distinct_names(tmp_path, dot_photo):
    pipeline = ConversionPipeline(tmp_path)

    first = pipeline.convert(dot_photo, generate_colored=False)
    second = pipeline.convert(dot_photo, generate_colored=False)

    assert first.outline != second.outline
    assert first.outline.exists() and second.outline.exists()
