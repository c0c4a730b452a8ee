"""Shared fixtures: a rasterizer with predictable metrics."""

from pathlib import Path

import pytest

from imagetext.errors import RasterizerError
from imagetext.render.rasterizer import Rasterizer

DESCENDERS = set("gjpqy")


class FakeCanvas:
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.fill_color = None
        self.drawn: list[tuple[float, float, str]] = []


class FakeRasterizer(Rasterizer):
    """
    Rasterizer with linear metrics, no font files needed.

    Every character advances char_ratio * size (+ tracking) pixels; ascent is
    0.8 * size and descent 0.2 * size when the text has a descender.
    """

    def __init__(
        self,
        char_ratio: float = 0.6,
        tracking: float = 0.0,
        fail_on: str | None = None,
        fail_draw_on: str | None = None,
    ) -> None:
        self.char_ratio = char_ratio
        self.tracking = tracking
        self.fail_on = fail_on
        self.fail_draw_on = fail_draw_on
        self.created: list[FakeCanvas] = []
        self.destroyed: list[FakeCanvas] = []
        self.measured: list[tuple[float, str]] = []

    @property
    def live_canvases(self) -> int:
        return len(self.created) - len(self.destroyed)

    def create_canvas(self, width, height):
        canvas = FakeCanvas(width, height)
        self.created.append(canvas)
        return canvas

    def destroy_canvas(self, canvas):
        self.destroyed.append(canvas)

    def measure_text(self, canvas, font_path, size, angle, text):
        if self.fail_on is not None and self.fail_on in text:
            raise RasterizerError(f"cannot shape {text!r}")
        self.measured.append((size, text))
        width = round(len(text) * (size * self.char_ratio + self.tracking))
        ascent = round(size * 0.8)
        descent = round(size * 0.2) if DESCENDERS & set(text) else 0
        return (0, descent, width, descent, width, -ascent, 0, -ascent)

    def allocate_color(self, canvas, channels):
        return tuple(channels)

    def fill(self, canvas, x, y, color):
        canvas.fill_color = color

    def draw_text(self, canvas, font_path, size, angle, x, y, color, text):
        if self.fail_draw_on is not None and self.fail_draw_on in text:
            raise RasterizerError(f"cannot draw {text!r}")
        canvas.drawn.append((x, y, text))


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def font_file(tmp_path) -> Path:
    """A readable file standing in for a font (the fake rasterizer never opens it)."""
    path = tmp_path / "fake.ttf"
    path.write_bytes(b"\x00\x01\x00\x00")
    return path


@pytest.fixture
def make_rasterizer():
    """Factory for FakeRasterizer with custom metrics."""
    return FakeRasterizer
