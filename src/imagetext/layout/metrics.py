"""Text measurement through the rasterizer."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from PIL import Image

from imagetext.render.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """
    Bounding box of a measured string.

    Corners follow the rasterizer order (lower-left, lower-right, upper-right,
    upper-left). Y grows downward and 0 is the baseline, so the upper corners
    have negative Y and the lower-left Y is the distance the text reaches
    below its baseline.
    """

    lower_left_x: int
    lower_left_y: int
    lower_right_x: int
    lower_right_y: int
    upper_right_x: int
    upper_right_y: int
    upper_left_x: int
    upper_left_y: int

    @classmethod
    def from_corners(cls, corners) -> "BoundingBox":
        return cls(*corners)

    @property
    def width(self) -> int:
        return self.lower_right_x - self.lower_left_x

    @property
    def height(self) -> int:
        return self.lower_left_y - self.upper_left_y

    @property
    def baseline_offset(self) -> int:
        return self.lower_left_y


@contextmanager
def measurement_canvas(rasterizer: Rasterizer) -> Iterator[Image.Image]:
    """
    Provide a throwaway 1x1 canvas for measuring text.

    The canvas is destroyed when the block exits, whether or not it raised.
    """
    canvas = rasterizer.create_canvas(1, 1)
    try:
        yield canvas
    finally:
        rasterizer.destroy_canvas(canvas)


class MetricsProbe:
    """Measures candidate strings at a given font and size."""

    def __init__(self, rasterizer: Rasterizer) -> None:
        self.rasterizer = rasterizer
        self.calls = 0

    def measure(self, font_path: Path, size: float, text: str) -> BoundingBox:
        """
        Measure text at angle 0.

        Args:
            font_path: Path to the font file.
            size: Font size.
            text: Candidate string.

        Returns:
            BoundingBox of the rendered string.

        Raises:
            RasterizerError: If the font cannot be loaded or the text cannot be shaped.
        """
        with measurement_canvas(self.rasterizer) as canvas:
            corners = self.rasterizer.measure_text(canvas, font_path, size, 0, text)
        self.calls += 1
        box = BoundingBox.from_corners(corners)
        logger.debug(f"Measured {text!r} at {size:g}: width={box.width} height={box.height}")
        return box
