"""Rasterizer abstraction and its Pillow implementation."""

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from imagetext.errors import RasterizerError
from imagetext.types import Color

logger = logging.getLogger(__name__)

# Corner coordinates in GD order: lower-left, lower-right, upper-right, upper-left.
# Y grows downward and is relative to the text baseline.
Corners = Tuple[int, int, int, int, int, int, int, int]

# Alpha convention for 4-channel colors: 0 = opaque, 127 = fully transparent
MAX_ALPHA = 127


class Rasterizer(ABC):
    """Font rasterization and pixel buffer operations used by the layout and composer."""

    @abstractmethod
    def create_canvas(self, width: int, height: int) -> Image.Image:
        """
        Allocate a pixel buffer.

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.

        Returns:
            Canvas handle.
        """
        pass

    @abstractmethod
    def destroy_canvas(self, canvas: Image.Image) -> None:
        """Release a canvas."""
        pass

    @abstractmethod
    def measure_text(
        self, canvas: Image.Image, font_path: Path, size: float, angle: float, text: str
    ) -> Corners:
        """
        Measure text as it would be drawn on canvas.

        Args:
            canvas: Canvas to measure against.
            font_path: Path to a TrueType/OpenType font file.
            size: Font size.
            angle: Text angle in degrees.
            text: Text to measure.

        Returns:
            The 8 bounding box coordinates (4 corners).

        Raises:
            RasterizerError: If the font cannot be loaded or the text cannot be shaped.
        """
        pass

    @abstractmethod
    def allocate_color(self, canvas: Image.Image, channels: Color) -> tuple:
        """
        Allocate a color for canvas.

        Args:
            canvas: Target canvas.
            channels: (R, G, B) for an opaque color or (R, G, B, A) for alpha-aware allocation.

        Returns:
            Color identifier usable with fill() and draw_text().
        """
        pass

    @abstractmethod
    def fill(self, canvas: Image.Image, x: int, y: int, color: tuple) -> None:
        """Flood fill canvas starting at (x, y)."""
        pass

    @abstractmethod
    def draw_text(
        self,
        canvas: Image.Image,
        font_path: Path,
        size: float,
        angle: float,
        x: float,
        y: float,
        color: tuple,
        text: str,
    ) -> None:
        """Draw text with its baseline starting at (x, y)."""
        pass


@lru_cache(maxsize=64)
def _load_font(font_path: str, size: float) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(font_path, size)


class PillowRasterizer(Rasterizer):
    """Rasterizer backed by Pillow's FreeType bindings."""

    mode = "RGBA"

    def _font(self, font_path: Path, size: float) -> ImageFont.FreeTypeFont:
        if size <= 0:
            raise RasterizerError(f"Font size must be positive, got {size}")
        try:
            return _load_font(str(font_path), float(size))
        except (OSError, ValueError) as e:
            raise RasterizerError(f"Cannot load font {font_path} at size {size}: {e}") from e

    @staticmethod
    def _check_angle(angle: float) -> None:
        if angle != 0:
            raise RasterizerError(f"Rotated text is not supported (angle={angle})")

    def create_canvas(self, width: int, height: int) -> Image.Image:
        try:
            return Image.new(self.mode, (width, height))
        except (ValueError, MemoryError) as e:
            raise RasterizerError(f"Cannot create {width}x{height} canvas: {e}") from e

    def destroy_canvas(self, canvas: Image.Image) -> None:
        canvas.close()

    def measure_text(
        self, canvas: Image.Image, font_path: Path, size: float, angle: float, text: str
    ) -> Corners:
        self._check_angle(angle)
        font = self._font(font_path, size)
        try:
            left, top, right, bottom = ImageDraw.Draw(canvas).textbbox(
                (0, 0), text, font=font, anchor="ls"
            )
        except (OSError, ValueError) as e:
            raise RasterizerError(f"Cannot measure {text!r} with {font_path}: {e}") from e
        return (
            int(left), int(bottom),
            int(right), int(bottom),
            int(right), int(top),
            int(left), int(top),
        )

    def allocate_color(self, canvas: Image.Image, channels: Color) -> tuple:
        if len(channels) == 3:
            return (*channels, 255)
        red, green, blue, alpha = channels
        alpha = min(alpha, MAX_ALPHA)
        return (red, green, blue, round(255 * (MAX_ALPHA - alpha) / MAX_ALPHA))

    def fill(self, canvas: Image.Image, x: int, y: int, color: tuple) -> None:
        # A uniform canvas (the usual case: freshly allocated) fills completely
        if canvas.getcolors(1) is not None:
            canvas.paste(color, (0, 0, canvas.width, canvas.height))
            return
        ImageDraw.floodfill(canvas, (x, y), color)

    def draw_text(
        self,
        canvas: Image.Image,
        font_path: Path,
        size: float,
        angle: float,
        x: float,
        y: float,
        color: tuple,
        text: str,
    ) -> None:
        self._check_angle(angle)
        font = self._font(font_path, size)
        try:
            ImageDraw.Draw(canvas).text((x, y), text, fill=color, font=font, anchor="ls")
        except (OSError, ValueError) as e:
            raise RasterizerError(f"Cannot draw {text!r} at ({x}, {y}): {e}") from e
