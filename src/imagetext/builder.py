"""Chained-setter API for rendering text to an image."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from imagetext.color import parse_color
from imagetext.config import ParagraphConfig, expand_padding, parse_alignment, validate_config
from imagetext.fonts import check_font_path
from imagetext.layout.engine import Layout, build_layout
from imagetext.layout.metrics import MetricsProbe
from imagetext.render.composer import compose
from imagetext.render.rasterizer import PillowRasterizer, Rasterizer
from imagetext.types import Alignment, ColorInput

logger = logging.getLogger(__name__)


class ImageText:
    """
    Render a paragraph or a full-width headline to an image.

    Setters stage changes on an immutable ParagraphConfig and return self, so
    calls chain:

        image = (
            ImageText()
            .set_text("The quick brown fox")
            .set_width(400)
            .set_font("DejaVuSans.ttf", 24)
            .set_padding(10, 20)
            .set_align("center")
            .build()
        )

    Without a font size the text is rendered as a headline: one line scaled
    to fill the width between the left and right padding.

    One instance is meant for one thread; use separate instances for
    concurrent builds.
    """

    ALIGN_LEFT = Alignment.LEFT
    ALIGN_RIGHT = Alignment.RIGHT
    ALIGN_CENTER = Alignment.CENTER
    ALIGN_JUSTIFY = Alignment.JUSTIFY

    def __init__(self, rasterizer: Rasterizer | None = None, config: ParagraphConfig | None = None) -> None:
        """
        Initialize builder.

        Args:
            rasterizer: Rasterizer backend (default: PillowRasterizer).
            config: Starting configuration (default: ParagraphConfig()).
        """
        self.rasterizer = rasterizer or PillowRasterizer()
        self._config = config or ParagraphConfig()
        self._layout: Layout | None = None

    @classmethod
    def from_config(cls, config: ParagraphConfig, rasterizer: Rasterizer | None = None) -> "ImageText":
        return cls(rasterizer=rasterizer, config=config)

    def _update(self, **changes) -> "ImageText":
        # Validate eagerly so a bad value fails at the setter, not at build()
        self._config = validate_config({**self._config.model_dump(), **changes})
        return self

    # ========================================================================
    # Setters
    # ========================================================================

    def set_text(self, text: str) -> "ImageText":
        return self._update(text=text)

    def set_width(self, width: int) -> "ImageText":
        """
        Set image width in pixels.

        Raises:
            InvalidSetting: If width is not a positive integer.
        """
        return self._update(width=width)

    def set_font(self, font_path: str | Path, font_size: float | None = None) -> "ImageText":
        """
        Set the font file and optionally its size.

        Raises:
            FontUnreadable: If the file doesn't exist or isn't readable.
        """
        self._update(font_path=check_font_path(font_path))
        return self if font_size is None else self.set_font_size(font_size)

    def set_font_size(self, font_size: float) -> "ImageText":
        """Set font size; 0 switches to headline mode."""
        return self._update(font_size=font_size)

    def set_padding(
        self, top: int, right: int | None = None, bottom: int | None = None, left: int | None = None
    ) -> "ImageText":
        """Set padding using CSS shorthand (1 to 4 values)."""
        padding = expand_padding(top, right, bottom, left)
        return self._update(
            padding_top=padding.top,
            padding_right=padding.right,
            padding_bottom=padding.bottom,
            padding_left=padding.left,
        )

    def set_align(self, alignment: str | Alignment) -> "ImageText":
        """
        Set horizontal alignment (left, right, center or justify).

        Raises:
            InvalidAlignment: For any other value.
        """
        return self._update(alignment=parse_alignment(alignment))

    def set_background_color(self, color: ColorInput) -> "ImageText":
        """
        Set background color ("#RGB", "#RRGGBB", [R, G, B] or [R, G, B, A]).

        Raises:
            InvalidColorFormat: If the color can't be parsed.
        """
        return self._update(background_color=parse_color(color))

    def set_color(self, color: ColorInput) -> "ImageText":
        """
        Set text color ("#RGB", "#RRGGBB", [R, G, B] or [R, G, B, A]).

        Raises:
            InvalidColorFormat: If the color can't be parsed.
        """
        return self._update(text_color=parse_color(color))

    def set_line_height(self, line_height: int) -> "ImageText":
        """Set line height in pixels (0 = detected from the font)."""
        return self._update(line_height=line_height)

    def set_line_offset(self, line_offset: int) -> "ImageText":
        """Set vertical line offset in pixels (0 = detected from the font)."""
        return self._update(line_offset=line_offset)

    def set_initial_headline_scale(self, scale: int) -> "ImageText":
        """Set the reference font size of the headline search (higher is more precise)."""
        return self._update(headline_scale=scale)

    def set_headline_precision(self, tolerance: float, max_passes: int) -> "ImageText":
        """Allow up to max_passes headline corrections while the width error exceeds tolerance."""
        return self._update(headline_tolerance=tolerance, headline_max_passes=max_passes)

    # ========================================================================
    # Getters
    # ========================================================================

    @property
    def config(self) -> ParagraphConfig:
        return self._config

    @property
    def layout(self) -> Layout | None:
        """Layout of the last build (None before a build or after a failed one)."""
        return self._layout

    @property
    def padding_top(self) -> int:
        return self._config.padding_top

    @property
    def padding_right(self) -> int:
        return self._config.padding_right

    @property
    def padding_bottom(self) -> int:
        return self._config.padding_bottom

    @property
    def padding_left(self) -> int:
        return self._config.padding_left

    @property
    def line_offset(self) -> int:
        """Resolved line offset of the last build, or the configured override before any build."""
        if self._layout is not None:
            return self._layout.line_offset
        return self._config.line_offset

    # ========================================================================
    # Build
    # ========================================================================

    def build(self) -> Image.Image:
        """
        Lay out and render the text.

        Returns:
            RGBA image; the caller owns it.

        Raises:
            MissingConfiguration: If width, text or font is not set, the text is blank,
                                  or padding leaves no room for text.
            RasterizerError: If measuring or drawing fails.
        """
        self._layout = None
        probe = MetricsProbe(self.rasterizer)
        layout = build_layout(self._config, probe)
        image = compose(self._config, layout, self.rasterizer)
        self._layout = layout
        logger.debug(f"Built image with {probe.calls} measurement(s)")
        return image

    get_image = build
