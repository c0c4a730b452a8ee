"""Draw a laid out paragraph onto a new canvas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image

from imagetext.render.rasterizer import Rasterizer

if TYPE_CHECKING:
    from imagetext.config import ParagraphConfig
    from imagetext.layout.engine import Layout

logger = logging.getLogger(__name__)


def compose(config: ParagraphConfig, layout: Layout, rasterizer: Rasterizer) -> Image.Image:
    """
    Render layout onto a canvas of (config.width, layout.canvas_height).

    The background is filled first, then each line is drawn top to bottom.
    If drawing fails the canvas is released and the error propagates.

    Args:
        config: Configuration the layout was built from.
        layout: Result of build_layout().
        rasterizer: Rasterizer doing the pixel work.

    Returns:
        The finished canvas. The caller owns it.
    """
    canvas = rasterizer.create_canvas(config.width, layout.canvas_height)
    try:
        rasterizer.fill(canvas, 0, 0, rasterizer.allocate_color(canvas, config.background_color))
        color = rasterizer.allocate_color(canvas, config.text_color)

        for placement in layout.placements:
            for segment in placement.segments:
                rasterizer.draw_text(
                    canvas,
                    config.font_path,
                    layout.font_size,
                    0,
                    segment.x,
                    placement.y,
                    color,
                    segment.text,
                )
    except Exception:
        rasterizer.destroy_canvas(canvas)
        raise

    logger.debug(f"Composed {len(layout.placements)} line(s) on {config.width}x{layout.canvas_height} canvas")
    return canvas
