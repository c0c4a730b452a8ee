"""Font size search for single-line headlines."""

import logging
from dataclasses import dataclass
from pathlib import Path

from imagetext.errors import RasterizerError
from imagetext.layout.linebreak import LineRecord
from imagetext.layout.metrics import BoundingBox, MetricsProbe

logger = logging.getLogger(__name__)

DEFAULT_HEADLINE_SCALE = 1000

# Residual error above which a single-pass headline is reported
RESIDUAL_WARNING_RATIO = 0.02


@dataclass(frozen=True)
class HeadlineResult:
    """Outcome of fit_headline()."""
    line: LineRecord
    font_size: float
    line_height: int
    line_offset: int


def _corrected_size(size: float, box: BoundingBox, inner_width: int, text: str) -> float:
    if box.width <= 0:
        raise RasterizerError(f"Cannot fit {text!r}: measured width is {box.width}px at size {size:g}")
    return size / (box.width / inner_width)


def fit_headline(
    text: str,
    inner_width: int,
    probe: MetricsProbe,
    font_path: Path,
    scale: int = DEFAULT_HEADLINE_SCALE,
    tolerance: float = 0.0,
    max_passes: int = 1,
) -> HeadlineResult:
    """
    Find the font size at which text spans inner_width on a single line.

    Text is measured once at the reference size `scale`, the size is scaled
    linearly to the target width, and the text is measured again at that
    size to get the final metrics. Glyph widths are close to linear in font
    size, so one correction is usually within a pixel or two; a higher
    reference scale reduces the rounding error of the first measurement.

    With max_passes > 1, further corrections are applied while the relative
    error is above tolerance.

    Args:
        text: Headline text (single line).
        inner_width: Target width in pixels.
        probe: MetricsProbe used for measurements.
        font_path: Font file.
        scale: Reference font size for the first measurement.
        tolerance: Acceptable |width - inner_width| / inner_width.
        max_passes: Maximum number of correction passes (at least 1).

    Returns:
        HeadlineResult with the fitted line, font size and vertical metrics.

    Raises:
        RasterizerError: If the text measures zero width.
    """
    box = probe.measure(font_path, scale, text)
    font_size = _corrected_size(scale, box, inner_width, text)
    box = probe.measure(font_path, font_size, text)

    passes = 1
    while passes < max_passes and abs(box.width - inner_width) / inner_width > tolerance:
        font_size = _corrected_size(font_size, box, inner_width, text)
        box = probe.measure(font_path, font_size, text)
        passes += 1

    error = abs(box.width - inner_width) / inner_width
    if error > max(tolerance, RESIDUAL_WARNING_RATIO):
        logger.warning(
            f"Headline {text!r} is {box.width}px wide after {passes} pass(es), "
            f"target {inner_width}px ({error:.1%} off)"
        )
    logger.debug(f"Headline font size {font_size:.3f} after {passes} pass(es)")

    return HeadlineResult(
        line=LineRecord(text=text, width=box.width, offset=box.lower_left_x),
        font_size=font_size,
        line_height=box.height,
        line_offset=box.baseline_offset,
    )
