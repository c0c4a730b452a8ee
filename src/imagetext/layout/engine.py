"""Paragraph and headline layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from imagetext.config import ParagraphConfig
from imagetext.errors import MissingConfiguration
from imagetext.layout.headline import fit_headline
from imagetext.layout.linebreak import LineRecord, break_lines, tokenize
from imagetext.layout.metrics import MetricsProbe
from imagetext.types import Alignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """A run of text drawn at one position."""
    x: float
    text: str


@dataclass(frozen=True)
class Placement:
    """Where a line is drawn: baseline y and one or more segments (several when justified)."""
    line: LineRecord
    y: int
    segments: Tuple[Segment, ...]

    @property
    def x(self) -> float:
        return self.segments[0].x


@dataclass(frozen=True)
class Layout:
    """
    Result of build_layout().

    Attributes:
        lines: Lines in reading order.
        placements: Drawing positions, one per line.
        font_size: Font size used for drawing (fitted in headline mode).
        line_height: Resolved line height (override or detected).
        line_offset: Resolved baseline offset (override or detected).
        inner_width: Width of the text zone.
        canvas_height: Height of the output image.
    """
    lines: Tuple[LineRecord, ...]
    placements: Tuple[Placement, ...]
    font_size: float
    line_height: int
    line_offset: int
    inner_width: int
    canvas_height: int


def line_x(alignment: Alignment, line: LineRecord, padding_left: int, inner_width: int) -> int:
    """
    Calculate the x position of a line.

    Args:
        alignment: Horizontal alignment. JUSTIFY positions like LEFT; word
                   spacing for justified lines is handled by justify_segments().
        line: Line to position.
        padding_left: Left padding in pixels.
        inner_width: Width of the text zone.

    Returns:
        X coordinate where drawing starts.
    """
    if alignment == Alignment.RIGHT:
        return padding_left + inner_width - line.width
    if alignment == Alignment.CENTER:
        return round(padding_left + (inner_width - line.width) / 2)
    return padding_left - line.offset


def justify_segments(
    line: LineRecord,
    padding_left: int,
    inner_width: int,
    probe: MetricsProbe,
    config: ParagraphConfig,
    font_size: float,
) -> Tuple[Segment, ...]:
    """
    Spread the words of a line so it spans the full inner width.

    Word widths are measured individually; the leftover space is split
    evenly between the gaps. Words joined by a non-breaking space stay one
    segment.

    Returns:
        One Segment per word.
    """
    words = line.words or tuple(line.text.split(" "))
    widths = [probe.measure(config.font_path, font_size, word).width for word in words]
    gap = (inner_width - sum(widths)) / (len(words) - 1)

    segments = []
    x = float(padding_left)
    for word, width in zip(words, widths):
        segments.append(Segment(round(x), word))
        x += width + gap
    return tuple(segments)


def _word_count(line: LineRecord) -> int:
    return len(line.words) if line.words else len(line.text.split(" "))


def _validate(config: ParagraphConfig) -> None:
    if config.width is None:
        raise MissingConfiguration("Undefined image width; use set_width().")
    if config.text is None:
        raise MissingConfiguration("Undefined text; use set_text().")
    if config.font_path is None:
        raise MissingConfiguration("Undefined font; use set_font().")
    if not tokenize(config.text):
        raise MissingConfiguration("Text is empty; nothing to render.")
    if config.inner_width <= 0:
        raise MissingConfiguration(
            f"No room for text: width {config.width}px minus left/right padding "
            f"{config.padding_left}+{config.padding_right}px leaves {config.inner_width}px."
        )


def build_layout(config: ParagraphConfig, probe: MetricsProbe) -> Layout:
    """
    Lay out text according to config.

    Headline mode (font_size == 0) fits the whole text on one line spanning
    the inner width; paragraph mode wraps words at the given font size.
    Non-zero line_height / line_offset settings win over the detected values.

    Args:
        config: Paragraph configuration.
        probe: MetricsProbe for all measurements.

    Returns:
        Complete Layout ready for composing.

    Raises:
        MissingConfiguration: If width, text or font is missing, text is blank,
                              or padding leaves no horizontal room.
        RasterizerError: If a measurement fails.
    """
    _validate(config)
    inner_width = config.inner_width
    tokens = tokenize(config.text)

    if config.is_headline:
        result = fit_headline(
            " ".join(tokens),
            inner_width,
            probe,
            config.font_path,
            scale=config.headline_scale,
            tolerance=config.headline_tolerance,
            max_passes=config.headline_max_passes,
        )
        lines: Tuple[LineRecord, ...] = (result.line,)
        font_size = result.font_size
        detected_height, detected_offset = result.line_height, result.line_offset
    else:
        wrapped = break_lines(tokens, inner_width, probe, config.font_path, config.font_size)
        lines = wrapped.lines
        font_size = config.font_size
        detected_height, detected_offset = wrapped.line_height, wrapped.line_offset

    line_height = config.line_height or detected_height
    line_offset = config.line_offset or detected_offset

    placements = []
    first_baseline = config.padding_top + line_height - line_offset
    for index, line in enumerate(lines):
        is_last = index == len(lines) - 1
        if config.alignment == Alignment.JUSTIFY and not is_last and _word_count(line) > 1:
            segments = justify_segments(line, config.padding_left, inner_width, probe, config, font_size)
        else:
            segments = (Segment(line_x(config.alignment, line, config.padding_left, inner_width), line.text),)
        placements.append(Placement(line=line, y=first_baseline + index * line_height, segments=segments))

    canvas_height = config.padding_top + config.padding_bottom + len(lines) * line_height

    logger.info(
        f"Laid out {len(lines)} line(s) at size {font_size:g}: "
        f"line height {line_height}px, offset {line_offset}px, canvas {config.width}x{canvas_height}"
    )

    return Layout(
        lines=lines,
        placements=tuple(placements),
        font_size=font_size,
        line_height=line_height,
        line_offset=line_offset,
        inner_width=inner_width,
        canvas_height=canvas_height,
    )
