"""Greedy word wrapping against a pixel width budget."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from functools import reduce
from pathlib import Path
from typing import List, Optional, Tuple

from imagetext.layout.metrics import BoundingBox, MetricsProbe

logger = logging.getLogger(__name__)

# Literal marker that keeps two words on the same line
NBSP_MARKER = "&nbsp;"

# ASCII whitespace only: U+00A0 must keep joining words
_SEPARATORS = re.compile(r"[ \t\n\r\f\v]+")


@dataclass(frozen=True)
class LineRecord:
    """
    A laid out line of text.

    Attributes:
        text: Line content.
        width: Measured width in pixels.
        offset: Left-bearing correction (0 for wrapped lines, measured for headlines).
        words: Words joined into text; a word may contain non-breaking spaces.
    """
    text: str
    width: int
    offset: int = 0
    words: Tuple[str, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class WrapResult:
    """Lines produced by break_lines plus the vertical metrics observed while wrapping."""
    lines: Tuple[LineRecord, ...]
    line_height: int
    line_offset: int


@dataclass(frozen=True)
class _WrapState:
    current: Optional[str] = None
    current_width: int = 0
    current_words: Tuple[str, ...] = ()
    lines: Tuple[LineRecord, ...] = ()
    max_height: int = 0
    max_offset: int = 0


def tokenize(text: str) -> List[str]:
    """
    Split text into words.

    Runs of whitespace collapse, leading/trailing whitespace is dropped and the
    literal "&nbsp;" marker becomes a regular space inside its word.

    Args:
        text: Raw paragraph text.

    Returns:
        List of words (empty if text is blank).
    """
    return [
        word.replace(NBSP_MARKER, " ")
        for word in _SEPARATORS.split(text.strip())
        if word
    ]


def _track(state: _WrapState, box: BoundingBox) -> _WrapState:
    return replace(
        state,
        max_height=max(state.max_height, box.height),
        max_offset=max(state.max_offset, box.baseline_offset),
    )


def break_lines(
    tokens: List[str],
    inner_width: int,
    probe: MetricsProbe,
    font_path: Path,
    font_size: float,
) -> WrapResult:
    """
    Wrap words into lines no wider than inner_width.

    Greedy algorithm: each word is appended to the current line while the
    result stays narrower than inner_width. Line height and baseline offset
    are the maxima over every measured candidate, accepted or not, so the
    vertical metrics don't depend on where the breaks fall.

    A word that is too wide on its own still gets its own line; words are
    never split.

    Args:
        tokens: Words from tokenize().
        inner_width: Horizontal budget in pixels.
        probe: MetricsProbe used for every measurement.
        font_path: Font file.
        font_size: Explicit font size.

    Returns:
        WrapResult with lines in reading order.
    """

    def measure(text: str) -> BoundingBox:
        return probe.measure(font_path, font_size, text)

    def step(state: _WrapState, token: str) -> _WrapState:
        candidate = token if state.current is None else f"{state.current} {token}"
        box = measure(candidate)
        state = _track(state, box)

        if box.width < inner_width:
            return replace(
                state, current=candidate, current_width=box.width, current_words=state.current_words + (token,)
            )

        if state.current is None:
            logger.warning(
                f"Word {token!r} is {box.width}px wide, wider than the {inner_width}px text zone"
            )
            return replace(state, lines=state.lines + (LineRecord(token, box.width, words=(token,)),))

        # Close the current line and retry the word on a fresh one
        closed = LineRecord(state.current, measure(state.current).width, words=state.current_words)
        logger.debug(f"Line {len(state.lines) + 1}: {closed.text!r} ({closed.width}px)")
        fresh = replace(state, current=None, current_width=0, current_words=(), lines=state.lines + (closed,))
        return step(fresh, token)

    state = reduce(step, tokens, _WrapState())
    lines = state.lines
    if state.current is not None:
        lines += (LineRecord(state.current, state.current_width, words=state.current_words),)

    return WrapResult(lines=lines, line_height=state.max_height, line_offset=state.max_offset)
