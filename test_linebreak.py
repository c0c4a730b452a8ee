"""Test word wrapping."""

from pathlib import Path

import pytest

from imagetext.errors import RasterizerError
from imagetext.layout.linebreak import LineRecord, break_lines, tokenize
from imagetext.layout.metrics import MetricsProbe

FONT = Path("fake.ttf")


def wrap(rasterizer, text, inner_width, size=10):
    return break_lines(tokenize(text), inner_width, MetricsProbe(rasterizer), FONT, size)


def test_tokenize_collapses_whitespace():
    assert tokenize("  The   quick\tbrown\nfox  ") == ["The", "quick", "brown", "fox"]


def test_tokenize_nbsp_marker_joins_words():
    assert tokenize("New&nbsp;York is big") == ["New York", "is", "big"]


def test_tokenize_keeps_unicode_no_break_space():
    assert tokenize("10\u00a0km away") == ["10\u00a0km", "away"]


def test_tokenize_blank():
    assert tokenize("   \n ") == []


def test_quick_brown_fox(rasterizer):
    # 12px per character at size 20
    result = wrap(rasterizer, "The quick brown fox", 200, size=20)

    assert result.lines == (
        LineRecord("The quick brown", 180, 0),
        LineRecord("fox", 36, 0),
    )
    assert result.line_height == 20
    assert result.line_offset == 4


def test_lines_stay_within_budget(rasterizer):
    text = "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor"
    result = wrap(rasterizer, text, 150)

    assert len(result.lines) > 1
    for line in result.lines:
        assert line.width < 150
        assert line.offset == 0


def test_words_never_split(rasterizer):
    text = "  Sphinx   of black quartz,\njudge my vow  "
    result = wrap(rasterizer, text, 70)

    assert " ".join(line.text for line in result.lines) == " ".join(text.split())


def test_overlong_word_gets_own_line(rasterizer):
    result = wrap(rasterizer, "a incomprehensibilities b", 60)

    assert [line.text for line in result.lines] == ["a", "incomprehensibilities", "b"]
    assert result.lines[1].width >= 60
    assert all(line.width < 60 for line in (result.lines[0], result.lines[2]))


def test_lines_keep_their_words(rasterizer):
    result = wrap(rasterizer, "New&nbsp;York is big", 60)

    assert [line.text for line in result.lines] == ["New York", "is big"]
    assert [line.words for line in result.lines] == [("New York",), ("is", "big")]


def test_single_overlong_word(rasterizer):
    result = wrap(rasterizer, "incomprehensibilities", 30)

    assert result.lines == (LineRecord("incomprehensibilities", 126, 0),)


def test_width_equal_to_budget_breaks(rasterizer):
    # "aaaa bbbbb" is exactly 60px wide
    result = wrap(rasterizer, "aaaa bbbbb", 60)

    assert [line.text for line in result.lines] == ["aaaa", "bbbbb"]


def test_vertical_metrics_include_every_candidate(rasterizer):
    with_descender = wrap(rasterizer, "abc def ghij klm", 50)
    without = wrap(rasterizer, "abc def hik klm", 50)

    assert with_descender.line_offset == 2
    assert with_descender.line_height == 10
    assert without.line_offset == 0
    assert without.line_height == 8


def test_closed_line_is_remeasured(rasterizer):
    wrap(rasterizer, "one two", 40)

    texts = [text for _, text in rasterizer.measured]
    assert texts == ["one", "one two", "one", "two"]


def test_measurement_canvases_are_released(rasterizer):
    wrap(rasterizer, "The quick brown fox jumps", 80)

    assert rasterizer.created
    assert rasterizer.live_canvases == 0
    assert all(canvas.width == 1 and canvas.height == 1 for canvas in rasterizer.created)


def test_measurement_canvas_released_on_failure(make_rasterizer):
    rasterizer = make_rasterizer(fail_on="bad")
    with pytest.raises(RasterizerError):
        wrap(rasterizer, "good bad", 200)

    assert rasterizer.live_canvases == 0
