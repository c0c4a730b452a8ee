"""Test the chained-setter API end to end with the fake rasterizer."""

import pytest

from imagetext.builder import ImageText
from imagetext.errors import (
    FontUnreadable,
    InvalidAlignment,
    InvalidColorFormat,
    InvalidSetting,
    MissingConfiguration,
    RasterizerError,
)


def test_quick_brown_fox(rasterizer, font_file):
    builder = (
        ImageText(rasterizer)
        .set_text("The quick brown fox")
        .set_width(200)
        .set_font(font_file, 20)
        .set_align("left")
    )
    canvas = builder.build()
    layout = builder.layout

    assert len(layout.lines) >= 1
    assert canvas.width == 200
    assert canvas.height == builder.padding_top + builder.padding_bottom + len(layout.lines) * layout.line_height
    assert all(line.width < 200 or " " not in line.text for line in layout.lines)
    assert [text for _, _, text in canvas.drawn] == ["The quick brown", "fox"]


def test_drawing_positions_and_colors(rasterizer, font_file):
    canvas = (
        ImageText(rasterizer)
        .set_text("The quick brown fox")
        .set_width(200)
        .set_font(font_file, 20)
        .set_padding(10, 0)
        .set_background_color("#123")
        .set_color([1, 2, 3, 4])
        .build()
    )

    assert canvas.height == 10 + 10 + 2 * 20
    assert canvas.fill_color == (0x11, 0x22, 0x33)
    assert canvas.drawn == [(0, 26, "The quick brown"), (0, 46, "fox")]


def test_default_background_is_transparent_black(rasterizer, font_file):
    canvas = ImageText(rasterizer).set_text("Hi").set_width(100).set_font(font_file).build()

    assert canvas.fill_color == (0, 0, 0, 127)


def test_padding_getters():
    builder = ImageText().set_padding(5, 10, 15)
    assert (builder.padding_top, builder.padding_right, builder.padding_bottom, builder.padding_left) == (5, 10, 15, 10)

    builder.set_padding(7)
    assert builder.config.padding == (7, 7, 7, 7)


def test_line_offset_getter(rasterizer, font_file):
    builder = ImageText(rasterizer).set_text("jumpy quip").set_width(300).set_font(font_file, 20)
    assert builder.line_offset == 0

    builder.build()
    assert builder.line_offset == 4

    builder.set_line_offset(11).build()
    assert builder.line_offset == 11


def test_headline(rasterizer, font_file):
    builder = ImageText(rasterizer).set_text("Headline").set_width(420).set_padding(0, 10).set_font(font_file)
    canvas = builder.build()

    assert builder.layout.font_size == pytest.approx(1000 * 400 / 4800)
    assert len(canvas.drawn) == 1
    assert canvas.height == builder.layout.line_height


def test_failed_build_clears_previous_layout(rasterizer, font_file):
    builder = ImageText(rasterizer).set_text("jumpy quip").set_width(300).set_font(font_file, 20)
    builder.build()
    assert builder.line_offset == 4

    with pytest.raises(MissingConfiguration):
        builder.set_text("   ").build()
    assert builder.layout is None
    assert builder.line_offset == 0


@pytest.mark.parametrize("missing", ["width", "text", "font"])
def test_missing_configuration_allocates_nothing(rasterizer, font_file, missing):
    builder = ImageText(rasterizer)
    if missing != "width":
        builder.set_width(100)
    if missing != "text":
        builder.set_text("Hello")
    if missing != "font":
        builder.set_font(font_file, 12)

    with pytest.raises(MissingConfiguration):
        builder.build()
    assert rasterizer.created == []
    assert builder.layout is None


def test_invalid_alignment():
    with pytest.raises(InvalidAlignment):
        ImageText().set_align("middle")


def test_justify_is_accepted():
    assert ImageText().set_align(ImageText.ALIGN_JUSTIFY).config.alignment == "justify"


def test_invalid_color():
    with pytest.raises(InvalidColorFormat):
        ImageText().set_color("#12")
    with pytest.raises(InvalidColorFormat):
        ImageText().set_background_color([0, 0, 300])


def test_setters_validate_values():
    with pytest.raises(InvalidSetting, match="width"):
        ImageText().set_width("wide")
    with pytest.raises(InvalidSetting):
        ImageText().set_width(0)
    with pytest.raises(InvalidSetting):
        ImageText().set_padding(-1)
    with pytest.raises(InvalidSetting):
        ImageText().set_font_size(-12)
    with pytest.raises(InvalidSetting):
        ImageText().set_headline_precision(-1, 3)
    with pytest.raises(InvalidSetting):
        ImageText().set_headline_precision(0.01, 0)


def test_setters_coerce_numeric_strings():
    builder = ImageText().set_width("200").set_headline_precision(0.01, 3)
    assert builder.config.width == 200
    assert builder.config.headline_max_passes == 3


def test_rejected_setting_keeps_previous_config():
    builder = ImageText().set_width(200)
    with pytest.raises(InvalidSetting):
        builder.set_width(-5)
    assert builder.config.width == 200


def test_unreadable_font(tmp_path):
    with pytest.raises(FontUnreadable):
        ImageText().set_font(tmp_path / "missing.ttf")
    with pytest.raises(FontUnreadable):
        ImageText().set_font(tmp_path)


def test_draw_failure_releases_canvas(make_rasterizer, font_file):
    rasterizer = make_rasterizer()
    builder = ImageText(rasterizer).set_text("ok fine").set_width(300).set_font(font_file, 10)
    rasterizer.fail_draw_on = "fine"

    with pytest.raises(RasterizerError):
        builder.build()
    assert rasterizer.live_canvases == 0
    assert builder.layout is None
