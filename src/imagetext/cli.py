"""CLI interface for imagetext."""

import logging
from pathlib import Path

import click

from imagetext.builder import ImageText
from imagetext.config import ParagraphConfig, load_config
from imagetext.errors import ImageTextError
from imagetext.fonts import resolve_font
from imagetext.render.image import save_image
from imagetext.types import Alignment


def _parse_padding(value: str | None) -> list[int] | None:
    if value is None:
        return None
    try:
        parts = [int(part.strip()) for part in value.split(",")]
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a comma-separated list of integers", param_hint="--padding")
    if not 1 <= len(parts) <= 4:
        raise click.BadParameter("expected 1 to 4 values (CSS shorthand)", param_hint="--padding")
    return parts


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log layout details.")
def main(verbose: bool) -> None:
    """Render word-wrapped text or full-width headlines to images."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output image path (format from the suffix, e.g. .png).",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="TOML file with paragraph settings. Command line options override it.",
)
@click.option("-w", "--width", type=int, help="Image width in pixels.")
@click.option(
    "-f",
    "--font",
    type=str,
    help="Font file path, or Google Font as 'family:weight' (e.g. 'Orbitron:700').",
)
@click.option(
    "--font-cache",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="IMAGETEXT_FONT_CACHE",
    help="Directory for fonts downloaded from Google Fonts (default: ~/.cache/imagetext/fonts).",
)
@click.option(
    "-s",
    "--font-size",
    type=float,
    help="Font size. Omit (or 0) to fit the text on one line across the full width.",
)
@click.option(
    "--padding",
    type=str,
    help="Padding as 1-4 comma-separated values, CSS order (e.g. '10' or '10,20').",
)
@click.option(
    "--align",
    type=click.Choice([a.value for a in Alignment], case_sensitive=False),
    help="Horizontal alignment.",
)
@click.option("--background", type=str, help="Background color: '#RGB' or '#RRGGBB'.")
@click.option("--color", type=str, help="Text color: '#RGB' or '#RRGGBB'.")
@click.option("--line-height", type=int, help="Line height in pixels (default: detected).")
@click.option("--line-offset", type=int, help="Vertical line offset in pixels (default: detected).")
@click.option(
    "--headline-scale",
    type=int,
    help="Reference size for headline fitting (default: 1000; higher is more precise).",
)
def render(
    text: str,
    output: Path,
    config: Path | None,
    width: int | None,
    font: str | None,
    font_cache: Path | None,
    font_size: float | None,
    padding: str | None,
    align: str | None,
    background: str | None,
    color: str | None,
    line_height: int | None,
    line_offset: int | None,
    headline_scale: int | None,
) -> None:
    """
    Render TEXT to an image.

    With --font-size the text wraps into lines; without it the text is
    scaled to fill the width on a single line.
    """
    try:
        base = load_config(config, font_cache=font_cache) if config else ParagraphConfig()
        builder = ImageText.from_config(base).set_text(text)

        if width is not None:
            builder.set_width(width)
        if font is not None:
            builder.set_font(resolve_font(font, cache_dir=font_cache))
        if font_size is not None:
            builder.set_font_size(font_size)
        padding_values = _parse_padding(padding)
        if padding_values:
            builder.set_padding(*padding_values)
        if align:
            builder.set_align(align.lower())
        if background:
            builder.set_background_color(background)
        if color:
            builder.set_color(color)
        if line_height is not None:
            builder.set_line_height(line_height)
        if line_offset is not None:
            builder.set_line_offset(line_offset)
        if headline_scale is not None:
            builder.set_initial_headline_scale(headline_scale)

        image = builder.build()
        save_image(image, output)

        layout = builder.layout
        click.echo(
            f"✓ {len(layout.lines)} line(s) at size {layout.font_size:g} "
            f"saved to: {output} ({image.width}x{image.height})"
        )

    except (FileNotFoundError, ImageTextError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
