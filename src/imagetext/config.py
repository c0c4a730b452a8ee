"""Configuration loading and validation."""

import tomllib
from pathlib import Path
from typing import Annotated, Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from imagetext.color import parse_color
from imagetext.errors import InvalidAlignment, InvalidSetting
from imagetext.types import Alignment, Color


class Padding(NamedTuple):
    """Resolved padding in pixels."""

    top: int
    right: int
    bottom: int
    left: int


def expand_padding(top: int, right: int | None = None, bottom: int | None = None, left: int | None = None) -> Padding:
    """
    Expand CSS shorthand padding to all four sides.

    1 value:  all sides
    2 values: top/bottom, left/right
    3 values: top, left/right, bottom
    4 values: top, right, bottom, left

    Returns:
        Padding tuple (top, right, bottom, left).
    """
    if right is None:
        return Padding(top, top, top, top)
    if bottom is None:
        return Padding(top, right, top, right)
    if left is None:
        return Padding(top, right, bottom, right)
    return Padding(top, right, bottom, left)


def parse_alignment(value: str | Alignment) -> Alignment:
    """
    Convert a string to an Alignment.

    Raises:
        InvalidAlignment: If value is not left, right, center or justify.
    """
    try:
        return Alignment(value)
    except ValueError:
        raise InvalidAlignment(f"Wrong alignment {value!r}; use one of: {', '.join(a.value for a in Alignment)}.") from None


class ParagraphConfig(BaseModel):
    """
    Everything needed to lay out and render one block of text.

    Instances are immutable; derive variants with model_copy():

        base = ParagraphConfig(text="Hello", width=400, font_path=Path("font.ttf"))
        wrapped = base.model_copy(update={"font_size": 24})
    """

    model_config = ConfigDict(frozen=True)

    # ========================================================================
    # Content
    # ========================================================================
    text: str | None = None
    """Text to render."""

    width: Annotated[int, Field(gt=0)] | None = None
    """Output image width in pixels."""

    font_path: Path | None = None
    """Path to a TrueType/OpenType font file."""

    font_size: float = Field(default=0, ge=0)
    """Font size. 0 = headline mode (text scaled to fill the inner width on one line)."""

    # ========================================================================
    # Box
    # ========================================================================
    padding_top: int = Field(default=0, ge=0)
    padding_right: int = Field(default=0, ge=0)
    padding_bottom: int = Field(default=0, ge=0)
    padding_left: int = Field(default=0, ge=0)

    alignment: Alignment = Alignment.LEFT
    """Horizontal alignment of each line."""

    # ========================================================================
    # Colors
    # ========================================================================
    background_color: Color = (0, 0, 0, 127)
    """Background as (R, G, B) or (R, G, B, A); alpha 127 = fully transparent."""

    text_color: Color = (255, 255, 255)
    """Text color. Default: white."""

    # ========================================================================
    # Vertical metrics overrides
    # ========================================================================
    line_height: int = Field(default=0, ge=0)
    """Line height in pixels (0 = detected from the font)."""

    line_offset: int = 0
    """Distance from the baseline to the bottom of a line box (0 = detected)."""

    # ========================================================================
    # Headline search
    # ========================================================================
    headline_scale: int = Field(default=1000, gt=0)
    """Reference font size for the first headline measurement (higher is more precise)."""

    headline_tolerance: float = Field(default=0.0, ge=0)
    """Relative width error accepted before another headline correction pass."""

    headline_max_passes: int = Field(default=1, ge=1)
    """Maximum headline correction passes. 1 = single correction."""

    @field_validator("background_color", "text_color", mode="before")
    @classmethod
    def _validate_color(cls, value):
        return parse_color(value)

    @field_validator("alignment", mode="before")
    @classmethod
    def _validate_alignment(cls, value):
        return parse_alignment(value)

    # ========================================================================
    # Computed Properties
    # ========================================================================

    @property
    def padding(self) -> Padding:
        return Padding(self.padding_top, self.padding_right, self.padding_bottom, self.padding_left)

    @property
    def inner_width(self) -> int:
        """Width of the text zone (width minus left and right padding)."""
        return (self.width or 0) - self.padding_left - self.padding_right

    @property
    def is_headline(self) -> bool:
        return not self.font_size


def validate_config(settings: dict[str, Any]) -> ParagraphConfig:
    """
    Build a ParagraphConfig from plain settings.

    Args:
        settings: Field values (strings are coerced where pydantic allows, e.g. "200" -> 200).

    Returns:
        Validated ParagraphConfig.

    Raises:
        InvalidSetting: If a value has the wrong type or is out of range.
        InvalidColorFormat: If a color cannot be parsed.
        InvalidAlignment: If the alignment is unknown.
    """
    try:
        return ParagraphConfig.model_validate(settings)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise InvalidSetting(f"Invalid setting: {problems}") from None


def load_config(config_path: Path, font_cache: Path | None = None) -> ParagraphConfig:
    """
    Load paragraph settings from a TOML file.

    Keys mirror ParagraphConfig fields, with two conveniences:
    `padding` may be a list of 1-4 values (CSS shorthand) and `font` may be a
    font spec understood by resolve_font() (a path or "family:weight").
    Downloaded fonts go to `font_cache`, or the `font_cache` key of the file.

    Args:
        config_path: Path to the TOML file.
        font_cache: Directory for downloaded Google Fonts (overrides the file).

    Returns:
        Validated ParagraphConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FontUnreadable: If `font` cannot be resolved.
        InvalidSetting: If a value has the wrong type or is out of range.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        settings = tomllib.load(f)

    padding = settings.pop("padding", None)
    if padding is not None:
        values = [padding] if isinstance(padding, int) else list(padding)
        resolved = expand_padding(*values)
        settings.update(
            padding_top=resolved.top,
            padding_right=resolved.right,
            padding_bottom=resolved.bottom,
            padding_left=resolved.left,
        )

    font = settings.pop("font", None)
    cache_setting = settings.pop("font_cache", None)
    if font_cache is None and cache_setting is not None:
        font_cache = config_path.parent / Path(cache_setting).expanduser()
    if font is not None:
        from imagetext.fonts import resolve_font

        font_path = Path(font)
        if not font_path.is_absolute() and ":" not in font:
            # Relative paths are relative to the config file
            font_path = config_path.parent / font_path
            font = str(font_path) if font_path.exists() else font
        settings["font_path"] = resolve_font(font, cache_dir=font_cache)

    return validate_config(settings)
