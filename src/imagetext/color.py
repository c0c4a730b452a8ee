"""Color parsing utilities."""

import re

from imagetext.errors import InvalidColorFormat
from imagetext.types import Color, ColorInput

COLOR_ERROR = 'Wrong color format; color can be defined as "#RGB", "#RRGGBB", [R, G, B] or [R, G, B, A].'

_HEX_PATTERN = re.compile(r"#(?:[0-9a-f]{3}|[0-9a-f]{6})", re.IGNORECASE)


def _is_channel(value: object) -> bool:
    # bool is an int subclass but never a valid channel
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255


def parse_color(value: ColorInput) -> Color:
    """
    Convert a color from one of the supported formats to a channel tuple.

    Accepted formats:
        "#RGB"        short hex, each digit doubled ("#F80" == "#FF8800")
        "#RRGGBB"     hex, case-insensitive
        [R, G, B]     three ints in 0-255
        [R, G, B, A]  four ints in 0-255; alpha follows the rasterizer's
                      convention (0 = opaque, 127 = fully transparent)

    Args:
        value: Color in any of the formats above.

    Returns:
        Tuple of 3 or 4 ints.

    Raises:
        InvalidColorFormat: If the value has any other shape.
    """
    if isinstance(value, (list, tuple)):
        if len(value) not in (3, 4) or not all(_is_channel(item) for item in value):
            raise InvalidColorFormat(COLOR_ERROR)
        return tuple(value)

    if not isinstance(value, str) or not _HEX_PATTERN.fullmatch(value):
        raise InvalidColorFormat(COLOR_ERROR)

    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    return tuple(int(digits[i:i + 2], 16) for i in range(0, 6, 2))
