"""Type aliases used across the imagetext package."""

from enum import Enum
from typing import Tuple, Union

# Color types
RGBColor = Tuple[int, int, int]  # RGB channels in 0-255 range
RGBAColor = Tuple[int, int, int, int]  # RGB + GD-style alpha (0 opaque, 127 transparent)
Color = Union[RGBColor, RGBAColor]
ColorInput = Union[str, Tuple[int, ...], list]

# Measurements
Pixel = int


class Alignment(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"
