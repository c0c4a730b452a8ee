"""Exceptions raised by imagetext."""


class ImageTextError(Exception):
    """Base class for all imagetext errors."""


class InvalidColorFormat(ImageTextError):
    """Color is not "#RGB", "#RRGGBB", [R, G, B] or [R, G, B, A]."""


class InvalidAlignment(ImageTextError):
    """Alignment value is not one of the supported alignments."""


class MissingConfiguration(ImageTextError):
    """Width, text or font not set (or unusable) before build."""


class FontUnreadable(ImageTextError):
    """Font file is missing or cannot be read."""


class RasterizerError(ImageTextError):
    """Measurement or drawing failed inside the rasterizer."""


class InvalidSetting(ImageTextError):
    """A setting has the wrong type or is out of range."""
