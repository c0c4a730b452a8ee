"""Render word-wrapped text and full-width headlines to images."""

__version__ = "0.1.0"

from imagetext.builder import ImageText
from imagetext.color import parse_color
from imagetext.config import ParagraphConfig, expand_padding, load_config
from imagetext.errors import (
    FontUnreadable,
    ImageTextError,
    InvalidAlignment,
    InvalidColorFormat,
    MissingConfiguration,
    RasterizerError,
)
from imagetext.layout import LineRecord, MetricsProbe, build_layout
from imagetext.render import PillowRasterizer, Rasterizer, compose
from imagetext.types import Alignment

__all__ = [
    "Alignment",
    "FontUnreadable",
    "ImageText",
    "ImageTextError",
    "InvalidAlignment",
    "InvalidColorFormat",
    "LineRecord",
    "MetricsProbe",
    "MissingConfiguration",
    "ParagraphConfig",
    "PillowRasterizer",
    "Rasterizer",
    "RasterizerError",
    "build_layout",
    "compose",
    "expand_padding",
    "load_config",
    "parse_color",
]
