"""Rendering: rasterizer backends, composing and image output."""

from imagetext.render.composer import compose
from imagetext.render.image import save_image, save_image_to_bytes
from imagetext.render.rasterizer import PillowRasterizer, Rasterizer

__all__ = [
    "PillowRasterizer",
    "Rasterizer",
    "compose",
    "save_image",
    "save_image_to_bytes",
]
