"""Image output utilities using Pillow."""

from io import BytesIO
from pathlib import Path

from PIL import Image


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, WEBP, etc.).

    Returns:
        Image as bytes.
    """
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def save_image(img: Image.Image, path: Path, format: str | None = None) -> Path:
    """
    Save PIL Image to a file.

    Formats without an alpha channel (JPEG, BMP) get the image flattened to RGB.

    Args:
        img: PIL Image object.
        path: Output path; the format is guessed from the suffix unless given.
        format: Explicit image format.

    Returns:
        The output path.
    """
    format = format or Image.registered_extensions().get(path.suffix.lower(), "PNG")
    if format in ("JPEG", "BMP") and img.mode != "RGB":
        img = img.convert("RGB")
    img.save(path, format=format)
    return path
