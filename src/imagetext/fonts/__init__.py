"""Font lookup and validation."""

import logging
import os
from pathlib import Path

from imagetext.errors import FontUnreadable
from imagetext.fonts.google import GoogleFontCache

logger = logging.getLogger(__name__)


def check_font_path(font_path: str | Path) -> Path:
    """
    Make sure a font file exists and is readable.

    Args:
        font_path: Path to the font file.

    Returns:
        The path as a Path object.

    Raises:
        FontUnreadable: If the file is missing or not readable.
    """
    path = Path(font_path)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise FontUnreadable(f"Font not found or is not readable ({path}).")
    return path


def resolve_font(font_spec: str | Path, cache_dir: Path | None = None) -> Path:
    """
    Resolve a font specification to a readable font file.

    Resolution order:
    1. An existing file path is used as-is.
    2. "family:weight" (e.g. "Orbitron:700") is fetched from Google Fonts and cached.

    Args:
        font_spec: Font path or Google Fonts "family:weight" spec.
        cache_dir: Where downloaded fonts are kept (default: ~/.cache/imagetext/fonts).

    Returns:
        Path to a readable font file.

    Raises:
        FontUnreadable: If the spec is neither a readable file nor a downloadable font.
    """
    if isinstance(font_spec, Path) or Path(font_spec).is_file():
        return check_font_path(font_spec)

    if ":" not in font_spec:
        raise FontUnreadable(f"Font not found or is not readable ({font_spec}).")

    family, weight_str = (part.strip() for part in font_spec.split(":", 1))
    try:
        weight = int(weight_str)
    except ValueError:
        raise FontUnreadable(f"Invalid font weight '{weight_str}' in '{font_spec}'") from None

    logger.info(f"Font '{font_spec}' is not a local file, trying Google Fonts...")
    return check_font_path(GoogleFontCache(cache_dir).get(family, weight))
