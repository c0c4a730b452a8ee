"""Google Fonts download cache."""

import logging
import re
from pathlib import Path

import requests

from imagetext.errors import FontUnreadable

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "imagetext" / "fonts"

# The v1 stylesheet API answers with TrueType sources for non-browser clients
CSS_ENDPOINT = "https://fonts.googleapis.com/css"

_FONT_SOURCE = re.compile(r"url\((?P<url>https://[^)\s]+?\.(?:ttf|otf))\)", re.IGNORECASE)


def find_font_sources(css: str) -> list[str]:
    """
    List TrueType/OpenType URLs referenced by a Google Fonts stylesheet.

    Args:
        css: Stylesheet text.

    Returns:
        URLs in stylesheet order (empty if the stylesheet only offers WOFF/WOFF2).
    """
    return [match.group("url") for match in _FONT_SOURCE.finditer(css)]


class GoogleFontCache:
    """
    Local directory of fonts fetched from Google Fonts.

    Files are named "<Family>-<weight>.ttf"; a cached file is returned without
    touching the network.
    """

    def __init__(self, directory: Path | None = None, timeout: float = 30) -> None:
        self.directory = directory or DEFAULT_CACHE_DIR
        self.timeout = timeout

    def path_for(self, family: str, weight: int) -> Path:
        return self.directory / f"{family.replace(' ', '')}-{weight}.ttf"

    def get(self, family: str, weight: int = 400) -> Path:
        """
        Return the cached font file, downloading it first if needed.

        Args:
            family: Font family (e.g. "Orbitron").
            weight: Font weight (100-900).

        Returns:
            Path to the font file.

        Raises:
            FontUnreadable: If the family/weight doesn't exist or the download fails.
        """
        target = self.path_for(family, weight)
        if target.is_file():
            logger.debug(f"Google Font {family}:{weight} found in {self.directory}")
            return target

        try:
            with requests.Session() as session:
                css = session.get(
                    CSS_ENDPOINT, params={"family": f"{family}:{weight}"}, timeout=self.timeout
                )
                css.raise_for_status()
                sources = find_font_sources(css.text)
                if not sources:
                    raise FontUnreadable(f"Google Fonts offers no TrueType file for {family}:{weight}")
                font = session.get(sources[0], timeout=self.timeout)
                font.raise_for_status()
        except requests.RequestException as e:
            raise FontUnreadable(f"Could not download {family}:{weight} from Google Fonts: {e}") from e

        self.directory.mkdir(parents=True, exist_ok=True)
        partial = target.with_suffix(".part")
        partial.write_bytes(font.content)
        partial.replace(target)
        logger.info(f"Downloaded Google Font {family}:{weight} to {target}")
        return target
