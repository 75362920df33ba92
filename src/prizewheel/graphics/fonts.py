"""Font loading for wheel rendering.

Pillow FreeType fonts, cached per (path, size). Falls back through a list of
common bold system fonts and finally Pillow's bundled default font.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
import logging
import os

from PIL import ImageFont

from prizewheel.graphics.text_layout import Measure

logger = logging.getLogger(__name__)

# Heavy sans faces, closest first
SYSTEM_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
    "C:/Windows/Fonts/segoeuib.ttf",
]

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


@lru_cache(maxsize=None)
def resolve_font_path(preferred: Optional[str] = None) -> Optional[str]:
    """Pick the first usable font file, or None for Pillow's default."""
    candidates = [preferred] if preferred else []
    candidates += SYSTEM_FONT_PATHS
    for path in candidates:
        if path and os.path.exists(path):
            logger.info(f"Using font: {path}")
            return path
    logger.warning("No TrueType font found, using Pillow default")
    return None


@lru_cache(maxsize=256)
def load_font(size: int, path: Optional[str] = None) -> Font:
    """Load a font at a pixel size.

    Args:
        size: Font size in pixels (clamped to at least 1)
        path: TrueType file; system search when None
    """
    size = max(1, int(size))
    font_path = resolve_font_path(path)
    if font_path is not None:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            logger.warning(f"Font {font_path} failed: {e}")
    return ImageFont.load_default(size=size)


def text_width(font: Font, text: str) -> float:
    """Advance width of ``text`` in pixels."""
    if not text:
        return 0.0
    return float(font.getlength(text))


class FontSet:
    """Fonts for one configured face, with measurement helpers."""

    def __init__(self, path: Optional[str | Path] = None) -> None:
        self.path = str(path) if path else None

    def get(self, size: int) -> Font:
        return load_font(size, self.path)

    def measure_for(self, size: int) -> Measure:
        """Width function bound to one font size."""
        font = self.get(size)
        return lambda text: text_width(font, text)
