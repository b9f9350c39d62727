import logging
import shutil
import subprocess
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from asciiramp.model import FontError

logger = logging.getLogger(__name__)

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
    "/Library/Fonts/Courier New.ttf",
    "/System/Library/Fonts/Supplemental/Courier New.ttf",
    "C:/Windows/Fonts/cour.ttf",
]


@lru_cache(maxsize=1)
def find_monospace_font() -> str | None:
    """Locate a monospace TrueType font, asking fontconfig if no known path exists."""
    for path in FONT_CANDIDATES:
        if Path(path).exists():
            return path
    if shutil.which("fc-match"):
        result = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    return None


def load_font(font_size: int, font_path: str | Path | None = None) -> ImageFont.FreeTypeFont:
    """Load a monospace font at the given pixel size.

    Without an explicit path, falls back to a system monospace font and then to
    Pillow's bundled default font.
    """
    if font_size < 1:
        raise ValueError(f"Font size must be at least 1, got {font_size}")

    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), font_size)
        except OSError as e:
            raise FontError(f"Could not load font {font_path}: {e}") from e

    system_font = find_monospace_font()
    if system_font is not None:
        logger.debug("Using system font %s", system_font)
        return ImageFont.truetype(system_font, font_size)

    logger.debug("No monospace font found, using Pillow's default font")
    return ImageFont.load_default(size=font_size)
