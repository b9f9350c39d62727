import logging
import os
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from asciiramp.fonts import load_font
from asciiramp.model import AsciiGrid, PixelGrid, RenderMode

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 3


def grid_to_strings(grid: AsciiGrid) -> list[str]:
    return ["".join(row) for row in grid]


def render_text(grid: AsciiGrid) -> list[str]:
    """One line per grid row, each ending with the platform line separator."""
    return [line + os.linesep for line in grid_to_strings(grid)]


def write_text(grid: AsciiGrid, path: str | Path) -> None:
    path = Path(path)
    # newline="" keeps os.linesep exactly as rendered
    with path.open("w", encoding="utf-8", newline="") as f:
        f.writelines(render_text(grid))


def measure(font: ImageFont.FreeTypeFont) -> tuple[int, int, int]:
    """Return (char_width, line_height, pad) for a monospace font.

    The pad widens each cell to the line height so glyph cells come out square
    and the picture keeps the source's aspect ratio.
    """
    # Monospace, so any single character gives the advance of all of them
    char_width = round(font.getlength("1"))
    ascent, descent = font.getmetrics()
    line_height = ascent + descent
    return char_width, line_height, line_height - char_width


def _check_colour_source(grid: AsciiGrid, pixels: PixelGrid | None) -> None:
    if pixels is None:
        raise ValueError("Colour modes need the pixel grid the ascii grid was built from")
    if len(pixels) < len(grid) or any(len(p) < len(g) for p, g in zip(pixels, grid)):
        raise ValueError("Pixel grid is smaller than the ascii grid")


def render_image(
    grid: AsciiGrid,
    pixels: PixelGrid | None = None,
    font_size: int = DEFAULT_FONT_SIZE,
    mode: RenderMode = RenderMode.GREYSCALE,
    font: ImageFont.FreeTypeFont | str | Path | None = None,
) -> Image.Image:
    """Draw an ascii grid onto a new RGB image with a monospace font.

    Canvas size comes from the font metrics and the grid shape only. In the
    colour modes each glyph takes the colour of the pixel at its position in
    ``pixels``.
    """
    if not grid or not grid[0]:
        raise ValueError("Cannot render an empty ascii grid")
    if mode.is_colour:
        _check_colour_source(grid, pixels)
    if not isinstance(font, ImageFont.FreeTypeFont):
        font = load_font(font_size, font)

    lines = grid_to_strings(grid)
    char_width, line_height, pad = measure(font)

    first = lines[0]
    width = max(1, len(first) * (char_width + pad))
    height = max(1, line_height * len(lines))
    logger.debug("Rendering %d rows x %d cols onto %dx%d canvas", len(lines), len(first), width, height)

    img = Image.new("RGB", (width, height), mode.background)
    draw = ImageDraw.Draw(img)
    draw.fontmode = "L"  # anti-aliased glyphs

    colour = mode.foreground
    y = 0
    for r, row in enumerate(grid):
        x = 0
        for c, char in enumerate(row):
            if mode.is_colour:
                colour = pixels[r][c].as_tuple()
            draw.text((x, y), char, fill=colour, font=font)
            x += char_width + pad
        y += line_height

    return img
