import pytest
from PIL import Image

from asciiramp.fonts import find_monospace_font

FONT_PATH = find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


@pytest.fixture
def checkerboard():
    """2x2 image: black, white on the first row, white, black on the second."""
    img = Image.new("RGB", (2, 2))
    pixels = img.load()
    pixels[0, 0] = (0, 0, 0)
    pixels[1, 0] = (255, 255, 255)
    pixels[0, 1] = (255, 255, 255)
    pixels[1, 1] = (0, 0, 0)
    return img


@pytest.fixture
def checkerboard_file(tmp_path, checkerboard):
    path = tmp_path / "checker.png"
    checkerboard.save(path)
    return path
