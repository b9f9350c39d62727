import logging
import math
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from asciiramp.model import RGB, ImageLoadError, PixelGrid

logger = logging.getLogger(__name__)

MIN_SCALE = 0.1


def load_image(source: Image.Image | str | Path | BinaryIO) -> Image.Image:
    """Decode an image and convert it to RGB.

    Accepts an already decoded image, a path, or a binary file object.
    Codec failures are raised as ImageLoadError.
    """
    if isinstance(source, Image.Image):
        image = source
    else:
        try:
            image = Image.open(source)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(f"Could not decode image {source!r}: {e}") from e
    if image.mode != "RGB":
        image = image.convert("RGB")
    return image


def clamp_scale(scale: float) -> float:
    """Clamp a scale factor into (0, 1]. Non-positive values become MIN_SCALE."""
    if not math.isfinite(scale):
        raise ValueError(f"Scale must be a finite number, got {scale}")
    if scale > 1:
        return 1.0
    if scale <= 0:
        return MIN_SCALE
    return float(scale)


def scale_image(image: Image.Image, scale: float = 1.0) -> Image.Image:
    s = clamp_scale(scale)
    if s == 1.0:
        return image

    new_width = max(1, math.floor(image.width * s))
    new_height = max(1, math.floor(image.height * s))
    logger.debug("Scaling %dx%d by %.3f to %dx%d", image.width, image.height, s, new_width, new_height)
    return image.resize((new_width, new_height), Image.LANCZOS)


def sample_pixels(image: Image.Image) -> PixelGrid:
    """Read every pixel of an image into a row-major grid of RGB values."""
    arr = np.asarray(image.convert("RGB"), dtype=np.uint8)
    # arr is (height, width, 3), so arr[y][x] is the pixel at column x of row y
    return tuple(tuple(RGB(r, g, b) for r, g, b in row) for row in arr.tolist())


def build_pixel_grid(image: Image.Image | str | Path | BinaryIO, scale: float = 1.0) -> PixelGrid:
    return sample_pixels(scale_image(load_image(image), scale))


def grid_to_array(pixels: PixelGrid) -> np.ndarray:
    """Pack a pixel grid into a (rows, cols, 3) uint8 array."""
    if not pixels:
        return np.zeros((0, 0, 3), dtype=np.uint8)
    return np.array([[p.as_tuple() for p in row] for row in pixels], dtype=np.uint8).reshape(
        len(pixels), len(pixels[0]), 3
    )
