import numbers
from dataclasses import dataclass
from enum import Enum

import numpy as np

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


class ColourValueError(ValueError):
    pass


class RampError(ValueError):
    pass


class ImageLoadError(OSError):
    pass


class FontError(OSError):
    pass


@dataclass(frozen=True, slots=True)
class RGB:
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
                raise ColourValueError(f"{name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ColourValueError(f"{name} value must be between 0 and 255, got {value}")
            # numpy integers are stored as plain ints
            object.__setattr__(self, name, int(value))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


# Row-major, [row][col]
PixelGrid = tuple[tuple[RGB, ...], ...]
AsciiGrid = tuple[tuple[str, ...], ...]


class LuminanceModel(Enum):
    """Formula used to reduce an RGB pixel to a single brightness value."""

    RELATIVE = "relative"  # https://en.wikipedia.org/wiki/Relative_luminance
    PERCEIVED_1 = "perceived1"  # https://www.w3.org/TR/AERT/#color-contrast
    PERCEIVED_2 = "perceived2"  # https://alienryderflex.com/hsp.html


class RenderMode(Enum):
    """Background and glyph colour policy for raster output."""

    GREYSCALE = "greyscale"
    GREYSCALE_INVERTED = "greyscale-inverted"
    COLOUR = "colour"
    COLOUR_INVERTED_BACKGROUND = "colour-inverted-background"

    @property
    def background(self) -> tuple[int, int, int]:
        if self in (RenderMode.GREYSCALE_INVERTED, RenderMode.COLOUR_INVERTED_BACKGROUND):
            return BLACK
        return WHITE

    @property
    def foreground(self) -> tuple[int, int, int]:
        """Default glyph colour, used when glyphs are not coloured per pixel."""
        if self is RenderMode.GREYSCALE_INVERTED:
            return WHITE
        return BLACK

    @property
    def is_colour(self) -> bool:
        return self in (RenderMode.COLOUR, RenderMode.COLOUR_INVERTED_BACKGROUND)
