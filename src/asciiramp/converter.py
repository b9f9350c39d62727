import logging
import threading
from pathlib import Path
from typing import BinaryIO

from PIL import Image, ImageFont

from asciiramp import charsets
from asciiramp.luminance import build_ascii_grid
from asciiramp.model import AsciiGrid, LuminanceModel, PixelGrid, RenderMode
from asciiramp.render import DEFAULT_FONT_SIZE, render_image, render_text, write_text
from asciiramp.sampling import load_image, sample_pixels, scale_image

logger = logging.getLogger(__name__)


class AsciiConverter:
    """Turns one source image into ascii text or ascii-art images.

    The image is loaded and scaled once. Its pixel grid is read on first use and
    shared by every later conversion, so many ramp, luminance and mode
    combinations can be rendered (also from several threads) for the cost of a
    single scan.
    """

    def __init__(self, image: Image.Image | str | Path | BinaryIO, scale: float = 1.0):
        self.image = scale_image(load_image(image), scale)
        self._pixels: PixelGrid | None = None
        self._lock = threading.Lock()

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def pixels(self) -> PixelGrid:
        if self._pixels is None:
            with self._lock:
                if self._pixels is None:
                    logger.debug("Sampling %dx%d pixel grid", self.width, self.height)
                    self._pixels = sample_pixels(self.image)
        return self._pixels

    def ascii_grid(
        self,
        ramp: str = charsets.SIMPLE,
        luminance: LuminanceModel = LuminanceModel.RELATIVE,
    ) -> AsciiGrid:
        return build_ascii_grid(self.pixels, ramp, luminance)

    def text(
        self,
        ramp: str = charsets.SIMPLE,
        luminance: LuminanceModel = LuminanceModel.RELATIVE,
    ) -> list[str]:
        return render_text(self.ascii_grid(ramp, luminance))

    def write_text(
        self,
        path: str | Path,
        ramp: str = charsets.SIMPLE,
        luminance: LuminanceModel = LuminanceModel.RELATIVE,
    ) -> None:
        write_text(self.ascii_grid(ramp, luminance), path)

    def render_image(
        self,
        ramp: str = charsets.SIMPLE,
        font_size: int = DEFAULT_FONT_SIZE,
        mode: RenderMode = RenderMode.GREYSCALE,
        luminance: LuminanceModel = LuminanceModel.RELATIVE,
        font: ImageFont.FreeTypeFont | str | Path | None = None,
    ) -> Image.Image:
        return render_image(self.ascii_grid(ramp, luminance), self.pixels, font_size, mode, font)
