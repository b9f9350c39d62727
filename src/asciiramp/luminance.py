import numpy as np

from asciiramp.charsets import check_ramp
from asciiramp.model import RGB, AsciiGrid, LuminanceModel, PixelGrid
from asciiramp.sampling import grid_to_array

# Weights for the linear models, as (red, green, blue)
RELATIVE_WEIGHTS = (0.2126, 0.7152, 0.0722)
PERCEIVED_WEIGHTS = (0.299, 0.587, 0.114)


def _weigh(r, g, b, model: LuminanceModel):
    """Apply a luminance formula to channels already normalised to 0-1.

    Works on python floats and on numpy arrays alike.
    """
    if model is LuminanceModel.RELATIVE:
        wr, wg, wb = RELATIVE_WEIGHTS
        return wr * r + wg * g + wb * b
    if model is LuminanceModel.PERCEIVED_1:
        wr, wg, wb = PERCEIVED_WEIGHTS
        return wr * r + wg * g + wb * b
    if model is LuminanceModel.PERCEIVED_2:
        wr, wg, wb = PERCEIVED_WEIGHTS
        return np.sqrt(wr * r**2 + wg * g**2 + wb * b**2)
    raise ValueError(f"Unknown luminance model: {model!r}")


def luminance(rgb: RGB, model: LuminanceModel = LuminanceModel.RELATIVE) -> float:
    return float(_weigh(rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0, model))


def luminance_array(pixels: np.ndarray, model: LuminanceModel = LuminanceModel.RELATIVE) -> np.ndarray:
    """Luminance of every pixel in a (..., 3) array. Returns float64 of shape (...)."""
    norm = np.asarray(pixels, dtype=np.float64) / 255.0
    return _weigh(norm[..., 0], norm[..., 1], norm[..., 2], model)


def rescale(value, in_low: float, in_high: float, out_low: float, out_high: float):
    return (value - in_low) / (in_high - in_low) * (out_high - out_low) + out_low


def _round_half_up(value):
    return np.floor(np.asarray(value, dtype=np.float64) + 0.5)


def ramp_index(value, length: int):
    """Map luminance in [0, 1] to an index into a ramp of the given length.

    Rounds half up and clamps, so floating point overshoot never leaves the ramp.
    Accepts a scalar or a numpy array.
    """
    scaled = rescale(value, 0.0, 1.0, 0.0, length - 1)
    indices = np.clip(_round_half_up(scaled), 0, length - 1).astype(np.intp)
    if indices.ndim == 0:
        return int(indices)
    return indices


def to_glyph(rgb: RGB, ramp: str, model: LuminanceModel = LuminanceModel.RELATIVE) -> str:
    ramp = check_ramp(ramp)
    return ramp[ramp_index(luminance(rgb, model), len(ramp))]


def build_ascii_grid(
    pixels: PixelGrid,
    ramp: str,
    model: LuminanceModel = LuminanceModel.RELATIVE,
) -> AsciiGrid:
    """Replace each pixel with the ramp character matching its luminance."""
    ramp = check_ramp(ramp)
    if not pixels:
        return ()
    indices = ramp_index(luminance_array(grid_to_array(pixels), model), len(ramp))
    chars = np.array(list(ramp))
    return tuple(tuple(row) for row in chars[indices].tolist())
