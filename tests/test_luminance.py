import numpy as np
import pytest

from asciiramp.luminance import (
    build_ascii_grid,
    luminance,
    luminance_array,
    ramp_index,
    rescale,
    to_glyph,
)
from asciiramp.model import RGB, LuminanceModel, RampError

BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


@pytest.mark.parametrize("model", list(LuminanceModel))
def test_black_and_white_span_unit_range(model):
    assert luminance(BLACK, model) == pytest.approx(0.0)
    assert luminance(WHITE, model) == pytest.approx(1.0)


def test_default_model_is_relative():
    assert luminance(RGB(255, 0, 0)) == pytest.approx(0.2126)


@pytest.mark.parametrize(
    "model, rgb, expected",
    [
        (LuminanceModel.RELATIVE, RGB(0, 255, 0), 0.7152),
        (LuminanceModel.RELATIVE, RGB(0, 0, 255), 0.0722),
        (LuminanceModel.PERCEIVED_1, RGB(255, 0, 0), 0.299),
        (LuminanceModel.PERCEIVED_1, RGB(0, 255, 0), 0.587),
        (LuminanceModel.PERCEIVED_2, RGB(0, 0, 255), 0.114**0.5),
        (LuminanceModel.PERCEIVED_2, RGB(51, 51, 51), 0.2),
    ],
)
def test_known_values(model, rgb, expected):
    assert luminance(rgb, model) == pytest.approx(expected)


@pytest.mark.parametrize("model", list(LuminanceModel))
@pytest.mark.parametrize("channel", [0, 1, 2])
def test_monotonic_in_each_channel(model, channel):
    for base in [(0, 0, 0), (30, 200, 90), (255, 255, 255), (128, 0, 255)]:
        previous = -1.0
        for value in range(0, 256, 5):
            channels = list(base)
            channels[channel] = value
            current = luminance(RGB(*channels), model)
            assert current >= previous
            previous = current


@pytest.mark.parametrize("model", list(LuminanceModel))
def test_array_matches_scalar(model):
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)
    result = luminance_array(arr, model)
    assert result.shape == (4, 5)
    for y in range(4):
        for x in range(5):
            rgb = RGB(*(int(v) for v in arr[y, x]))
            assert result[y, x] == pytest.approx(luminance(rgb, model))


def test_rescale_linear():
    assert rescale(0.5, 0, 1, 0, 10) == pytest.approx(5.0)
    assert rescale(15, 10, 20, 100, 200) == pytest.approx(150.0)


@pytest.mark.parametrize("length", range(1, 12))
def test_ramp_index_endpoints(length):
    assert ramp_index(0.0, length) == 0
    assert ramp_index(1.0, length) == length - 1


def test_single_character_ramp_always_selected():
    for value in (0.0, 0.3, 0.5, 1.0):
        assert ramp_index(value, 1) == 0


def test_ramp_index_clamps_overshoot():
    assert ramp_index(1.0000001, 4) == 3
    assert ramp_index(7.0, 4) == 3
    assert ramp_index(-0.2, 4) == 0


def test_ramp_index_rounds_half_up():
    assert ramp_index(0.5, 2) == 1
    assert ramp_index(0.49, 2) == 0


def test_ramp_index_array():
    result = ramp_index(np.array([[0.0, 0.5], [1.0, 1.2]]), 3)
    np.testing.assert_array_equal(result, [[0, 1], [2, 2]])


def test_to_glyph_ends_of_ramp():
    assert to_glyph(BLACK, "@%#") == "@"
    assert to_glyph(WHITE, "@%#") == "#"


def test_to_glyph_empty_ramp():
    with pytest.raises(RampError):
        to_glyph(BLACK, "")


def test_checkerboard_two_character_ramp():
    pixels = ((BLACK, WHITE), (WHITE, BLACK))
    assert build_ascii_grid(pixels, "@ ", LuminanceModel.RELATIVE) == (("@", " "), (" ", "@"))


def test_ascii_grid_matches_pixel_shape():
    pixels = tuple(tuple(RGB(x * 40, y * 40, 0) for x in range(5)) for y in range(3))
    grid = build_ascii_grid(pixels, "abc")
    assert len(grid) == 3
    assert all(len(row) == 5 for row in grid)
    assert all(ch in "abc" for row in grid for ch in row)


def test_ascii_grid_agrees_with_to_glyph():
    pixels = ((RGB(10, 200, 30), RGB(90, 90, 90), RGB(250, 0, 120)),)
    ramp = "$@B%8&WM#*oahkb"
    for model in LuminanceModel:
        grid = build_ascii_grid(pixels, ramp, model)
        assert grid[0] == tuple(to_glyph(p, ramp, model) for p in pixels[0])


def test_empty_ramp_rejected_before_mapping():
    with pytest.raises(RampError):
        build_ascii_grid((), "")


def test_empty_pixel_grid():
    assert build_ascii_grid((), "@ ") == ()
