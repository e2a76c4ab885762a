import numpy as np
import pytest
from PIL import Image

from tileposter.image_processing.filters import (
    PixelFilterChain,
    add_grain,
    apply_filters,
    boost_contrast,
    desaturate,
    multiply_blend,
)
from tileposter.models import BACKGROUND_COLOR, FilterParameters


def _buffer(*rgba):
    return np.array([[rgba]], dtype=np.float64)


def test_grayscale_uses_luma_weights():
    pixels = _buffer(255.0, 0.0, 0.0, 200.0)
    desaturate(pixels, grayscale=True)
    assert pixels[0, 0] == pytest.approx([0.299 * 255] * 3 + [200.0])


def test_partial_desaturation_keeps_hue():
    pixels = _buffer(255.0, 0.0, 0.0, 255.0)
    desaturate(pixels, grayscale=False)
    assert pixels[0, 0, :3] == pytest.approx([191.25, 63.75, 63.75])


def test_grain_zero_is_a_no_op(rng):
    pixels = _buffer(10.0, 20.0, 30.0, 40.0)
    before = pixels.copy()
    add_grain(pixels, 0.0, rng)
    assert np.array_equal(pixels, before)


def test_grain_stays_within_amplitude_and_range(rng):
    pixels = np.full((50, 50, 4), 128.0)
    pixels[:25] = 250.0
    add_grain(pixels, 15.0, rng)

    rgb = pixels[..., :3]
    assert rgb.min() >= 0 and rgb.max() <= 255
    assert np.all(np.abs(rgb[25:] - 128.0) <= 15.0)
    assert np.all(pixels[..., 3][25:] == 128.0)
    # Channels are drawn independently
    assert not np.array_equal(rgb[25:, :, 0], rgb[25:, :, 1])


def test_contrast_factor_one_is_identity():
    pixels = _buffer(12.0, 128.0, 240.0, 255.0)
    boost_contrast(pixels, 1.0)
    assert pixels[0, 0] == pytest.approx([12.0, 128.0, 240.0, 255.0])


def test_high_contrast_clamps():
    pixels = _buffer(0.0, 100.0, 200.0, 9.0)
    boost_contrast(pixels, 10.0)
    assert pixels[0, 0] == pytest.approx([0.0, 0.0, 255.0, 9.0])


def test_multiply_blend():
    pixels = _buffer(255.0, 128.0, 0.0, 50.0)
    multiply_blend(pixels, (255, 127.5, 10))
    assert pixels[0, 0] == pytest.approx([255.0, 64.0, 0.0, 50.0])


@pytest.mark.parametrize(
    "params",
    [
        FilterParameters(contrast_factor=1.0, grain_amplitude=0.0),
        FilterParameters(),
    ],
)
def test_white_image_becomes_tint(white_image, rng, params):
    result = apply_filters(white_image, params, rng)

    assert result.size == white_image.size
    assert result.mode == "RGBA"
    expected = np.array(BACKGROUND_COLOR + (255,), dtype=np.uint8)
    assert np.all(np.asarray(result) == expected)


def test_alpha_is_untouched(photo, rng):
    params = FilterParameters(grayscale_enabled=False, grain_amplitude=30.0)
    result = apply_filters(photo, params, rng)
    assert np.array_equal(np.asarray(result)[..., 3], np.asarray(photo)[..., 3])


def test_input_image_is_not_modified(photo, rng):
    before = np.asarray(photo).copy()
    apply_filters(photo, FilterParameters(), rng)
    assert np.array_equal(np.asarray(photo), before)


def test_zero_size_image(rng):
    empty = Image.new("RGBA", (0, 0))
    result = apply_filters(empty, FilterParameters(), rng)
    assert result.size == (0, 0)


def test_rgb_input_is_converted(rng):
    image = Image.new("RGB", (4, 4), (255, 255, 255))
    result = apply_filters(image, FilterParameters(grain_amplitude=0), rng)
    assert result.mode == "RGBA"
    assert result.getpixel((0, 0)) == BACKGROUND_COLOR + (255,)


def test_same_seed_gives_same_result(photo):
    params = FilterParameters(grain_amplitude=20)
    first = PixelFilterChain(np.random.default_rng(7)).apply(photo, params)
    second = PixelFilterChain(np.random.default_rng(7)).apply(photo, params)
    assert np.array_equal(np.asarray(first), np.asarray(second))
