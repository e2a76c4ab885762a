"""Stylized per-pixel filter chain.

AIDEV-NOTE: Stage order is part of the look and must not change:
desaturate -> grain -> contrast -> multiply tint. Each stage works on an
(H, W, 4) float64 buffer in 0-255 and leaves the alpha channel alone.
Stages mutate the working buffer in place; apply_filters() owns that
buffer, so callers never see their input image modified.
"""

import logging

import numpy as np
from PIL import Image

from tileposter.models import SATURATION_REDUCTION, FilterParameters

from .color_space import reduce_saturation
from .utils import array_to_image, ensure_rgba, image_to_array

logger = logging.getLogger(__name__)

# Rec.601 luma weights (sum to 1.0 so white stays white)
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def desaturate(
    pixels: np.ndarray, grayscale: bool, amount: float = SATURATION_REDUCTION
) -> np.ndarray:
    """Convert to gray, or partially desaturate through HSL.

    Args:
        pixels: Working buffer (H, W, 4), modified in place
        grayscale: Full luma grayscale if True, otherwise reduce
            saturation by `amount`
        amount: Fraction of saturation removed when grayscale is off

    Returns:
        The same buffer, for chaining
    """
    rgb = pixels[..., :3]
    if grayscale:
        gray = rgb @ LUMA_WEIGHTS
        rgb[...] = gray[..., None]
    else:
        rgb[...] = reduce_saturation(rgb, amount)
    return pixels


def add_grain(
    pixels: np.ndarray, amplitude: float, rng: np.random.Generator
) -> np.ndarray:
    """Add uniform film grain, drawn independently per channel and pixel.

    Args:
        pixels: Working buffer (H, W, 4), modified in place
        amplitude: Noise is uniform in [-amplitude, +amplitude]
        rng: Random source

    Returns:
        The same buffer, for chaining
    """
    if amplitude == 0:
        return pixels
    noise = rng.uniform(-amplitude, amplitude, size=pixels.shape[:2] + (3,))
    rgb = pixels[..., :3]
    rgb += noise
    np.clip(rgb, 0, 255, out=rgb)
    return pixels


def boost_contrast(pixels: np.ndarray, factor: float) -> np.ndarray:
    """Stretch each channel around mid-gray and clamp to 0-255."""
    rgb = pixels[..., :3]
    rgb[...] = ((rgb / 255.0 - 0.5) * factor + 0.5) * 255.0
    np.clip(rgb, 0, 255, out=rgb)
    return pixels


def multiply_blend(pixels: np.ndarray, color: "tuple[int, int, int]") -> np.ndarray:
    """Multiply blend against a solid color: (source * color) / 255."""
    pixels[..., :3] *= np.asarray(color, dtype=np.float64) / 255.0
    return pixels


def apply_filters(
    image: Image.Image,
    params: FilterParameters,
    rng: np.random.Generator,
) -> Image.Image:
    """Run the full filter chain on an image.

    Args:
        image: Source image (any mode, converted to RGBA)
        params: Filter settings
        rng: Random source for the grain stage

    Returns:
        New RGBA image with the same dimensions
    """
    image = ensure_rgba(image)
    if image.width == 0 or image.height == 0:
        return image.copy()

    pixels = image_to_array(image)
    desaturate(pixels, params.grayscale_enabled)
    add_grain(pixels, params.grain_amplitude, rng)
    boost_contrast(pixels, params.contrast_factor)
    multiply_blend(pixels, params.tint_color)

    logger.debug(
        "Filtered %dx%d image (grayscale=%s, contrast=%.2f, grain=%.1f)",
        image.width,
        image.height,
        params.grayscale_enabled,
        params.contrast_factor,
        params.grain_amplitude,
    )
    return array_to_image(pixels)


class PixelFilterChain:
    """Applies the filter stages with a fixed random source."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng or np.random.default_rng()

    def apply(self, image: Image.Image, params: FilterParameters) -> Image.Image:
        """Filter an image; see apply_filters()."""
        return apply_filters(image, params, self.rng)
