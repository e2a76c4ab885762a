"""RGB <-> HSL conversion used for saturation adjustment.

AIDEV-NOTE: Scalar functions take/return 0-255 RGB and 0-1 HSL. The array
versions apply the same formulas to (..., 3) buffers so the filter chain can
convert a whole image at once.
"""

import numpy as np


def rgb_to_hsl(r: float, g: float, b: float) -> "tuple[float, float, float]":
    """Convert an RGB color (0-255 channels) to HSL (each 0-1).

    Args:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)

    Returns:
        Tuple of (hue, saturation, lightness), each in [0, 1]
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        # Achromatic
        return 0.0, 0.0, lightness

    d = high - low
    if lightness > 0.5:
        saturation = d / (2 - high - low)
    else:
        saturation = d / (high + low)

    if high == r:
        hue = (g - b) / d + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4

    return hue / 6, saturation, lightness


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> "tuple[float, float, float]":
    """Convert an HSL color (each 0-1) back to RGB (0-255 floats).

    Args:
        h: Hue (0-1)
        s: Saturation (0-1)
        l: Lightness (0-1)

    Returns:
        Tuple of (r, g, b) floats in [0, 255]
    """
    if s == 0:
        return l * 255.0, l * 255.0, l * 255.0

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return (
        _hue_to_channel(p, q, h + 1 / 3) * 255.0,
        _hue_to_channel(p, q, h) * 255.0,
        _hue_to_channel(p, q, h - 1 / 3) * 255.0,
    )


def rgb_to_hsl_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorized rgb_to_hsl for an (..., 3) array of 0-255 values.

    Returns:
        Array of the same shape holding (h, s, l) in [0, 1]
    """
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    high = rgb.max(axis=-1)
    low = rgb.min(axis=-1)
    d = high - low
    lightness = (high + low) / 2

    chromatic = d > 0
    safe_d = np.where(chromatic, d, 1.0)

    denom = np.where(lightness > 0.5, 2 - high - low, high + low)
    saturation = np.where(chromatic, d / np.where(chromatic, denom, 1.0), 0.0)

    # AIDEV-NOTE: Branch order matches the scalar version (r, then g, then b)
    # so ties between max channels resolve the same way.
    hue_r = (g - b) / safe_d + np.where(g < b, 6.0, 0.0)
    hue_g = (b - r) / safe_d + 2
    hue_b = (r - g) / safe_d + 4
    hue = np.where(high == r, hue_r, np.where(high == g, hue_g, hue_b))
    hue = np.where(chromatic, hue / 6, 0.0)

    return np.stack([hue, saturation, lightness], axis=-1)


def _hue_to_channel_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1, t)
    t = np.where(t > 1, t - 1, t)
    return np.select(
        [t < 1 / 6, t < 1 / 2, t < 2 / 3],
        [p + (q - p) * 6 * t, q, p + (q - p) * (2 / 3 - t) * 6],
        default=p,
    )


def hsl_to_rgb_array(hsl: np.ndarray) -> np.ndarray:
    """Vectorized hsl_to_rgb for an (..., 3) array of 0-1 values.

    Returns:
        Array of the same shape holding RGB floats in [0, 255]
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h, s, l = hsl[..., 0], hsl[..., 1], hsl[..., 2]

    q = np.where(l < 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q

    rgb = np.stack(
        [
            _hue_to_channel_array(p, q, h + 1 / 3),
            _hue_to_channel_array(p, q, h),
            _hue_to_channel_array(p, q, h - 1 / 3),
        ],
        axis=-1,
    )
    # Achromatic pixels are plain gray
    rgb = np.where((s == 0)[..., None], l[..., None], rgb)
    return rgb * 255.0


def reduce_saturation(rgb: np.ndarray, amount: float) -> np.ndarray:
    """Scale saturation of an (..., 3) RGB array down by `amount`.

    Args:
        rgb: RGB values (0-255)
        amount: 0 = no change, 1 = fully desaturated

    Returns:
        New RGB array (0-255 floats)
    """
    hsl = rgb_to_hsl_array(rgb)
    hsl[..., 1] *= 1.0 - amount
    return hsl_to_rgb_array(hsl)
