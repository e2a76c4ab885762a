"""Utility functions for color parsing and image/array conversion.

AIDEV-NOTE: This module contains helpers shared by the filter chain, the
tile generator and the compositor. Bitmaps are Pillow RGBA images; working
buffers are float64 numpy arrays with values in 0-255.
"""

import numpy as np
from PIL import Image


def hex_to_rgb(value: str) -> "tuple[int, int, int]":
    """Parse a '#rrggbb' (or 'rrggbb') color string.

    Args:
        value: Hex color string

    Returns:
        RGB tuple (0-255 each channel)

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    digits = value.strip().lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(color: "tuple[int, int, int]") -> str:
    """Format an RGB tuple as '#rrggbb'."""
    r, g, b = (max(0, min(255, int(c))) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


def ensure_rgba(image: Image.Image) -> Image.Image:
    """Return the image in RGBA mode, converting if needed."""
    if image.mode != "RGBA":
        return image.convert("RGBA")
    return image


def image_to_array(image: Image.Image) -> np.ndarray:
    """Copy an image into a float64 (H, W, 4) working buffer."""
    return np.array(ensure_rgba(image), dtype=np.float64)


def array_to_image(array: np.ndarray) -> Image.Image:
    """Round and clamp a working buffer back into an RGBA image."""
    out = np.clip(np.rint(array), 0, 255).astype(np.uint8)
    return Image.fromarray(out)
