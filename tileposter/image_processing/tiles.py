"""Procedural tile pattern generation.

AIDEV-NOTE: Cells are visited top-to-bottom, left-to-right, and every cell
consumes one placement draw from the random source. With clustering on, a
cell whose left or upper neighbor was placed gets CLUSTER_BONUS added to its
probability. Only left/up neighbors count, so clusters grow toward the
lower right.
"""

import logging
import math

import numpy as np
from PIL import Image, ImageDraw

from tileposter.models import (
    CIRCLE_DIAMETER_RATIO,
    CLUSTER_BONUS,
    PlacedTile,
    TileGridParameters,
    TileOverlay,
    TileShape,
)

logger = logging.getLogger(__name__)


def grid_dimensions(width: int, height: int, tile_size: int) -> "tuple[int, int]":
    """Number of (columns, rows) needed to cover the canvas."""
    return math.ceil(width / tile_size), math.ceil(height / tile_size)


def generate_tiles(
    width: int,
    height: int,
    params: TileGridParameters,
    rng: np.random.Generator,
) -> TileOverlay:
    """Place colored shapes on a grid covering the canvas.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels
        params: Tile grid settings
        rng: Random source (same seed -> same overlay)

    Returns:
        TileOverlay with the placed tiles in row-major order
    """
    tile_size = params.tile_size
    cols, rows = grid_dimensions(width, height, tile_size)

    # Center the grid vertically; the last row may hang off both edges
    offset_y = (height - rows * tile_size) / 2

    max_offset = tile_size * params.variation_percent / 100.0
    placed = np.zeros((rows, cols), dtype=bool)
    tiles = []

    for y in range(rows):
        for x in range(cols):
            probability = params.density
            if params.clustering_enabled:
                left = x > 0 and placed[y, x - 1]
                above = y > 0 and placed[y - 1, x]
                if left or above:
                    probability += CLUSTER_BONUS

            if rng.random() >= probability:
                continue

            placed[y, x] = True
            color = params.palette[int(rng.integers(len(params.palette)))]
            size_offset = rng.uniform(-max_offset, max_offset)
            size = max(0.0, tile_size + size_offset)
            if params.shape == TileShape.CIRCLE:
                size *= CIRCLE_DIAMETER_RATIO

            tiles.append(
                PlacedTile(
                    grid_x=x,
                    grid_y=y,
                    size=size,
                    color=color,
                    shape=params.shape,
                    center_x=x * tile_size + tile_size / 2,
                    center_y=offset_y + y * tile_size + tile_size / 2,
                )
            )

    logger.info("Generated %d tiles on a %dx%d grid", len(tiles), cols, rows)
    return TileOverlay(
        width=width,
        height=height,
        tile_size=tile_size,
        offset_y=offset_y,
        tiles=tuple(tiles),
    )


def render_tile_layer(overlay: TileOverlay) -> Image.Image:
    """Draw an overlay as opaque shapes on a transparent RGBA layer.

    Args:
        overlay: Tiles to draw

    Returns:
        RGBA image of the overlay's canvas size
    """
    layer = Image.new("RGBA", (overlay.width, overlay.height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)

    for tile in overlay:
        if tile.size <= 0:
            continue
        half = tile.size / 2
        box = (
            tile.center_x - half,
            tile.center_y - half,
            tile.center_x + half,
            tile.center_y + half,
        )
        fill = tile.color + (255,)
        if tile.shape == TileShape.CIRCLE:
            draw.ellipse(box, fill=fill)
        else:
            draw.rectangle(box, fill=fill)

    return layer


class TilePatternGenerator:
    """Generates tile overlays from a fixed random source."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng or np.random.default_rng()

    def generate(
        self, width: int, height: int, params: TileGridParameters
    ) -> TileOverlay:
        """Generate a fresh overlay; see generate_tiles()."""
        return generate_tiles(width, height, params, self.rng)
