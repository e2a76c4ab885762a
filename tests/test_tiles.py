import numpy as np
import pytest

from tileposter.image_processing.tiles import (
    TilePatternGenerator,
    generate_tiles,
    grid_dimensions,
    render_tile_layer,
)
from tileposter.models import (
    DEFAULT_PALETTE,
    PlacedTile,
    TileGridParameters,
    TileOverlay,
    TileShape,
)


def test_grid_dimensions_round_up():
    assert grid_dimensions(1200, 628, 100) == (12, 7)
    assert grid_dimensions(1200, 600, 100) == (12, 6)
    assert grid_dimensions(5, 5, 100) == (1, 1)


def test_grid_is_centered_vertically(rng):
    overlay = generate_tiles(1200, 628, TileGridParameters(density=1.0), rng)

    assert overlay.offset_y == pytest.approx(-36.0)
    first = overlay.tiles[0]
    assert (first.center_x, first.center_y) == pytest.approx((50.0, 14.0))


def test_density_zero_places_nothing(rng):
    params = TileGridParameters(density=0.0, clustering_enabled=True)
    assert len(generate_tiles(1200, 628, params, rng)) == 0


def test_density_one_fills_every_cell(rng):
    overlay = generate_tiles(1200, 628, TileGridParameters(density=1.0), rng)
    assert len(overlay) == 12 * 7


def test_tiles_are_in_row_major_order(rng):
    overlay = generate_tiles(1200, 628, TileGridParameters(density=0.5), rng)
    cells = [(tile.grid_y, tile.grid_x) for tile in overlay]
    assert cells == sorted(cells)


def test_colors_come_from_palette(rng):
    overlay = generate_tiles(1200, 628, TileGridParameters(density=1.0), rng)
    assert {tile.color for tile in overlay} <= set(DEFAULT_PALETTE)

    single = TileGridParameters(density=1.0, palette=((1, 2, 3),))
    overlay = generate_tiles(300, 300, single, rng)
    assert {tile.color for tile in overlay} == {(1, 2, 3)}


def test_same_seed_gives_same_overlay():
    params = TileGridParameters(density=0.3, variation_percent=40, clustering_enabled=True)
    first = TilePatternGenerator(np.random.default_rng(99)).generate(1200, 628, params)
    second = TilePatternGenerator(np.random.default_rng(99)).generate(1200, 628, params)
    assert first == second


def test_clustering_raises_fill_rate():
    plain = TileGridParameters(tile_size=1, density=0.1)
    clustered = TileGridParameters(tile_size=1, density=0.1, clustering_enabled=True)

    plain_rate = len(generate_tiles(100, 100, plain, np.random.default_rng(3))) / 10000
    clustered_rate = (
        len(generate_tiles(100, 100, clustered, np.random.default_rng(3))) / 10000
    )

    assert 0.08 < plain_rate < 0.12
    # Bonus only applies next to a placed tile, so the rate lands well below 0.3
    assert 0.13 < clustered_rate < 0.2


def test_size_without_variation_is_tile_size(rng):
    overlay = generate_tiles(1200, 628, TileGridParameters(density=1.0), rng)
    assert {tile.size for tile in overlay} == {100}


def test_size_variation_is_clamped_at_zero(rng):
    params = TileGridParameters(tile_size=10, density=1.0, variation_percent=200)
    sizes = np.array([tile.size for tile in generate_tiles(1000, 1000, params, rng)])

    assert sizes.min() == 0.0
    assert sizes.max() <= 30.0
    assert np.count_nonzero(sizes == 0.0) > 1000


def test_circle_diameter_is_ninety_percent(rng):
    params = TileGridParameters(density=1.0, shape=TileShape.CIRCLE)
    overlay = generate_tiles(1200, 628, params, rng)
    assert all(tile.size == pytest.approx(90.0) for tile in overlay)
    assert all(tile.shape is TileShape.CIRCLE for tile in overlay)


def _overlay(*tiles):
    return TileOverlay(width=100, height=100, tile_size=50, offset_y=0.0, tiles=tiles)


def test_render_square_tile():
    tile = PlacedTile(0, 0, 50.0, (250, 226, 94), TileShape.SQUARE, 25.0, 25.0)
    layer = render_tile_layer(_overlay(tile))

    assert layer.size == (100, 100)
    assert layer.getpixel((25, 25)) == (250, 226, 94, 255)
    assert layer.getpixel((2, 2)) == (250, 226, 94, 255)
    assert layer.getpixel((75, 75))[3] == 0


def test_render_circle_tile_leaves_corners_clear():
    tile = PlacedTile(1, 1, 45.0, (51, 86, 163), TileShape.CIRCLE, 75.0, 75.0)
    layer = render_tile_layer(_overlay(tile))

    assert layer.getpixel((75, 75)) == (51, 86, 163, 255)
    assert layer.getpixel((54, 54))[3] == 0


def test_render_skips_zero_size_tiles():
    tile = PlacedTile(0, 0, 0.0, (239, 63, 53), TileShape.SQUARE, 25.0, 25.0)
    layer = render_tile_layer(_overlay(tile))
    assert layer.getbbox() is None


def test_clustering_bonus_applies_next_to_placed_tiles():
    params = TileGridParameters(tile_size=1, density=0.1, clustering_enabled=True)
    overlay = generate_tiles(200, 200, params, np.random.default_rng(11))

    placed = np.zeros((200, 200), dtype=bool)
    for tile in overlay:
        placed[tile.grid_y, tile.grid_x] = True

    left = np.zeros_like(placed)
    left[:, 1:] = placed[:, :-1]
    above = np.zeros_like(placed)
    above[1:, :] = placed[:-1, :]
    neighbor = left | above

    assert 0.27 < placed[neighbor].mean() < 0.33
    assert 0.085 < placed[~neighbor].mean() < 0.115
