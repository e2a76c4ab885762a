"""Image processing pipeline for photo-to-poster conversion.

AIDEV-NOTE: This package handles the complete pipeline from photograph
to tiled poster. Organized into modular components:
- processor: Main PosterProcessor orchestrator and filter cache
- filters: Per-pixel filter chain (desaturate, grain, contrast, tint)
- color_space: RGB/HSL conversion
- tiles: Tile pattern generation and rasterization
- compositor: Canvas compositing
- utils: Color parsing and image/array conversion
"""

from .compositor import CompositeRenderer
from .filters import PixelFilterChain, apply_filters
from .processor import FilterCache, PosterProcessor, export_filename
from .tiles import TilePatternGenerator, generate_tiles, render_tile_layer

__all__ = [
    "CompositeRenderer",
    "FilterCache",
    "PixelFilterChain",
    "PosterProcessor",
    "TilePatternGenerator",
    "apply_filters",
    "export_filename",
    "generate_tiles",
    "render_tile_layer",
]
