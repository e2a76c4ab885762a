"""Main poster processor orchestrating the complete pipeline.

AIDEV-NOTE: PosterProcessor owns all mutable session state: the loaded
image, the viewport, the current parameter structs, the filter cache, the
tile overlay and the random source. The UI only calls into it. Cache
invalidation happens in one place (_invalidate) whenever the filter
parameters or the source image change.
"""

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from tileposter.errors import InputError, NotReadyError
from tileposter.models import (
    BACKGROUND_COLOR,
    EXPORT_FILENAME_FORMAT,
    PREVIEW_HEIGHT,
    PREVIEW_WIDTH,
    FilterParameters,
    TileGridParameters,
    TileOverlay,
)
from tileposter.viewport import ViewportController

from .compositor import CompositeRenderer
from .filters import apply_filters
from .tiles import generate_tiles
from .utils import ensure_rgba

logger = logging.getLogger(__name__)


def export_filename(when: datetime) -> str:
    """Build the export file name, e.g. output-20240131-235959.png."""
    return when.strftime(EXPORT_FILENAME_FORMAT)


class FilterCache:
    """Memoized filtered image, valid for one FilterParameters value."""

    def __init__(self):
        self._params: FilterParameters | None = None
        self._image: Image.Image | None = None

    def get(self, params: FilterParameters) -> Image.Image | None:
        """Return the cached image if it was produced with `params`."""
        if self._image is not None and self._params == params:
            return self._image
        return None

    def store(self, params: FilterParameters, image: Image.Image):
        self._params = params
        self._image = image

    def invalidate(self):
        self._params = None
        self._image = None

    @property
    def is_valid(self) -> bool:
        return self._image is not None


class PosterProcessor:
    """Turns a photograph into a tiled poster."""

    def __init__(
        self,
        filter_params: FilterParameters | None = None,
        tile_params: TileGridParameters | None = None,
        canvas_size: "tuple[int, int]" = (PREVIEW_WIDTH, PREVIEW_HEIGHT),
        background: "tuple[int, int, int]" = BACKGROUND_COLOR,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ):
        self.filter_params = filter_params or FilterParameters()
        self.tile_params = tile_params or TileGridParameters()
        self.canvas_size = canvas_size
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.viewport = ViewportController(*canvas_size)
        self.renderer = CompositeRenderer(canvas_size, background)
        self.cache = FilterCache()

        self.source_image: Image.Image | None = None
        self.source_path: Path | None = None
        self.overlay: TileOverlay | None = None

    # === State ===

    @property
    def has_image(self) -> bool:
        return self.source_image is not None

    @property
    def is_placed(self) -> bool:
        return self.viewport.is_placed

    def _invalidate(self):
        """Drop the cached filtered image."""
        if self.cache.is_valid:
            logger.debug("Filter cache invalidated")
        self.cache.invalidate()

    # === Loading ===

    def load_image(self, file_path: str | Path) -> Image.Image:
        """Load an image file and make it the current source.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)

        Returns:
            The loaded image in RGBA mode

        Raises:
            InputError: If the file is missing, cannot be decoded or exceeds
                Pillow's pixel limit. The previous image and placement are kept.
        """
        path = Path(file_path)
        try:
            with Image.open(path) as opened:
                # AIDEV-NOTE: Always convert to RGBA for consistent processing
                image = opened.convert("RGBA")
        except FileNotFoundError as e:
            raise InputError(f"File not found: {path}") from e
        except Image.DecompressionBombError as e:
            raise InputError(f"Image is too large to open: {path}") from e
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise InputError(f"Not an image file: {path}") from e

        self.set_image(image)
        self.source_path = path
        logger.info("Loaded %s (%dx%d)", path.name, image.width, image.height)
        return image

    def set_image(self, image: Image.Image):
        """Use an in-memory image as the new source and reset placement."""
        image = ensure_rgba(image)
        if image.width == 0 or image.height == 0:
            raise InputError("Image has no pixels")

        self.source_image = image
        self.source_path = None
        self.viewport.reset(image.width, image.height)
        self.overlay = None
        self._invalidate()

    # === Parameters ===

    def update_filter_params(self, params: FilterParameters) -> bool:
        """Replace the filter settings.

        Returns:
            True if the settings changed (and the cache was dropped)
        """
        if params == self.filter_params:
            return False
        self.filter_params = params
        self._invalidate()
        return True

    def toggle_grayscale(self) -> bool:
        """Flip grayscale mode and return the new setting."""
        params = self.filter_params
        self.update_filter_params(
            replace(params, grayscale_enabled=not params.grayscale_enabled)
        )
        logger.info(
            "Grayscale mode: %s", "ON" if self.filter_params.grayscale_enabled else "OFF"
        )
        return self.filter_params.grayscale_enabled

    def update_tile_params(self, params: TileGridParameters) -> bool:
        """Replace the tile settings, regenerating tiles if already placed.

        Returns:
            True if the settings changed
        """
        if params == self.tile_params:
            return False
        self.tile_params = params
        if self.is_placed:
            self._generate_overlay()
        return True

    # === Actions ===

    def place(self) -> TileOverlay:
        """Freeze the image position and draw the tile pattern.

        Raises:
            NotReadyError: If no image is loaded
        """
        if not self.has_image:
            raise NotReadyError("Load an image before placing it")
        self.viewport.place()
        overlay = self._generate_overlay()
        logger.info("Image placed, tiles drawn.")
        return overlay

    def regenerate_tiles(self) -> TileOverlay:
        """Draw a new random tile pattern with the current settings.

        Raises:
            NotReadyError: If the image has not been placed
        """
        if not self.is_placed:
            raise NotReadyError("Place the image before regenerating tiles")
        overlay = self._generate_overlay()
        logger.info("Tiles redrawn.")
        return overlay

    def _generate_overlay(self) -> TileOverlay:
        width, height = self.canvas_size
        self.overlay = generate_tiles(width, height, self.tile_params, self.rng)
        return self.overlay

    def filtered_image(self) -> Image.Image:
        """Return the filtered source image, computing it if not cached.

        Raises:
            NotReadyError: If no image is loaded
        """
        if self.source_image is None:
            raise NotReadyError("No image loaded")

        cached = self.cache.get(self.filter_params)
        if cached is not None:
            logger.debug("Filter cache hit")
            return cached

        logger.debug("Filter cache miss, filtering source image")
        filtered = apply_filters(self.source_image, self.filter_params, self.rng)
        self.cache.store(self.filter_params, filtered)
        return filtered

    def render(self) -> Image.Image:
        """Composite the current frame.

        Before placement the raw source is shown without tiles; afterwards the
        filtered image and the tile overlay are used.
        """
        if self.source_image is None:
            return self.renderer.render(None, None)

        if self.is_placed:
            return self.renderer.render(
                self.viewport.state, self.filtered_image(), self.overlay
            )
        return self.renderer.render(self.viewport.state, self.source_image)

    def export(
        self, output_dir: str | Path = ".", now: datetime | None = None
    ) -> Path:
        """Render the poster and save it as a timestamped PNG.

        Args:
            output_dir: Directory to write into (created if missing)
            now: Timestamp for the file name, defaults to the current time

        Returns:
            Path of the written file

        Raises:
            NotReadyError: If the image has not been placed
        """
        if not self.is_placed:
            raise NotReadyError("Place the image first by pressing 'P'")

        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(now or datetime.now())

        self.render().save(path, format="PNG")
        logger.info("Saved %s", path)
        return path
