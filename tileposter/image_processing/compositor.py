"""Composites the positioned source image and tile layer onto the canvas."""

from PIL import Image

from tileposter.models import (
    BACKGROUND_COLOR,
    PREVIEW_HEIGHT,
    PREVIEW_WIDTH,
    TileOverlay,
    ViewportState,
)

from .tiles import render_tile_layer
from .utils import ensure_rgba

# AIDEV-NOTE: Preview and export both go through render(), so they always
# share this resampling filter.
RESAMPLING = Image.Resampling.BILINEAR


class CompositeRenderer:
    """Draws background, scaled image and tiles into one canvas-sized bitmap."""

    def __init__(
        self,
        canvas_size: "tuple[int, int]" = (PREVIEW_WIDTH, PREVIEW_HEIGHT),
        background: "tuple[int, int, int]" = BACKGROUND_COLOR,
    ):
        self.canvas_size = canvas_size
        self.background = background

    def render(
        self,
        viewport: ViewportState | None,
        image: Image.Image | None,
        overlay: TileOverlay | None = None,
    ) -> Image.Image:
        """Composite one frame.

        Args:
            viewport: Image placement, or None if nothing is loaded
            image: Raw or filtered source image to draw (unscaled)
            overlay: Tiles drawn on top, or None for no tiles

        Returns:
            RGBA image of canvas_size
        """
        canvas = Image.new("RGBA", self.canvas_size, self.background + (255,))

        if viewport is not None and image is not None:
            scaled = self.scale_image(image, viewport)
            if scaled is not None:
                x = int(round(viewport.origin_x))
                y = int(round(viewport.origin_y))
                # paste() clips at the canvas edges; alpha_composite() then
                # blends over the background without touching its alpha
                image_layer = Image.new("RGBA", self.canvas_size, (0, 0, 0, 0))
                image_layer.paste(scaled, (x, y))
                canvas.alpha_composite(image_layer)

        if overlay is not None and len(overlay) > 0:
            layer = render_tile_layer(overlay)
            if layer.size != canvas.size:
                layer = layer.crop((0, 0) + canvas.size)
            canvas.alpha_composite(layer)

        return canvas

    @staticmethod
    def scale_image(image: Image.Image, viewport: ViewportState) -> Image.Image | None:
        """Resize the source image to its on-canvas size.

        Returns:
            The resized RGBA image, or None if it would be smaller than a pixel
        """
        width = int(round(image.width * viewport.scale))
        height = int(round(image.height * viewport.scale))
        if width < 1 or height < 1:
            return None
        return ensure_rgba(image).resize((width, height), RESAMPLING)
