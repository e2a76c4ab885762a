"""Pan/zoom/placement state for the source image on the poster canvas."""

from dataclasses import replace

from tileposter.errors import NotReadyError
from tileposter.models import (
    MAX_SCALE_FACTOR,
    MIN_SCALE_FACTOR,
    PREVIEW_HEIGHT,
    PREVIEW_WIDTH,
    ZOOM_STEP,
    ViewportState,
)


class ViewportController:
    """Tracks where the source image sits on the canvas.

    AIDEV-NOTE: Every change produces a new ViewportState. Drag and zoom are
    ignored before an image is loaded and after placement.
    """

    def __init__(
        self,
        canvas_width: int = PREVIEW_WIDTH,
        canvas_height: int = PREVIEW_HEIGHT,
    ):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.state: ViewportState | None = None
        self._drag_offset: "tuple[float, float] | None" = None

    @property
    def is_placed(self) -> bool:
        return self.state is not None and self.state.placed

    @property
    def is_dragging(self) -> bool:
        return self._drag_offset is not None

    def _can_move(self) -> bool:
        return self.state is not None and not self.state.placed

    def reset(self, image_width: int, image_height: int) -> ViewportState:
        """Fit a new image to the canvas width and center it.

        Args:
            image_width: Source image width in pixels
            image_height: Source image height in pixels

        Returns:
            The new (unplaced) viewport state
        """
        scale = self.canvas_width / image_width
        scaled_width = image_width * scale
        scaled_height = image_height * scale

        self.state = ViewportState(
            scale=scale,
            min_scale=scale * MIN_SCALE_FACTOR,
            max_scale=scale * MAX_SCALE_FACTOR,
            origin_x=(self.canvas_width - scaled_width) / 2,
            origin_y=(self.canvas_height - scaled_height) / 2,
            image_width=image_width,
            image_height=image_height,
        )
        self._drag_offset = None
        return self.state

    def clear(self):
        """Forget the current image."""
        self.state = None
        self._drag_offset = None

    def contains(self, x: float, y: float) -> bool:
        """Check whether a canvas point lies on the image."""
        state = self.state
        if state is None:
            return False
        return (
            state.origin_x <= x <= state.origin_x + state.scaled_width
            and state.origin_y <= y <= state.origin_y + state.scaled_height
        )

    def begin_drag(self, x: float, y: float) -> bool:
        """Start dragging if the point is on the (unplaced) image."""
        if not self._can_move() or not self.contains(x, y):
            return False
        self._drag_offset = (x - self.state.origin_x, y - self.state.origin_y)
        return True

    def drag_to(self, x: float, y: float) -> bool:
        """Move the image so the grabbed point follows the cursor."""
        if self._drag_offset is None or not self._can_move():
            return False
        dx, dy = self._drag_offset
        self.state = replace(self.state, origin_x=x - dx, origin_y=y - dy)
        return True

    def end_drag(self):
        self._drag_offset = None

    def zoom(self, delta: float) -> bool:
        """Zoom one step around the image center.

        Args:
            delta: Wheel delta; positive zooms out, negative zooms in

        Returns:
            True if the state was updated
        """
        if not self._can_move() or delta == 0:
            return False

        state = self.state
        direction = 1 if delta > 0 else -1
        center_x = state.origin_x + state.scaled_width / 2
        center_y = state.origin_y + state.scaled_height / 2

        scale = state.scale - direction * ZOOM_STEP
        scale = max(state.min_scale, min(state.max_scale, scale))

        self.state = replace(
            state,
            scale=scale,
            origin_x=center_x - state.image_width * scale / 2,
            origin_y=center_y - state.image_height * scale / 2,
        )
        return True

    def place(self) -> ViewportState:
        """Freeze position and scale.

        Raises:
            NotReadyError: If no image has been loaded
        """
        if self.state is None:
            raise NotReadyError("No image to place")
        self._drag_offset = None
        self.state = replace(self.state, placed=True)
        return self.state
