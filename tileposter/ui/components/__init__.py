"""UI components package for modular control widgets."""

from tileposter.ui.components.filter_controls import FilterControlsWidget
from tileposter.ui.components.tile_controls import TileControlsWidget

__all__ = [
    "FilterControlsWidget",
    "TileControlsWidget",
]
