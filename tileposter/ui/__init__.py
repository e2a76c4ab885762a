"""UI components for the Tile Poster application.

This package contains the main window and the panels it docks around
the poster preview.
"""

from tileposter.ui.console_panel import ConsoleLogHandler, ConsolePanel
from tileposter.ui.main_window import PosterWindow
from tileposter.ui.preview_canvas import PreviewCanvas

__all__ = [
    "PosterWindow",
    "PreviewCanvas",
    "ConsolePanel",
    "ConsoleLogHandler",
]
