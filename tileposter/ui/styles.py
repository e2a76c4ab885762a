"""Colors, fonts and sizes shared by the Tile Poster widgets."""

from PyQt6.QtGui import QColor, QFont


class ThemeColors:
    """Application theme colors for the preview and panels."""

    # Area around the poster when the window is larger than the canvas
    PREVIEW_SURROUND = QColor(30, 30, 30)
    PREVIEW_BORDER = QColor(90, 90, 90)

    BORDER_DEFAULT = "gray"

    # Console message colors
    LOG_ERROR = "#e05a4f"
    LOG_WARNING = "#e0a84f"


class Fonts:
    """Fonts for text panels."""

    CONSOLE = QFont("Courier", 9)


class Sizes:
    """Fixed widget sizes (pixels)."""

    # Console panel
    CONSOLE_MIN_HEIGHT = 100

    # Controls dock
    CONTROLS_MIN_WIDTH = 260
    LABEL_MIN_WIDTH = 40
    COLOR_SWATCH_SIZE = (48, 22)

    # Preview canvas
    PREVIEW_MIN_SIZE = (600, 314)
    PREVIEW_PADDING = 12  # pixels


COLORS = ThemeColors
FONTS = Fonts
SIZES = Sizes


def swatch_stylesheet(color: "tuple[int, int, int]") -> str:
    """Generate a stylesheet that paints a button as a flat color swatch.

    Args:
        color: RGB tuple (0-255 each channel)

    Returns:
        CSS stylesheet string
    """
    r, g, b = color
    return (
        f"background-color: rgb({r}, {g}, {b}); "
        f"border: 1px solid {ThemeColors.BORDER_DEFAULT};"
    )
