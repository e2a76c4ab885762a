"""Tile Poster - Main entry point."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from tileposter.ui.main_window import PosterWindow


def main(argv: "list[str] | None" = None):
    """Launch the Tile Poster application.

    Args:
        argv: Command line arguments; an optional first positional argument
            is an image to open on startup
    """
    argv = list(sys.argv if argv is None else argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(argv)

    app.setApplicationDisplayName("Tile Poster")
    app.setApplicationName("TilePoster")
    app.setOrganizationName("Tile Poster")

    window = PosterWindow()
    window.show()

    # Qt strips its own options from argv; anything left is ours
    args = app.arguments()[1:]
    if args:
        window.open_image(args[0])

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
