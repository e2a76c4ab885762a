"""Console output panel and the logging handler that feeds it."""

import html
import logging

from PyQt6.QtWidgets import QGroupBox, QPlainTextEdit, QPushButton, QVBoxLayout

from tileposter.ui.styles import COLORS, FONTS, SIZES

# Oldest lines are dropped past this many
MAX_CONSOLE_LINES = 2000


class ConsolePanel(QGroupBox):
    """Read-only log view with a clear button."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self.output = QPlainTextEdit()
        self.output.setReadOnly(True)
        self.output.setMaximumBlockCount(MAX_CONSOLE_LINES)
        self.output.setMinimumHeight(SIZES.CONSOLE_MIN_HEIGHT)
        self.output.setFont(FONTS.CONSOLE)

        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(self.clear)

        layout = QVBoxLayout()
        layout.addWidget(self.output)
        layout.addWidget(clear_button)
        self.setLayout(layout)

    def append(self, message: str, color: str | None = None):
        """Add a line, optionally colored, and keep the view at the bottom."""
        text = html.escape(message)
        if color:
            text = f'<span style="color: {color};">{text}</span>'
        self.output.appendHtml(text)
        bar = self.output.verticalScrollBar()
        if bar:
            bar.setValue(bar.maximum())

    def clear(self):
        self.output.clear()


class ConsoleLogHandler(logging.Handler):
    """Mirrors log records into a ConsolePanel.

    AIDEV-NOTE: All processing runs on the Qt main thread, so appending
    directly from emit() is safe.
    """

    def __init__(self, panel: ConsolePanel, level: int = logging.INFO):
        super().__init__(level)
        self.panel = panel
        self.setFormatter(logging.Formatter("%(asctime)s %(message)s", "%H:%M:%S"))

    def emit(self, record: logging.LogRecord):
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return

        if record.levelno >= logging.ERROR:
            self.panel.append(message, COLORS.LOG_ERROR)
        elif record.levelno >= logging.WARNING:
            self.panel.append(message, COLORS.LOG_WARNING)
        else:
            self.panel.append(message)
