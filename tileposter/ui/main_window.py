"""Main application window for the poster compositor."""

import logging
from pathlib import Path

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QDockWidget,
    QFileDialog,
    QGroupBox,
    QMainWindow,
    QMessageBox,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from tileposter.config_manager import ConfigManager
from tileposter.errors import InputError, PosterError
from tileposter.image_processing import PosterProcessor
from tileposter.models import FilterParameters, PosterConfig, TileGridParameters
from tileposter.ui.components import FilterControlsWidget, TileControlsWidget
from tileposter.ui.console_panel import ConsoleLogHandler, ConsolePanel
from tileposter.ui.preview_canvas import PreviewCanvas
from tileposter.ui.styles import SIZES

logger = logging.getLogger(__name__)

# Parameter edits are coalesced until input settles for this long
RENDER_DEBOUNCE_MS = 30


class PosterWindow(QMainWindow):
    """Main application window for building a tiled poster."""

    def __init__(self, config_manager: ConfigManager | None = None):
        super().__init__()
        self.setWindowTitle("Tile Poster v0.1.0")
        self.setMinimumSize(1000, 700)

        # Application state
        self.config_manager = config_manager or ConfigManager()
        self.config: PosterConfig = self.config_manager.load()
        self.processor = PosterProcessor(
            self.config.filter_params,
            self.config.tile_params,
            seed=self.config.seed,
        )

        # UI component references (created in _setup_ui)
        self.canvas: PreviewCanvas
        self.console_panel: ConsolePanel
        self.filter_controls: FilterControlsWidget
        self.tile_controls: TileControlsWidget

        self._render_timer = QTimer(self)
        self._render_timer.setSingleShot(True)
        self._render_timer.setInterval(RENDER_DEBOUNCE_MS)
        self._render_timer.timeout.connect(self.refresh_preview)

        self._setup_ui()
        self._connect_signals()
        self._attach_log_handler()
        self._update_action_state()
        self.refresh_preview()

    def _setup_ui(self):
        """Initialize the user interface."""
        self.canvas = PreviewCanvas(self.processor.viewport, self.processor.canvas_size)
        self.setCentralWidget(self.canvas)

        self._create_actions()
        self._create_toolbar()
        self._create_dock_widgets()
        self.statusBar().showMessage("Open an image to start")

    def _create_actions(self):
        """Create toolbar actions with the classic single-key shortcuts."""
        self.open_action = QAction("Open...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.setToolTip("Load a photograph")

        self.place_action = QAction("Place", self)
        self.place_action.setShortcut(QKeySequence("P"))
        self.place_action.setToolTip("Freeze the image and draw tiles (P)")

        self.regenerate_action = QAction("Regenerate Tiles", self)
        self.regenerate_action.setShortcuts(
            [QKeySequence(Qt.Key.Key_Return), QKeySequence(Qt.Key.Key_Enter)]
        )
        self.regenerate_action.setToolTip("Draw a new tile pattern (Space/Enter)")

        # Space only while the preview has focus, so it still toggles checkboxes
        self.canvas_regenerate_action = QAction("Regenerate Tiles", self.canvas)
        self.canvas_regenerate_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        self.canvas_regenerate_action.setShortcutContext(
            Qt.ShortcutContext.WidgetWithChildrenShortcut
        )
        self.canvas.addAction(self.canvas_regenerate_action)

        self.grayscale_action = QAction("Grayscale", self)
        self.grayscale_action.setCheckable(True)
        self.grayscale_action.setChecked(self.processor.filter_params.grayscale_enabled)
        self.grayscale_action.setShortcut(QKeySequence("G"))
        self.grayscale_action.setToolTip("Toggle grayscale mode (G)")

        self.export_action = QAction("Export PNG", self)
        self.export_action.setShortcut(QKeySequence("S"))
        self.export_action.setToolTip("Save the poster as output-<timestamp>.png (S)")

        self.save_settings_action = QAction("Save Settings", self)
        self.save_settings_action.setToolTip("Use the current settings as defaults")

    def _create_toolbar(self):
        """Create the main toolbar."""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        toolbar.addAction(self.open_action)
        toolbar.addSeparator()
        toolbar.addAction(self.place_action)
        toolbar.addAction(self.regenerate_action)
        toolbar.addAction(self.grayscale_action)
        toolbar.addSeparator()
        toolbar.addAction(self.export_action)
        toolbar.addAction(self.save_settings_action)

    def _create_dock_widgets(self):
        """Create the controls and console panels as dockable widgets."""
        controls = QWidget()
        controls.setMinimumWidth(SIZES.CONTROLS_MIN_WIDTH)
        controls_layout = QVBoxLayout()

        filter_group = QGroupBox("Filters")
        filter_layout = QVBoxLayout()
        self.filter_controls = FilterControlsWidget(self.processor.filter_params)
        filter_layout.addWidget(self.filter_controls)
        filter_group.setLayout(filter_layout)
        controls_layout.addWidget(filter_group)

        tile_group = QGroupBox("Tiles")
        tile_layout = QVBoxLayout()
        self.tile_controls = TileControlsWidget(self.processor.tile_params)
        tile_layout.addWidget(self.tile_controls)
        tile_group.setLayout(tile_layout)
        controls_layout.addWidget(tile_group)

        controls_layout.addStretch()
        controls.setLayout(controls_layout)

        self.console_panel = ConsolePanel()

        dock_panels = [
            ("Controls", controls, Qt.DockWidgetArea.RightDockWidgetArea),
            ("Console", self.console_panel, Qt.DockWidgetArea.BottomDockWidgetArea),
        ]
        view_menu = self.menuBar().addMenu("&View")
        for title, widget, area in dock_panels:
            dock = QDockWidget(title, self)
            dock.setWidget(widget)
            self.addDockWidget(area, dock)
            action = dock.toggleViewAction()
            action.setText(f"Show {title}")
            view_menu.addAction(action)

    def _connect_signals(self):
        """Connect all UI signals to handlers."""
        self.open_action.triggered.connect(self._on_open_clicked)
        self.place_action.triggered.connect(self._on_place)
        self.regenerate_action.triggered.connect(self._on_regenerate)
        self.canvas_regenerate_action.triggered.connect(self._on_regenerate)
        self.grayscale_action.triggered.connect(self._on_grayscale_toggled)
        self.export_action.triggered.connect(self._on_export)
        self.save_settings_action.triggered.connect(self._on_save_settings)

        self.canvas.viewport_changed.connect(self.refresh_preview)
        self.filter_controls.params_changed.connect(self._on_filter_params_changed)
        self.tile_controls.params_changed.connect(self._on_tile_params_changed)

    def _attach_log_handler(self):
        """Mirror application log records into the console panel."""
        self._log_handler = ConsoleLogHandler(self.console_panel)
        logging.getLogger("tileposter").addHandler(self._log_handler)

    def _update_action_state(self):
        """Enable actions that make sense for the current state."""
        has_image = self.processor.has_image
        placed = self.processor.is_placed
        self.place_action.setEnabled(has_image)
        self.regenerate_action.setEnabled(placed)
        self.canvas_regenerate_action.setEnabled(placed)
        self.export_action.setEnabled(placed)

    def _report_error(self, error: Exception, title: str):
        """Show an error without touching application state."""
        logger.error("%s: %s", title, error)
        self.statusBar().showMessage(str(error), 5000)
        if isinstance(error, InputError):
            QMessageBox.warning(self, title, str(error))

    # === Rendering ===

    def refresh_preview(self):
        """Render the current poster frame into the canvas."""
        self._render_timer.stop()
        self.canvas.set_frame(self.processor.render())

    def schedule_refresh(self):
        """Re-render once parameter edits settle."""
        self._render_timer.start()

    # === Event Handlers ===

    def _on_open_clicked(self):
        """Handle open action."""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp);;All Files (*)",
        )
        if file_path:
            self.open_image(file_path)

    def open_image(self, file_path: str | Path) -> bool:
        """Load an image; on failure the current poster is left as it was."""
        try:
            image = self.processor.load_image(file_path)
        except InputError as e:
            self._report_error(e, "Could Not Open Image")
            return False

        self.statusBar().showMessage(
            f"Loaded {Path(file_path).name} ({image.width}x{image.height}). "
            "Drag and scroll to position, then press P."
        )
        self._update_action_state()
        self.refresh_preview()
        return True

    def _on_place(self):
        try:
            overlay = self.processor.place()
        except PosterError as e:
            self._report_error(e, "Cannot Place")
            return
        self.statusBar().showMessage(f"Placed with {len(overlay)} tiles")
        self._update_action_state()
        self.refresh_preview()

    def _on_regenerate(self):
        try:
            overlay = self.processor.regenerate_tiles()
        except PosterError as e:
            self._report_error(e, "Cannot Regenerate")
            return
        self.statusBar().showMessage(f"{len(overlay)} tiles")
        self.refresh_preview()

    def _on_grayscale_toggled(self):
        enabled = self.processor.toggle_grayscale()
        self.grayscale_action.setChecked(enabled)
        self.filter_controls.set_params(self.processor.filter_params)
        self.refresh_preview()

    def _on_filter_params_changed(self, params: FilterParameters):
        if self.processor.update_filter_params(params):
            self.grayscale_action.setChecked(params.grayscale_enabled)
            self.schedule_refresh()

    def _on_tile_params_changed(self, params: TileGridParameters):
        if self.processor.update_tile_params(params):
            self.schedule_refresh()

    def _on_export(self):
        try:
            path = self.processor.export(self.config.export_dir)
        except (PosterError, OSError) as e:
            self._report_error(e, "Export Failed")
            return
        self.statusBar().showMessage(f"Saved {path}", 5000)

    def _on_save_settings(self):
        """Persist the current settings as defaults."""
        self.config.filter_params = self.processor.filter_params
        self.config.tile_params = self.processor.tile_params

        success, error = self.config_manager.save(self.config)
        if not success:
            QMessageBox.warning(
                self, "Save Error", f"Could not save configuration:\n{error}"
            )
        else:
            self.console_panel.append("✓ Settings saved")

    # === Application Lifecycle ===

    def closeEvent(self, a0):
        """Detach the console log handler when the window closes."""
        logging.getLogger("tileposter").removeHandler(self._log_handler)
        if a0:
            a0.accept()
