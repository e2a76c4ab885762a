"""Tile pattern controls component."""

import logging
from dataclasses import replace

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QCheckBox, QComboBox, QVBoxLayout, QWidget

from tileposter.errors import ParameterOutOfRange
from tileposter.models import TileGridParameters, TileShape
from tileposter.ui.widgets import WidgetFactory

logger = logging.getLogger(__name__)


class TileControlsWidget(QWidget):
    """Controls for the decorative tile overlay.

    This component provides UI controls for adjusting tile generation:
    - Tile size (grid cell size)
    - Density (placement probability per cell)
    - Size variation (random jitter in percent of tile size)
    - Clustering (favor cells next to placed tiles)
    - Shape (square or circle)
    """

    # Emits a new TileGridParameters whenever any control changes
    params_changed = pyqtSignal(object)

    def __init__(self, params: TileGridParameters, parent=None):
        super().__init__(parent)
        self.params = params
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Create and layout UI controls."""
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.size_spin = WidgetFactory.create_int_spinbox(
            range_min=10,
            range_max=600,
            value=self.params.tile_size,
            suffix=" px",
            step=10,
            tooltip="Grid cell size",
        )
        layout.addLayout(WidgetFactory.create_labeled_row("Tile Size:", self.size_spin))

        # Density slider works in percent, the parameter is 0-1
        self.density_slider, self.density_label = WidgetFactory.create_slider_with_label(
            range_min=0,
            range_max=100,
            value=int(round(self.params.density * 100)),
            tooltip="Probability of placing a tile in each cell",
        )
        self.density_label.setText(f"{self.params.density:.2f}")
        layout.addLayout(
            WidgetFactory.create_labeled_row(
                "Density:", self.density_slider, self.density_label
            )
        )

        self.variation_spin = WidgetFactory.create_int_spinbox(
            range_min=0,
            range_max=200,
            value=self.params.variation_percent,
            suffix=" %",
            step=5,
            tooltip="Random size change, in percent of the tile size",
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Size Variation:", self.variation_spin)
        )

        self.clustering_check = QCheckBox("Clustering")
        self.clustering_check.setChecked(self.params.clustering_enabled)
        self.clustering_check.setToolTip(
            "Tiles are more likely next to a tile on the left or above"
        )
        layout.addWidget(self.clustering_check)

        self.shape_combo = QComboBox()
        self.shape_combo.addItems([shape.name.title() for shape in TileShape])
        self.shape_combo.setCurrentIndex(list(TileShape).index(self.params.shape))
        layout.addLayout(WidgetFactory.create_labeled_row("Shape:", self.shape_combo))

        self.setLayout(layout)

    def _connect_signals(self):
        """Connect widget signals to parameter updates."""
        self.size_spin.valueChanged.connect(lambda v: self._update_params(tile_size=v))
        self.density_slider.valueChanged.connect(self._on_density_changed)
        self.variation_spin.valueChanged.connect(
            lambda v: self._update_params(variation_percent=v)
        )
        self.clustering_check.toggled.connect(
            lambda v: self._update_params(clustering_enabled=v)
        )
        self.shape_combo.currentIndexChanged.connect(
            lambda i: self._update_params(shape=list(TileShape)[i])
        )

    def _on_density_changed(self, value: int):
        """Handle density slider change.

        Args:
            value: Slider value (0-100)
        """
        density = value / 100.0
        self.density_label.setText(f"{density:.2f}")
        self._update_params(density=density)

    def _update_params(self, **changes):
        try:
            self.params = replace(self.params, **changes)
        except ParameterOutOfRange as e:
            logger.warning("Rejected tile setting: %s", e)
            return
        self.params_changed.emit(self.params)
