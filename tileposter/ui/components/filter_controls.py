"""Filter chain controls component."""

import logging
from dataclasses import replace

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QCheckBox, QVBoxLayout, QWidget

from tileposter.errors import ParameterOutOfRange
from tileposter.models import FilterParameters
from tileposter.ui.widgets import ColorButton, WidgetFactory

logger = logging.getLogger(__name__)


class FilterControlsWidget(QWidget):
    """Controls for the stylized filter chain.

    This component provides UI controls for:
    - Grayscale (full gray vs. 50% desaturation)
    - Contrast factor
    - Grain amplitude
    - Tint (multiply) color
    """

    # Emits a new FilterParameters whenever any control changes
    params_changed = pyqtSignal(object)

    def __init__(self, params: FilterParameters, parent=None):
        """Initialize filter controls.

        Args:
            params: Initial filter settings
            parent: Parent widget
        """
        super().__init__(parent)
        self.params = params
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Create and layout UI controls."""
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.grayscale_check = QCheckBox("Grayscale")
        self.grayscale_check.setChecked(self.params.grayscale_enabled)
        self.grayscale_check.setToolTip(
            "Full grayscale; when off, saturation is halved instead (G)"
        )
        layout.addWidget(self.grayscale_check)

        self.contrast_spin = WidgetFactory.create_double_spinbox(
            range_min=0.1,
            range_max=5.0,
            value=self.params.contrast_factor,
            suffix="x",
            tooltip="Contrast factor (1.0 = unchanged)",
        )
        layout.addLayout(WidgetFactory.create_labeled_row("Contrast:", self.contrast_spin))

        self.grain_slider, self.grain_label = WidgetFactory.create_slider_with_label(
            range_min=0,
            range_max=50,
            value=int(self.params.grain_amplitude),
            tooltip="Maximum per-channel noise",
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Grain:", self.grain_slider, self.grain_label)
        )

        self.tint_button = ColorButton(self.params.tint_color)
        layout.addLayout(WidgetFactory.create_labeled_row("Tint:", self.tint_button))

        self.setLayout(layout)

    def _connect_signals(self):
        """Connect widget signals to parameter updates."""
        self.grayscale_check.toggled.connect(
            lambda v: self._update_params(grayscale_enabled=v)
        )
        self.contrast_spin.valueChanged.connect(
            lambda v: self._update_params(contrast_factor=v)
        )
        self.grain_slider.valueChanged.connect(self._on_grain_changed)
        self.tint_button.color_changed.connect(
            lambda c: self._update_params(tint_color=c)
        )

    def _on_grain_changed(self, value: int):
        self.grain_label.setText(str(value))
        self._update_params(grain_amplitude=float(value))

    def _update_params(self, **changes):
        """Build a new parameter struct and emit it.

        Args:
            **changes: FilterParameters fields to replace
        """
        try:
            self.params = replace(self.params, **changes)
        except ParameterOutOfRange as e:
            logger.warning("Rejected filter setting: %s", e)
            return
        self.params_changed.emit(self.params)

    def set_params(self, params: FilterParameters):
        """Show externally changed settings without emitting params_changed."""
        self.params = params
        for widget in (
            self.grayscale_check,
            self.contrast_spin,
            self.grain_slider,
            self.tint_button,
        ):
            widget.blockSignals(True)
        try:
            self.grayscale_check.setChecked(params.grayscale_enabled)
            self.contrast_spin.setValue(params.contrast_factor)
            self.grain_slider.setValue(int(params.grain_amplitude))
            self.grain_label.setText(str(int(params.grain_amplitude)))
            self.tint_button.set_color(params.tint_color)
        finally:
            for widget in (
                self.grayscale_check,
                self.contrast_spin,
                self.grain_slider,
                self.tint_button,
            ):
                widget.blockSignals(False)
