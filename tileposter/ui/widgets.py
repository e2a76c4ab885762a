"""Small reusable widgets for the parameter panels."""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractSlider,
    QAbstractSpinBox,
    QColorDialog,
    QDoubleSpinBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QSpinBox,
    QWidget,
)

from tileposter.ui.styles import SIZES, swatch_stylesheet


def _with_range(
    widget: "QAbstractSpinBox | QAbstractSlider",
    bounds: "tuple[float, float]",
    value: float,
    tooltip: str,
):
    """Set bounds, start value and tooltip on a spin box or slider."""
    widget.setRange(*bounds)
    widget.setValue(value)
    if tooltip:
        widget.setToolTip(tooltip)
    return widget


class WidgetFactory:
    """Builds the numeric inputs used by the filter and tile panels.

    Widget ranges double as the UI-side clamp for parameter values, so the
    bounds passed here should sit inside what the parameter structs accept.
    """

    @staticmethod
    def create_double_spinbox(
        range_min: float,
        range_max: float,
        value: float,
        suffix: str = "",
        decimals: int = 2,
        step: float = 0.1,
        tooltip: str = "",
    ) -> QDoubleSpinBox:
        """Spin box for float settings such as the contrast factor."""
        spinbox = QDoubleSpinBox()
        # Decimals first, otherwise the range and value get rounded
        spinbox.setDecimals(decimals)
        spinbox.setSingleStep(step)
        spinbox.setSuffix(suffix)
        return _with_range(spinbox, (range_min, range_max), value, tooltip)

    @staticmethod
    def create_int_spinbox(
        range_min: int,
        range_max: int,
        value: int,
        suffix: str = "",
        step: int = 1,
        tooltip: str = "",
    ) -> QSpinBox:
        spinbox = QSpinBox()
        spinbox.setSingleStep(step)
        spinbox.setSuffix(suffix)
        return _with_range(spinbox, (range_min, range_max), value, tooltip)

    @staticmethod
    def create_slider_with_label(
        range_min: int, range_max: int, value: int, tooltip: str = ""
    ) -> "tuple[QSlider, QLabel]":
        """Horizontal slider plus a label for its displayed value.

        The caller owns the label text, since most sliders show a converted
        value (percent slider -> 0-1 density).
        """
        slider = _with_range(
            QSlider(Qt.Orientation.Horizontal), (range_min, range_max), value, tooltip
        )
        label = QLabel(str(value))
        label.setMinimumWidth(SIZES.LABEL_MIN_WIDTH)
        return slider, label

    @staticmethod
    def create_labeled_row(label_text: str, *widgets: QWidget) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addWidget(QLabel(label_text))
        for widget in widgets:
            row.addWidget(widget)
        return row


class ColorButton(QPushButton):
    """Flat swatch button that opens a color picker when clicked."""

    color_changed = pyqtSignal(tuple)  # (r, g, b)

    def __init__(self, color: "tuple[int, int, int]", parent=None):
        super().__init__(parent)
        self.setFixedSize(*SIZES.COLOR_SWATCH_SIZE)
        self.clicked.connect(self._pick_color)
        self.set_color(color)

    def color(self) -> "tuple[int, int, int]":
        return self._color

    def set_color(self, color: "tuple[int, int, int]"):
        """Update the swatch without emitting color_changed."""
        self._color = tuple(color)
        self.setStyleSheet(swatch_stylesheet(self._color))
        self.setToolTip("#%02x%02x%02x" % self._color)

    def _pick_color(self):
        chosen = QColorDialog.getColor(QColor(*self._color), self, "Tint Color")
        if chosen.isValid():
            self.set_color((chosen.red(), chosen.green(), chosen.blue()))
            self.color_changed.emit(self._color)
