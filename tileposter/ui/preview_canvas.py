"""Poster preview widget with drag and wheel-zoom placement."""

from PIL import Image
from PyQt6 import QtWidgets
from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPainter, QPen

from tileposter.models import PREVIEW_HEIGHT, PREVIEW_WIDTH
from tileposter.ui.styles import COLORS, SIZES
from tileposter.viewport import ViewportController


def pil_to_qimage(image: Image.Image) -> QImage:
    """Convert a Pillow image into a QImage that owns its pixel data."""
    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(
        data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888
    )
    # AIDEV-NOTE: copy() detaches from `data`, which is freed after return
    return qimage.copy()


class PreviewCanvas(QtWidgets.QWidget):
    """Shows the composited poster and forwards mouse input to the viewport.

    The poster is drawn scaled to fit the widget; mouse positions are mapped
    back to poster canvas coordinates before reaching the ViewportController.
    """

    viewport_changed = pyqtSignal()

    def __init__(
        self,
        viewport: ViewportController,
        canvas_size: "tuple[int, int]" = (PREVIEW_WIDTH, PREVIEW_HEIGHT),
        parent=None,
    ):
        super().__init__(parent)
        self.viewport = viewport
        self.canvas_size = canvas_size
        self.frame: QImage | None = None
        self.setMinimumSize(*SIZES.PREVIEW_MIN_SIZE)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def set_frame(self, image: Image.Image):
        """Display a newly rendered poster frame."""
        self.frame = pil_to_qimage(image)
        self.update()  # Trigger repaint

    def _target_rect(self) -> QRectF:
        """Widget rectangle the poster is drawn into (aspect preserved)."""
        padding = SIZES.PREVIEW_PADDING
        canvas_w, canvas_h = self.canvas_size
        available_w = max(1, self.width() - 2 * padding)
        available_h = max(1, self.height() - 2 * padding)
        scale = min(available_w / canvas_w, available_h / canvas_h)

        width = canvas_w * scale
        height = canvas_h * scale
        return QRectF(
            (self.width() - width) / 2, (self.height() - height) / 2, width, height
        )

    def _to_canvas(self, pos: QPointF) -> "tuple[float, float]":
        """Convert widget coordinates to poster canvas coordinates."""
        rect = self._target_rect()
        scale = rect.width() / self.canvas_size[0]
        return (pos.x() - rect.x()) / scale, (pos.y() - rect.y()) / scale

    def paintEvent(self, event):
        """Render the current frame."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), COLORS.PREVIEW_SURROUND)

        rect = self._target_rect()
        if self.frame is not None:
            painter.drawImage(rect, self.frame)

        painter.setPen(QPen(COLORS.PREVIEW_BORDER, 1))
        painter.drawRect(rect)

    # === Mouse Interaction ===

    def mousePressEvent(self, a0):
        if a0 is None or a0.button() != Qt.MouseButton.LeftButton:
            return
        x, y = self._to_canvas(a0.position())
        if self.viewport.begin_drag(x, y):
            self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, a0):
        if a0 is None or not self.viewport.is_dragging:
            return
        x, y = self._to_canvas(a0.position())
        if self.viewport.drag_to(x, y):
            self.viewport_changed.emit()

    def mouseReleaseEvent(self, a0):
        self.viewport.end_drag()
        self.unsetCursor()

    def wheelEvent(self, a0):
        if a0 is None:
            return
        # Scrolling down (negative angle delta) zooms out
        if self.viewport.zoom(-a0.angleDelta().y()):
            self.viewport_changed.emit()
        a0.accept()
