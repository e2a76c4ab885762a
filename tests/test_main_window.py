import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtCore = pytest.importorskip("PyQt6.QtCore")
QtGui = pytest.importorskip("PyQt6.QtGui")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from tileposter.config_manager import ConfigManager  # noqa: E402
from tileposter.ui.main_window import PosterWindow  # noqa: E402

SPACE = QtGui.QKeySequence(QtCore.Qt.Key.Key_Space)


@pytest.fixture
def window(tmp_path):
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    win = PosterWindow(ConfigManager(tmp_path / "config.json"))
    yield win
    win.close()
    app.processEvents()


def test_space_is_not_a_window_wide_shortcut(window):
    assert SPACE not in window.regenerate_action.shortcuts()
    assert QtGui.QKeySequence(QtCore.Qt.Key.Key_Return) in window.regenerate_action.shortcuts()


def test_space_regenerates_only_from_preview(window):
    action = window.canvas_regenerate_action

    assert action.shortcut() == SPACE
    assert action.shortcutContext() == QtCore.Qt.ShortcutContext.WidgetWithChildrenShortcut
    assert action in window.canvas.actions()
    assert action not in window.filter_controls.actions()


def test_regenerate_actions_follow_placement(window, white_image):
    assert not window.canvas_regenerate_action.isEnabled()

    window.processor.set_image(white_image)
    window.processor.place()
    window._update_action_state()

    assert window.canvas_regenerate_action.isEnabled()
    assert window.regenerate_action.isEnabled()
