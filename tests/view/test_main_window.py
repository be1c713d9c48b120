"""Offscreen smoke tests for the main window and its widgets."""

from __future__ import annotations

import numpy as np
import pytest
from PySide6.QtTest import QTest

from transformviz.controller.app_controller import AppController
from transformviz.model.io import SettingsStore
from transformviz.model.state import AppState
from transformviz.view.main_window import MainWindow
from transformviz.view.widgets.matrix_editor import INVALID_STYLE


@pytest.fixture
def window(qapp, store: SettingsStore):
    controller = AppController(AppState(), store)
    win = MainWindow(controller)
    win.show()
    qapp.processEvents()
    yield win
    win.close()


def test_canvas_renders(window: MainWindow) -> None:
    assert not window.canvas.grab().isNull()


def test_canvas_size_drives_camera(window: MainWindow) -> None:
    camera = window.controller.state.camera
    assert (camera.view_width, camera.view_height) == (window.canvas.width(), window.canvas.height())


def test_editor_shows_initial_matrix(window: MainWindow) -> None:
    cells = window.control_panel.matrix_editor.cells
    assert [[cell.text() for cell in row] for row in cells] == [["1", "0", "0"], ["0", "1", "0"], ["0", "0", "1"]]
    assert window.control_panel.size_x.text() == "5"


def test_preset_button_updates_editor_and_readout(window: MainWindow) -> None:
    panel = window.control_panel
    panel.preset_buttons["translate"].click()

    assert panel.matrix_editor.cells[0][2].text() == "80"
    assert panel.matrix_editor.cells[1][2].text() == "40"
    assert panel.readout.rows[0][2].text() == "→ (80, 40)"


def test_projective_warning(window: MainWindow) -> None:
    editor = window.control_panel.matrix_editor
    assert editor.warning.isHidden()

    window.controller.edit_cell(2, 0, "0.01")
    window.controller.flush()

    assert not editor.warning.isHidden()
    assert not window.canvas.grab().isNull()


def test_typing_garbage_marks_cell_invalid(window: MainWindow) -> None:
    cell = window.control_panel.matrix_editor.cells[0][0]

    QTest.keyClicks(cell, "x")
    window.controller.flush()

    assert (0, 0) in window.controller.state.invalid_cells
    assert cell.styleSheet() == INVALID_STYLE


def test_expression_cell_shows_value_tooltip(window: MainWindow) -> None:
    editor = window.control_panel.matrix_editor
    editor.cells[0][0].setText("cos(0)")
    window.controller.edit_cell(0, 0, "cos(0)")
    window.controller.flush()

    assert editor.cells[0][0].toolTip() == "= 1.000000"
    assert editor.cells[0][0].styleSheet() == ""


def test_reset_rewrites_size_fields(window: MainWindow) -> None:
    panel = window.control_panel
    panel.size_x.setText("2")
    window.controller.edit_size("x", "2")
    window.controller.flush()
    assert window.controller.state.width == 2.0

    window.act_defaults.trigger()

    assert panel.size_x.text() == "5"
    assert panel.size_y.text() == "5"


def test_close_commits_pending_edit(window: MainWindow, store: SettingsStore) -> None:
    window.controller.edit_cell(0, 0, "3")
    window.close()

    assert np.array_equal(store.load_matrix()[0], [3.0, 0.0, 0.0])


def test_restore_defaults_action(window: MainWindow) -> None:
    window.control_panel.preset_buttons["rotate"].click()
    window.act_defaults.trigger()

    assert window.control_panel.matrix_editor.cells[0][1].text() == "0"
    assert window.controller.state.is_affine()


def test_overflowing_cell_still_renders(window: MainWindow) -> None:
    window.controller.edit_cell(0, 0, "1e308")
    window.controller.flush()
    window.controller.auto_fit()

    assert not window.canvas.grab().isNull()
    assert window.control_panel.readout.rows[1][2].text() == "→ (∞, ∞)"
    assert window.controller.state.camera.zoom > 0.0
