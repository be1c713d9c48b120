from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout, QGridLayout, QGroupBox, QLabel, QPushButton, QVBoxLayout, QWidget
)

from transformviz.config import ORIGINAL_COLOR, TRANSFORMED_COLOR
from transformviz.model.presets import PRESET_LABELS
from transformviz.model.readout import readout_rows
from transformviz.model.state import format_cell
from transformviz.view.widgets.matrix_editor import MatrixEditor, SelectAllLineEdit

if TYPE_CHECKING:
    from transformviz.controller.app_controller import AppController


class CoordinatesReadout(QGroupBox):
    """Original and transformed coordinates of each corner."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setTitle(self.tr("Coordinates"))
        self.controller = controller

        grid = QGridLayout(self)
        grid.setHorizontalSpacing(12)
        self.rows: list[tuple[QLabel, QLabel, QLabel]] = []
        for i in range(4):
            label = QLabel(self)
            label.setStyleSheet("font-weight: bold;")
            original = QLabel(self)
            original.setStyleSheet(f"color: {ORIGINAL_COLOR};")
            transformed = QLabel(self)
            transformed.setStyleSheet(f"color: {TRANSFORMED_COLOR};")
            for col, w in enumerate((label, original, transformed)):
                w.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
                grid.addWidget(w, i, col)
            self.rows.append((label, original, transformed))

        controller.state_changed.connect(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        for (label, original, transformed), row in zip(self.rows, readout_rows(self.controller.state.transformed())):
            label.setText(f"{row[0]}:")
            original.setText(row[1])
            transformed.setText(f"→ {row[2]}")


class ControlPanel(QWidget):
    """Left side of the window: matrix, rectangle size, presets, readout."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Matrix ---
        self.matrix_editor = MatrixEditor(controller, self)
        layout.addWidget(self.matrix_editor)

        # --- Size ---
        size_box = QGroupBox(self.tr("Rectangle size"), self)
        form = QFormLayout(size_box)
        self.size_x = SelectAllLineEdit(size_box)
        self.size_y = SelectAllLineEdit(size_box)
        self.size_x.textEdited.connect(lambda text: self.controller.edit_size("x", text))
        self.size_y.textEdited.connect(lambda text: self.controller.edit_size("y", text))
        form.addRow(self.tr("Width (x):"), self.size_x)
        form.addRow(self.tr("Height (y):"), self.size_y)
        layout.addWidget(size_box)

        # --- Presets ---
        preset_box = QGroupBox(self.tr("Presets"), self)
        preset_grid = QGridLayout(preset_box)
        self.preset_buttons: dict[str, QPushButton] = {}
        for i, (name, text) in enumerate(PRESET_LABELS.items()):
            btn = QPushButton(self.tr(text), preset_box)
            btn.clicked.connect(lambda _=False, n=name: self.controller.apply_preset(n))
            preset_grid.addWidget(btn, i // 2, i % 2)
            self.preset_buttons[name] = btn

        self.btn_autofit = QPushButton(self.tr("Auto-Fit View"), preset_box)
        self.btn_autofit.clicked.connect(self.controller.auto_fit)
        n = len(PRESET_LABELS)
        preset_grid.addWidget(self.btn_autofit, n // 2, n % 2)
        layout.addWidget(preset_box)

        # --- Readout ---
        self.readout = CoordinatesReadout(controller, self)
        layout.addWidget(self.readout)
        layout.addStretch()

        controller.size_changed.connect(self.load_size_from_state)
        self.load_size_from_state()

    def load_size_from_state(self) -> None:
        state = self.controller.state
        self.size_x.setText(format_cell(state.width))
        self.size_y.setText(format_cell(state.height))
