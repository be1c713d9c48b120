"""
Matrix Editor
3x3 grid of expression fields bound to the controller.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QFocusEvent
from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QLineEdit, QVBoxLayout, QWidget

from transformviz.config import INVALID_COLOR
from transformviz.model.state import format_cell

if TYPE_CHECKING:
    from transformviz.controller.app_controller import AppController

INVALID_STYLE = f"QLineEdit {{ border: 2px solid {INVALID_COLOR}; }}"


class SelectAllLineEdit(QLineEdit):
    """Line edit that selects its whole content when it gains focus."""

    def focusInEvent(self, event: QFocusEvent) -> None:
        super().focusInEvent(event)
        # deferred, otherwise the click that focused the field clears the selection
        QTimer.singleShot(0, self.selectAll)


class MatrixEditor(QWidget):
    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        box = QGroupBox(self.tr("Transformation matrix"), self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(box)

        grid = QGridLayout(box)
        grid.setHorizontalSpacing(6)
        grid.setVerticalSpacing(6)

        self.cells: list[list[QLineEdit]] = []
        for r in range(3):
            row: list[QLineEdit] = []
            for c in range(3):
                edit = SelectAllLineEdit(box)
                edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
                edit.setMinimumWidth(70)
                edit.textEdited.connect(lambda text, r=r, c=c: self.controller.edit_cell(r, c, text))
                grid.addWidget(edit, r, c)
                row.append(edit)
            self.cells.append(row)

        self.warning = QLabel(self.tr("⚠ Projective matrix: bottom row is not (0, 0, 1)"), self)
        self.warning.setStyleSheet(f"color: {INVALID_COLOR}; font-weight: bold;")
        self.warning.setWordWrap(True)
        layout.addWidget(self.warning)

        controller.matrix_changed.connect(self.load_from_state)
        controller.cells_validated.connect(self.mark_invalid)
        controller.state_changed.connect(self.update_warning)

        self.load_from_state()

    def load_from_state(self) -> None:
        """Rewrite every field from the state's cell texts."""
        texts = self.controller.state.cell_texts
        for r in range(3):
            for c in range(3):
                edit = self.cells[r][c]
                if edit.text() != texts[r][c]:
                    edit.setText(texts[r][c])
        self.mark_invalid(self.controller.state.invalid_cells)
        self.update_warning()

    def mark_invalid(self, invalid: set[tuple[int, int]]) -> None:
        matrix = self.controller.state.matrix
        for r in range(3):
            for c in range(3):
                edit = self.cells[r][c]
                if (r, c) in invalid:
                    edit.setStyleSheet(INVALID_STYLE)
                    edit.setToolTip(self.tr("Invalid expression"))
                    continue
                edit.setStyleSheet("")
                value = float(matrix[r][c])
                # show the evaluated value for anything that is not a plain literal
                if edit.text().strip() != format_cell(value):
                    edit.setToolTip(f"= {value:.6f}")
                else:
                    edit.setToolTip("")

    def update_warning(self) -> None:
        self.warning.setVisible(not self.controller.state.is_affine())
