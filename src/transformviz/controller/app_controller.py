"""
Application Controller
======================
The only place where the application state is mutated.

Why is this file needed?
------------------------
1. Single writer: Views forward raw input (cell text, size text, pointer
   events, button clicks) here; the controller updates `AppState`, persists
   committed changes and tells the views to redraw.
2. Debounce: Keystroke bursts in the matrix and size fields are coalesced
   into one recompute.

Signals:
    state_changed: Anything visible changed; views should repaint.
    matrix_changed: The matrix was replaced programmatically (preset, load);
        editors should rewrite their text from `state.cell_texts`.
    size_changed: The rectangle size was replaced programmatically (load, reset).
    cells_validated(object): Set of invalid (row, col) cells after a parse.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from transformviz.config import MATRIX_DEBOUNCE_MS, SIZE_DEBOUNCE_MS
from transformviz.controller.debounce import Debouncer
from transformviz.model.autofit import auto_fit
from transformviz.model.io import SettingsStore
from transformviz.model.presets import preset_matrix
from transformviz.model.state import AppState, parse_size

logger = logging.getLogger(__name__)

MATRIX_COMMIT = "matrix"
SIZE_COMMIT = "size"


class AppController(QObject):
    state_changed = Signal()
    matrix_changed = Signal()
    size_changed = Signal()
    cells_validated = Signal(object)

    def __init__(
        self,
        state: Optional[AppState] = None,
        store: Optional[SettingsStore] = None,
        parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self.state: AppState = state if state is not None else AppState()
        self.store: SettingsStore = store if store is not None else SettingsStore()
        self.debouncer = Debouncer(self)

        self._pending_sizes: dict[str, str] = {}

    # ------------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------------

    def load(self) -> None:
        """Restore persisted values and frame the scene."""
        self.store.load_state(self.state)
        self.matrix_changed.emit()
        self.size_changed.emit()
        self.auto_fit()

    def flush(self) -> None:
        """Commit any edit still waiting on its debounce timer."""
        self.debouncer.flush()

    # ------------------------------------------------------------------------------
    # Matrix
    # ------------------------------------------------------------------------------

    def edit_cell(self, row: int, col: int, text: str) -> None:
        """Record cell text and schedule a debounced recompute."""
        self.state.set_cell_text(row, col, text)
        self.debouncer.schedule(MATRIX_COMMIT, MATRIX_DEBOUNCE_MS, self.commit_matrix)

    def commit_matrix(self) -> bool:
        """Parse all cells, persist and redraw. Returns True if all cells were valid."""
        self.debouncer.cancel(MATRIX_COMMIT)
        all_valid = self.state.parse_cells()
        self.cells_validated.emit(set(self.state.invalid_cells))
        self.store.save_matrix(self.state.matrix)
        self.state_changed.emit()
        return all_valid

    def apply_preset(self, name: str) -> None:
        """
        Replace the matrix with a named preset.

        Raises:
            KeyError: For an unknown preset name.
        """
        matrix = preset_matrix(name)
        self.debouncer.cancel(MATRIX_COMMIT)
        self.state.set_matrix(matrix)
        logger.info(f"Preset '{name}' applied")
        self.store.save_matrix(self.state.matrix)
        self.matrix_changed.emit()
        self.cells_validated.emit(set())
        self.state_changed.emit()

    # ------------------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------------------

    def edit_size(self, axis: str, text: str) -> None:
        """
        Record raw size text for axis "x" (width) or "y" (height) and schedule
        a debounced commit.
        """
        if axis not in ("x", "y"):
            raise ValueError(f"Unknown size axis '{axis}'")
        self._pending_sizes[axis] = text
        self.debouncer.schedule((SIZE_COMMIT, axis), SIZE_DEBOUNCE_MS, lambda a=axis: self.commit_size(a))

    def commit_size(self, axis: str) -> bool:
        """
        Apply the pending size text. Invalid or non-positive text is ignored.

        Returns:
            True if the size changed.
        """
        self.debouncer.cancel((SIZE_COMMIT, axis))
        text = self._pending_sizes.pop(axis, None)
        if text is None:
            return False

        value = parse_size(text)
        if value is None:
            logger.debug(f"Ignoring size input {axis}={text!r}")
            return False

        if axis == "x":
            changed = self.state.set_size(width=value)
        else:
            changed = self.state.set_size(height=value)
        if changed:
            self.store.save_size(self.state.width, self.state.height)
            self.state_changed.emit()
        return changed

    # ------------------------------------------------------------------------------
    # Camera
    # ------------------------------------------------------------------------------

    def auto_fit(self) -> None:
        state = self.state
        auto_fit(state.camera, state.shape(), state.transformed())
        self.state_changed.emit()

    def wheel(self, vx: float, vy: float, delta: float) -> None:
        """Zoom one tick about the view point (vx, vy); positive delta zooms in."""
        if delta == 0:
            return
        self.state.camera.zoom_tick(vx, vy, delta)
        self.state_changed.emit()

    def press(self, vx: float, vy: float) -> None:
        self.state.camera.begin_drag(vx, vy)

    def move(self, vx: float, vy: float) -> None:
        if self.state.camera.drag_to(vx, vy):
            self.state_changed.emit()

    def release(self) -> None:
        self.state.camera.end_drag()

    def resize(self, width: float, height: float) -> None:
        self.state.camera.resize(width, height)
        self.state_changed.emit()

    def reset(self) -> None:
        """Back to defaults: identity, default size, fitted camera."""
        self.debouncer.cancel(MATRIX_COMMIT)
        self._pending_sizes.clear()
        for axis in ("x", "y"):
            self.debouncer.cancel((SIZE_COMMIT, axis))
        self.state.reset()
        self.store.save_state(self.state)
        self.matrix_changed.emit()
        self.size_changed.emit()
        self.cells_validated.emit(set())
        self.auto_fit()
