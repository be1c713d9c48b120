"""
Application State (Data Model)
==============================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current matrix, rectangle size, camera and
   the raw text of every matrix cell in one place.
2. Persistence: The matrix and the two sizes are what gets written to settings.
3. Decoupling: Views read from this object; the controller writes to it
   through the methods below, never by assigning fields from outside.

Classes:
    AppState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from transformviz.config import DEFAULT_HEIGHT, DEFAULT_WIDTH
from transformviz.model.camera import CameraState
from transformviz.model.expression import ExpressionError, evaluate_expression
from transformviz.model.geometry import as_matrix, identity_matrix, is_affine
from transformviz.model.pipeline import TransformedPoint, transform_shape
from transformviz.model.shape import Shape, make_rectangle

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


def format_cell(value: float) -> str:
    """Text shown in a matrix cell for a value set programmatically."""
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))


def _texts_for(matrix: npt.NDArray[np.float64]) -> list[list[str]]:
    return [[format_cell(matrix[r][c]) for c in range(3)] for r in range(3)]


def parse_size(text: str) -> Optional[float]:
    """Parse a size field. Returns None unless the text is a finite number > 0."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


@dataclass
class AppState:
    """
    Single owner of everything the visualizer shows.
    Pass this instance to the controller; views only read from it.
    """
    matrix: npt.NDArray[np.float64] = field(default_factory=identity_matrix)
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    camera: CameraState = field(default_factory=CameraState)

    cell_texts: list[list[str]] = field(default_factory=lambda: _texts_for(identity_matrix()))
    invalid_cells: set[Cell] = field(default_factory=set)

    # ---- derived ----

    def shape(self) -> Shape:
        return make_rectangle(self.width, self.height)

    def transformed(self) -> tuple[TransformedPoint, ...]:
        return transform_shape(self.matrix, self.shape())

    def is_affine(self) -> bool:
        return is_affine(self.matrix)

    # ---- mutation ----

    def set_matrix(self, matrix: npt.NDArray[np.float64]) -> None:
        """Replace the matrix wholesale and rewrite the cell texts to match."""
        self.matrix = as_matrix(matrix)
        self.cell_texts = _texts_for(self.matrix)
        self.invalid_cells.clear()

    def set_cell_text(self, row: int, col: int, text: str) -> None:
        """Record raw cell text. The matrix is only updated by `parse_cells`."""
        if not (0 <= row < 3 and 0 <= col < 3):
            raise IndexError(f"Cell ({row}, {col}) is outside the 3x3 matrix.")
        self.cell_texts[row][col] = text

    def parse_cells(self) -> bool:
        """
        Evaluate all cell texts into a new matrix.

        Empty or invalid cells become 0 and are flagged in `invalid_cells`;
        the matrix is replaced either way.

        Returns:
            True if every cell was valid.
        """
        matrix = np.zeros((3, 3), dtype=np.float64)
        invalid: set[Cell] = set()

        for r in range(3):
            for c in range(3):
                text = self.cell_texts[r][c]
                if not text.strip():
                    invalid.add((r, c))
                    continue
                try:
                    matrix[r, c] = evaluate_expression(text)
                except ExpressionError as e:
                    logger.debug(f"Cell ({r}, {c}) rejected: {e}")
                    invalid.add((r, c))

        self.matrix = matrix
        self.invalid_cells = invalid
        return not invalid

    def set_size(self, width: Optional[float] = None, height: Optional[float] = None) -> bool:
        """
        Update the rectangle size. Non-finite or non-positive values are ignored
        and the previous value is kept.

        Returns:
            True if anything changed.
        """
        changed = False
        if width is not None and math.isfinite(width) and width > 0 and width != self.width:
            self.width = float(width)
            changed = True
        if height is not None and math.isfinite(height) and height > 0 and height != self.height:
            self.height = float(height)
            changed = True
        return changed

    def reset(self) -> None:
        """Restore defaults (identity matrix, default size, default camera)."""
        view = (self.camera.view_width, self.camera.view_height)
        self.set_matrix(identity_matrix())
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.camera = CameraState()
        self.camera.resize(*view)
        logger.info("Application state has been reset.")
