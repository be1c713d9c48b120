"""
Settings Persistence (QSettings)
Saves and restores the matrix and the rectangle size between sessions.

Each value lives under its own key; a broken or missing value only resets
that value to its default. Failures are logged and never raised.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QSettings

from transformviz.config import MATRIX_KEY, SIZE_X_KEY, SIZE_Y_KEY
from transformviz.model.geometry import as_matrix
from transformviz.model.state import AppState, parse_size

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class SettingsStore:
    """Key-value persistence on top of QSettings."""

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        # Default-constructed QSettings uses the organization/application
        # names installed by `create_app`.
        self.settings = settings if settings is not None else QSettings()

    @classmethod
    def from_file(cls, path: str) -> SettingsStore:
        """Store backed by an explicit INI file (tests, portable installs)."""
        return cls(QSettings(path, QSettings.Format.IniFormat))

    # ---- low level ----

    def _write(self, values: dict[str, Any]) -> bool:
        try:
            for key, value in values.items():
                self.settings.setValue(key, value)
            self.settings.sync()
        except Exception as e:
            logger.error(f"Failed to write settings {list(values)}: {e}")
            return False

        if self.settings.status() != QSettings.Status.NoError:
            logger.error(f"Failed to write settings {list(values)}: status {self.settings.status()}")
            return False
        return True

    def _read(self, key: str) -> Optional[Any]:
        try:
            return self.settings.value(key)
        except Exception as e:
            logger.warning(f"Could not read setting '{key}': {e}")
            return None

    # ---- matrix ----

    def save_matrix(self, matrix: npt.NDArray[np.float64]) -> bool:
        return self._write({MATRIX_KEY: json.dumps(np.asarray(matrix).tolist())})

    def load_matrix(self) -> Optional[npt.NDArray[np.float64]]:
        """
        Returns:
            The stored matrix, or None if it is missing or malformed.
        """
        raw = self._read(MATRIX_KEY)
        if raw is None or raw == "":
            return None
        try:
            return as_matrix(json.loads(str(raw)))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Ignoring stored matrix: {e}")
            return None

    # ---- size ----

    def save_size(self, width: float, height: float) -> bool:
        return self._write({SIZE_X_KEY: repr(float(width)), SIZE_Y_KEY: repr(float(height))})

    def load_size(self) -> tuple[Optional[float], Optional[float]]:
        """
        Returns:
            (width, height); each is None when missing, unparsable or not positive.
        """
        sizes = []
        for key in (SIZE_X_KEY, SIZE_Y_KEY):
            raw = self._read(key)
            value = parse_size(raw) if raw is not None else None
            if raw is not None and value is None:
                logger.warning(f"Ignoring stored {key}={raw!r}")
            sizes.append(value)
        return sizes[0], sizes[1]

    # ---- whole state ----

    def save_state(self, state: AppState) -> bool:
        ok_matrix = self.save_matrix(state.matrix)
        ok_size = self.save_size(state.width, state.height)
        return ok_matrix and ok_size

    def load_state(self, state: AppState) -> None:
        """Apply whatever valid values are stored onto `state`; keep the rest."""
        matrix = self.load_matrix()
        if matrix is not None:
            state.set_matrix(matrix)
        width, height = self.load_size()
        state.set_size(width=width, height=height)
        logger.info(
            f"Loaded settings: matrix={'stored' if matrix is not None else 'default'}, "
            f"size=({state.width:g}, {state.height:g})"
        )
