"""
Preset Matrices
Named example transforms offered as one-click buttons.
"""
from __future__ import annotations

from math import cos, radians, sin
from typing import Callable, TYPE_CHECKING

import numpy as np

from transformviz.config import PRESET_ANGLE_DEG, PRESET_SCALE, PRESET_TRANSLATION
from transformviz.model.geometry import identity_matrix

if TYPE_CHECKING:
    import numpy.typing as npt


def translation(tx: float, ty: float) -> npt.NDArray[np.float64]:
    m = identity_matrix()
    m[0, 2] = tx
    m[1, 2] = ty
    return m


def rotation(angle_deg: float) -> npt.NDArray[np.float64]:
    """Counter-clockwise rotation about the origin."""
    a = radians(angle_deg)
    c, s = cos(a), sin(a)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def scaling(sx: float, sy: float) -> npt.NDArray[np.float64]:
    return np.diag([sx, sy, 1.0]).astype(np.float64)


def preset_translate() -> npt.NDArray[np.float64]:
    return translation(*PRESET_TRANSLATION)


def preset_rotate() -> npt.NDArray[np.float64]:
    return rotation(PRESET_ANGLE_DEG)


def preset_scale() -> npt.NDArray[np.float64]:
    return scaling(*PRESET_SCALE)


def preset_rotate_scale() -> npt.NDArray[np.float64]:
    # scale first, then rotate: R @ S
    return rotation(PRESET_ANGLE_DEG) @ scaling(*PRESET_SCALE)


def preset_rotate_translate() -> npt.NDArray[np.float64]:
    # rotate about the origin, then translate: T @ R
    return translation(*PRESET_TRANSLATION) @ rotation(PRESET_ANGLE_DEG)


PRESETS: dict[str, Callable[[], npt.NDArray[np.float64]]] = {
    "identity": identity_matrix,
    "translate": preset_translate,
    "rotate": preset_rotate,
    "scale": preset_scale,
    "rotate_scale": preset_rotate_scale,
    "rotate_translate": preset_rotate_translate,
    "reset": identity_matrix,
}

PRESET_LABELS: dict[str, str] = {
    "identity": "Identity",
    "translate": "Translate (80, 40)",
    "rotate": "Rotate 30°",
    "scale": "Scale (1.5, 0.75)",
    "rotate_scale": "Rotate + Scale",
    "rotate_translate": "Rotate + Translate",
    "reset": "Reset",
}


def preset_matrix(name: str) -> npt.NDArray[np.float64]:
    """
    Build a fresh copy of the named preset.

    Raises:
        KeyError: If `name` is not a known preset.
    """
    factory = PRESETS.get(name)
    if factory is None:
        raise KeyError(f"No preset named '{name}'")
    return factory()
