"""
Geometry Core
=============
Matrix-vector products in homogeneous coordinates and the projective divide.

All functions are pure: they never mutate their inputs.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from transformviz.config import AFFINE_EPSILON, W_EPSILON

if TYPE_CHECKING:
    import numpy.typing as npt

    from transformviz.model.shape import Corner


@dataclass(frozen=True)
class Point:
    """A Cartesian point in the XY plane."""
    x: float
    y: float


@dataclass(frozen=True)
class HomogeneousPoint:
    """The result of M·[x, y, 1]ᵗ before the divide."""
    x: float
    y: float
    w: float


def identity_matrix() -> npt.NDArray[np.float64]:
    return np.eye(3, dtype=np.float64)


def as_matrix(values: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Coerce a nested sequence into a fully populated 3x3 float matrix.

    Args:
        values: Row-major 3x3 nested sequence or array.

    Returns:
        A new (3, 3) float64 array.

    Raises:
        ValueError: If the input is not 3x3 or contains non-finite entries.
    """
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Matrix entries must be numbers: {e}") from e

    if arr.shape != (3, 3):
        raise ValueError(f"Expected shape (3, 3), got {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Matrix entries must be finite.")
    return arr


def apply_matrix(matrix: npt.NDArray[np.float64], point: Point | Corner) -> HomogeneousPoint:
    """
    Multiply a 3x3 matrix by the column vector (x, y, 1).

    Args:
        matrix: (3, 3) transformation matrix.
        point: Point with x and y attributes.

    Returns:
        The homogeneous result (x', y', w').
    """
    m = matrix
    x, y = point.x, point.y
    return HomogeneousPoint(
        x=float(m[0][0] * x + m[0][1] * y + m[0][2]),
        y=float(m[1][0] * x + m[1][1] * y + m[1][2]),
        w=float(m[2][0] * x + m[2][1] * y + m[2][2]),
    )


def projective_divide(h: HomogeneousPoint) -> Optional[Point]:
    """
    Recover Cartesian coordinates from a homogeneous point.

    Returns None for a point at infinity: |w'| below W_EPSILON, or a quotient
    that overflows the float range.
    """
    if not abs(h.w) >= W_EPSILON:
        return None
    x = h.x / h.w
    y = h.y / h.w
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return Point(x, y)


def is_affine(matrix: npt.NDArray[np.float64]) -> bool:
    """True if the bottom row is (0, 0, 1) within AFFINE_EPSILON."""
    return (
        abs(matrix[2][0]) < AFFINE_EPSILON
        and abs(matrix[2][1]) < AFFINE_EPSILON
        and abs(matrix[2][2] - 1.0) < AFFINE_EPSILON
    )
