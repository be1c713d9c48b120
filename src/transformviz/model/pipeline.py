"""
Transform Pipeline
Applies the current matrix to every corner of the shape.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from transformviz.model.geometry import HomogeneousPoint, Point, apply_matrix, projective_divide
from transformviz.model.shape import Corner

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class TransformedPoint:
    """
    A corner after transformation.

    `final` is None when the corner was sent to infinity (w' ~ 0).
    """
    original: Corner
    homogeneous: HomogeneousPoint
    final: Optional[Point]

    @property
    def label(self) -> str:
        return self.original.label

    @property
    def is_finite(self) -> bool:
        return self.final is not None


def transform_shape(matrix: npt.NDArray[np.float64], shape: Sequence[Corner]) -> tuple[TransformedPoint, ...]:
    """
    Transform each corner of `shape` by `matrix`.

    Args:
        matrix: (3, 3) transformation matrix.
        shape: Ordered corners.

    Returns:
        One TransformedPoint per input corner, in the same order.
    """
    result = []
    for corner in shape:
        h = apply_matrix(matrix, corner)
        result.append(TransformedPoint(original=corner, homogeneous=h, final=projective_divide(h)))
    return tuple(result)


def is_fully_finite(points: Iterable[TransformedPoint]) -> bool:
    """True if every point survived the divide, i.e. the polygon can be drawn closed."""
    return all(tp.is_finite for tp in points)


def finite_points(points: Iterable[TransformedPoint]) -> list[Point]:
    return [tp.final for tp in points if tp.is_finite]
