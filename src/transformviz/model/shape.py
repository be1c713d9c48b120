"""
Shape Model
The fixed quadrilateral that the matrix acts on.
"""
from __future__ import annotations

from dataclasses import dataclass

CORNER_LABELS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class Corner:
    """A labeled corner of the source rectangle."""
    label: str
    x: float
    y: float


Shape = tuple[Corner, Corner, Corner, Corner]


def make_rectangle(width: float, height: float) -> Shape:
    """
    Generate the corners of the rectangle (0, 0)-(width, height).

    Winding order is origin, +x, +x+y, +y, labeled A-D. Width and height are
    expected to be positive; validation happens where the values are entered.
    """
    return (
        Corner("A", 0.0, 0.0),
        Corner("B", float(width), 0.0),
        Corner("C", float(width), float(height)),
        Corner("D", 0.0, float(height)),
    )
