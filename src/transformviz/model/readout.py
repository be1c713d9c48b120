"""
Readout & Grid Helpers
Pure formatting and layout computations consumed by the rendering surface.
"""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from transformviz.config import GRID_MAX_LINES, GRID_MAX_PX, GRID_MIN_PX, INTEGER_DISPLAY_TOLERANCE, W_DISPLAY_TOLERANCE
from transformviz.model.pipeline import TransformedPoint

INFINITY_TEXT = "(∞, ∞)"


def format_coord(value: float) -> str:
    """Integers without decimals, everything else with two."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if abs(value - round(value)) < INTEGER_DISPLAY_TOLERANCE:
        return str(round(value))
    return f"{value:.2f}"


def format_point(x: float, y: float) -> str:
    return f"({format_coord(x)}, {format_coord(y)})"


def format_transformed(tp: TransformedPoint) -> str:
    """
    Text for the transformed side of a readout row.

    Shows the homogeneous weight when it differs noticeably from 1, and
    "(∞, ∞)" for a point at infinity.
    """
    if not tp.is_finite:
        return INFINITY_TEXT
    text = format_point(tp.final.x, tp.final.y)
    if abs(tp.homogeneous.w - 1.0) > W_DISPLAY_TOLERANCE:
        text += f" [w={tp.homogeneous.w:.2f}]"
    return text


def readout_rows(points: Iterable[TransformedPoint]) -> list[tuple[str, str, str]]:
    """One (label, original, transformed) row per corner."""
    return [
        (tp.label, format_point(tp.original.x, tp.original.y), format_transformed(tp))
        for tp in points
    ]


def grid_spacing(zoom: float, min_px: float = GRID_MIN_PX, max_px: float = GRID_MAX_PX) -> float:
    """
    World spacing of grid lines for the given zoom.

    The default of one world unit is kept while it lands between `min_px` and
    `max_px` on screen; otherwise it is coarsened to whole units or refined to
    unit fractions.
    """
    pixel_spacing = zoom
    if pixel_spacing < min_px:
        return float(math.ceil(min_px / zoom))
    if pixel_spacing > max_px:
        return 1.0 / math.ceil(zoom / max_px)
    return 1.0


def grid_lines(lo: float, hi: float, spacing: float, max_lines: int = GRID_MAX_LINES) -> np.ndarray:
    """
    World coordinates of grid lines covering [lo, hi].

    Empty when the range is invalid, not finite, or would need more than
    `max_lines` lines (far from the origin, where neighbouring floats are
    further apart than `spacing`).
    """
    if not (spacing > 0 and lo <= hi and math.isfinite(lo) and math.isfinite(hi)):
        return np.empty(0, dtype=np.float64)
    start = np.floor(lo / spacing)
    stop = np.ceil(hi / spacing)
    count = stop - start + 1
    if not (math.isfinite(count) and count <= max_lines):
        return np.empty(0, dtype=np.float64)
    return (start + np.arange(int(count), dtype=np.float64)) * spacing
