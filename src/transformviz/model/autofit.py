"""
Auto-Fit
Frames the original shape and its finite transformed image in the viewport.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from transformviz.config import AUTOFIT_FILL, AUTOFIT_MARGIN, AUTOFIT_ZOOM_CAP, ZOOM_MIN
from transformviz.model.camera import CameraState
from transformviz.model.pipeline import TransformedPoint, finite_points
from transformviz.model.shape import Corner

logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]


def bounding_box(points: Iterable) -> Bounds | None:
    """
    Axis aligned bounding box of points with x/y attributes.

    Returns:
        (x_min, x_max, y_min, y_max), or None for an empty input.
    """
    pts = list(points)
    if not pts:
        return None
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return min(xs), max(xs), min(ys), max(ys)


def inflate(bounds: Bounds, margin: float = AUTOFIT_MARGIN) -> Bounds:
    """Grow the box by `margin` times its extent on every side."""
    x_min, x_max, y_min, y_max = bounds
    pad_x = (x_max - x_min) * margin
    pad_y = (y_max - y_min) * margin
    return x_min - pad_x, x_max + pad_x, y_min - pad_y, y_max + pad_y


def fit_zoom(
    bounds: Bounds,
    view_width: float,
    view_height: float,
    fill: float = AUTOFIT_FILL,
    cap: float = AUTOFIT_ZOOM_CAP
) -> float:
    """
    Largest zoom at which `bounds` occupies at most `fill` of the view, capped.

    An axis with zero extent imposes no limit, so degenerate boxes (a single
    point, a line) end up at the cap. Boxes too large to fit even at ZOOM_MIN
    get ZOOM_MIN; the result is always positive.
    """
    x_min, x_max, y_min, y_max = bounds
    width = x_max - x_min
    height = y_max - y_min
    zoom_x = view_width * fill / width if width > 0 else math.inf
    zoom_y = view_height * fill / height if height > 0 else math.inf
    return max(min(zoom_x, zoom_y, cap), ZOOM_MIN)


def fit_bounds(shape: Sequence[Corner], transformed: Sequence[TransformedPoint]) -> Bounds | None:
    """Inflated bounding box of the shape plus every finite transformed corner."""
    box = bounding_box([*shape, *finite_points(transformed)])
    if box is None:
        return None
    return inflate(box)


def auto_fit(
    camera: CameraState,
    shape: Sequence[Corner],
    transformed: Sequence[TransformedPoint]
) -> Bounds | None:
    """
    Move the camera so that both shapes are visible with a margin.

    Args:
        camera: Camera to update in place.
        shape: Original corners.
        transformed: Output of `transform_shape` for those corners.

    Returns:
        The framed world box, or None if there was nothing to frame or the box
        overflows the float range (camera untouched in both cases).
    """
    bounds = fit_bounds(shape, transformed)
    if bounds is None:
        return None

    x_min, x_max, y_min, y_max = bounds
    center_x = (x_min + x_max) / 2.0
    center_y = (y_min + y_max) / 2.0
    if not all(math.isfinite(v) for v in (*bounds, center_x, center_y)):
        logger.warning(f"Auto-fit skipped, bounds out of range: {bounds}")
        return None

    zoom = fit_zoom(bounds, camera.view_width, camera.view_height)
    camera.look_at(center_x, center_y, zoom)
    logger.info(f"Auto-fit to [{x_min:g}, {x_max:g}] x [{y_min:g}, {y_max:g}], zoom={zoom:.3g}")
    return bounds
