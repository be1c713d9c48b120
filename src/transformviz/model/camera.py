"""
Camera / Viewport Transform
===========================
Maps between world coordinates (y up) and view pixels (y down).

The camera is described by a zoom factor (pixels per world unit) and a pan
point (the world coordinate shown at the center of the view).
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from transformviz.config import (
    CANVAS_SIZE, DEFAULT_ZOOM, ZOOM_IN_FACTOR, ZOOM_MAX, ZOOM_MIN, ZOOM_OUT_FACTOR
)

logger = logging.getLogger(__name__)


def clamp_zoom(zoom: float, zoom_min: float = ZOOM_MIN, zoom_max: float = ZOOM_MAX) -> float:
    return max(zoom_min, min(zoom, zoom_max))


@dataclass
class CameraState:
    """
    Zoom/pan state plus transient drag tracking.

    `view_width` and `view_height` are the pixel size of the surface the
    camera renders into; the view center is half of each.
    """
    zoom: float = DEFAULT_ZOOM
    pan_x: float = 0.0
    pan_y: float = 0.0
    view_width: float = float(CANVAS_SIZE)
    view_height: float = float(CANVAS_SIZE)

    # drag tracking
    dragging: bool = False
    last_x: float = 0.0
    last_y: float = 0.0

    # ---- coordinate mapping ----

    @property
    def view_center(self) -> tuple[float, float]:
        return self.view_width / 2.0, self.view_height / 2.0

    def world_to_view(self, x: float, y: float) -> tuple[float, float]:
        cx, cy = self.view_center
        return cx + (x - self.pan_x) * self.zoom, cy - (y - self.pan_y) * self.zoom

    def view_to_world(self, vx: float, vy: float) -> tuple[float, float]:
        cx, cy = self.view_center
        return (vx - cx) / self.zoom + self.pan_x, -(vy - cy) / self.zoom + self.pan_y

    def visible_world_bounds(self) -> tuple[float, float, float, float]:
        """Return (x_min, x_max, y_min, y_max) of the world area currently in view."""
        x0, y1 = self.view_to_world(0.0, 0.0)
        x1, y0 = self.view_to_world(self.view_width, self.view_height)
        return x0, x1, y0, y1

    # ---- mutation ----

    def resize(self, width: float, height: float) -> None:
        self.view_width = max(1.0, float(width))
        self.view_height = max(1.0, float(height))

    def zoom_at(self, vx: float, vy: float, factor: float) -> None:
        """
        Multiply the zoom by `factor` while keeping the world point under the
        view anchor (vx, vy) fixed. The result is clamped to [ZOOM_MIN, ZOOM_MAX].
        """
        before_x, before_y = self.view_to_world(vx, vy)
        self.zoom = clamp_zoom(self.zoom * factor)
        after_x, after_y = self.view_to_world(vx, vy)
        self.pan_x += before_x - after_x
        self.pan_y += before_y - after_y

    def zoom_tick(self, vx: float, vy: float, direction: float) -> None:
        """One wheel step: zoom in for a positive direction, out otherwise."""
        self.zoom_at(vx, vy, ZOOM_IN_FACTOR if direction > 0 else ZOOM_OUT_FACTOR)

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view by a pixel delta; content follows the pointer."""
        self.pan_x -= dx / self.zoom
        self.pan_y += dy / self.zoom

    def begin_drag(self, vx: float, vy: float) -> None:
        self.dragging = True
        self.last_x = vx
        self.last_y = vy

    def drag_to(self, vx: float, vy: float) -> bool:
        """
        Continue a drag gesture.

        Returns:
            True if the camera moved (a drag was active), False otherwise.
        """
        if not self.dragging:
            return False
        self.pan_by(vx - self.last_x, vy - self.last_y)
        self.last_x = vx
        self.last_y = vy
        return True

    def end_drag(self) -> None:
        self.dragging = False

    def look_at(self, x: float, y: float, zoom: float) -> None:
        """Set pan and zoom directly (used by auto-fit, which applies its own cap)."""
        self.pan_x = x
        self.pan_y = y
        self.zoom = zoom
        logger.debug(f"Camera set to center=({x:g}, {y:g}), zoom={zoom:g}")
