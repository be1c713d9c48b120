"""
Transform Canvas
================
QPainter surface that draws the grid, the axes, the original rectangle and
its transformed image, and turns wheel/drag input into camera operations.

The widget holds no state of its own: it paints whatever `AppState` currently
contains and forwards pointer input to the controller.
"""
from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from PySide6.QtCore import QPointF, QSize, Qt
from PySide6.QtGui import (
    QColor, QFont, QMouseEvent, QPainter, QPaintEvent, QPen, QPolygonF, QResizeEvent, QWheelEvent
)
from PySide6.QtWidgets import QSizePolicy, QWidget

from transformviz.config import (
    AXIS_COLOR, CANVAS_SIZE, GRID_COLOR, ORIGIN_LABEL_COLOR, ORIGINAL_COLOR, TRANSFORMED_COLOR
)
from transformviz.model.camera import CameraState
from transformviz.model.pipeline import is_fully_finite
from transformviz.model.readout import grid_lines, grid_spacing

if TYPE_CHECKING:
    from transformviz.controller.app_controller import AppController

POINT_RADIUS = 4.0
LABEL_OFFSET = 8.0
ORIGIN_LABEL_INSET = 10.0


class TransformCanvas(QWidget):
    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMouseTracking(False)
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.setAutoFillBackground(False)

        controller.state_changed.connect(self.update)

    def sizeHint(self) -> QSize:
        return QSize(CANVAS_SIZE, CANVAS_SIZE)

    @property
    def camera(self) -> CameraState:
        return self.controller.state.camera

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        state = self.controller.state
        shape = state.shape()
        transformed = state.transformed()

        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), QColor("white"))

            self._draw_grid(painter)

            self._draw_polygon(painter, [(c.x, c.y) for c in shape], ORIGINAL_COLOR, 2)
            for corner in shape:
                self._draw_point(painter, corner.x, corner.y, corner.label, ORIGINAL_COLOR)

            # a quadrilateral with a vertex at infinity is not drawn
            if is_fully_finite(transformed):
                self._draw_polygon(painter, [(tp.final.x, tp.final.y) for tp in transformed], TRANSFORMED_COLOR, 3)
                for tp in transformed:
                    self._draw_point(painter, tp.final.x, tp.final.y, f"{tp.label}'", TRANSFORMED_COLOR)
        finally:
            painter.end()

    def _draw_grid(self, painter: QPainter) -> None:
        cam = self.camera
        w, h = float(self.width()), float(self.height())
        x_min, x_max, y_min, y_max = cam.visible_world_bounds()
        spacing = grid_spacing(cam.zoom)

        painter.setPen(QPen(QColor(GRID_COLOR), 1))
        for x in grid_lines(x_min, x_max, spacing):
            vx, _ = cam.world_to_view(x, 0.0)
            painter.drawLine(QPointF(vx, 0.0), QPointF(vx, h))
        for y in grid_lines(y_min, y_max, spacing):
            _, vy = cam.world_to_view(0.0, y)
            painter.drawLine(QPointF(0.0, vy), QPointF(w, vy))

        # axes through the world origin
        ox, oy = cam.world_to_view(0.0, 0.0)
        painter.setPen(QPen(QColor(AXIS_COLOR), 2))
        painter.drawLine(QPointF(0.0, oy), QPointF(w, oy))
        painter.drawLine(QPointF(ox, 0.0), QPointF(ox, h))

        inset = ORIGIN_LABEL_INSET
        if inset < ox < w - inset and inset < oy < h - inset:
            painter.setPen(QColor(ORIGIN_LABEL_COLOR))
            font = QFont(painter.font())
            font.setPixelSize(12)
            font.setBold(False)
            painter.setFont(font)
            painter.drawText(QPointF(ox + 5.0, oy + 15.0), "(0,0)")

    def _draw_polygon(
        self,
        painter: QPainter,
        points: Sequence[tuple[float, float]],
        color: str,
        line_width: float
    ) -> None:
        if len(points) < 3:
            return
        polygon = QPolygonF([QPointF(*self.camera.world_to_view(x, y)) for x, y in points])
        painter.setPen(QPen(QColor(color), line_width))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(polygon)

    def _draw_point(self, painter: QPainter, x: float, y: float, label: str, color: str) -> None:
        vx, vy = self.camera.world_to_view(x, y)
        center = QPointF(vx, vy)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(color))
        painter.drawEllipse(center, POINT_RADIUS, POINT_RADIUS)

        font = QFont(painter.font())
        font.setPixelSize(12)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor(color))
        painter.drawText(QPointF(vx + LABEL_OFFSET, vy - LABEL_OFFSET), label)

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        self.controller.resize(event.size().width(), event.size().height())
        super().resizeEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        pos = event.position()
        self.controller.wheel(pos.x(), pos.y(), event.angleDelta().y())
        event.accept()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.controller.press(pos.x(), pos.y())
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.controller.move(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.controller.release()
            self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self.controller.release()
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().leaveEvent(event)
