"""Bounding box, margin and zoom selection for auto-fit."""

from __future__ import annotations

import math

import numpy as np
import pytest

from transformviz.config import AUTOFIT_ZOOM_CAP, GRID_MAX_LINES, ZOOM_MIN
from transformviz.model.autofit import auto_fit, bounding_box, fit_bounds, fit_zoom, inflate
from transformviz.model.camera import CameraState
from transformviz.model.geometry import Point, identity_matrix
from transformviz.model.pipeline import transform_shape
from transformviz.model.presets import translation
from transformviz.model.readout import grid_lines, grid_spacing
from transformviz.model.shape import make_rectangle


def test_bounding_box_empty_is_none() -> None:
    assert bounding_box([]) is None


def test_bounding_box_of_points() -> None:
    points = [Point(1.0, -2.0), Point(-3.0, 4.0), Point(0.5, 0.5)]
    assert bounding_box(points) == (-3.0, 1.0, -2.0, 4.0)


def test_inflate_adds_ten_percent_per_side() -> None:
    assert inflate((0.0, 10.0, 0.0, 20.0)) == pytest.approx((-1.0, 11.0, -2.0, 22.0))


def test_fit_zoom_uses_tighter_axis() -> None:
    assert fit_zoom((0.0, 100.0, 0.0, 10.0), 800.0, 800.0) == pytest.approx(7.2)


def test_fit_zoom_degenerate_box_is_capped() -> None:
    assert fit_zoom((3.0, 3.0, 4.0, 4.0), 800.0, 800.0) == AUTOFIT_ZOOM_CAP
    # a horizontal line only limits x
    assert fit_zoom((0.0, 360.0, 1.0, 1.0), 800.0, 800.0) == pytest.approx(2.0)


def test_identity_fit_is_capped_and_centered() -> None:
    shape = make_rectangle(5.0, 5.0)
    camera = CameraState()

    bounds = auto_fit(camera, shape, transform_shape(identity_matrix(), shape))

    assert bounds == pytest.approx((-0.5, 5.5, -0.5, 5.5))
    assert (camera.pan_x, camera.pan_y) == pytest.approx((2.5, 2.5))
    assert camera.zoom == AUTOFIT_ZOOM_CAP


def test_translate_fit_frames_both_shapes() -> None:
    shape = make_rectangle(5.0, 5.0)
    transformed = transform_shape(translation(80.0, 40.0), shape)
    camera = CameraState()

    auto_fit(camera, shape, transformed)

    assert (camera.pan_x, camera.pan_y) == pytest.approx((42.5, 22.5))
    assert camera.zoom == pytest.approx(720.0 / 102.0)

    # every corner of both shapes lands inside the view
    for p in [*shape, *(tp.final for tp in transformed)]:
        vx, vy = camera.world_to_view(p.x, p.y)
        assert 0.0 <= vx <= camera.view_width
        assert 0.0 <= vy <= camera.view_height


def test_fit_ignores_points_at_infinity() -> None:
    shape = make_rectangle(5.0, 5.0)
    transformed = transform_shape(np.zeros((3, 3)), shape)

    assert fit_bounds(shape, transformed) == pytest.approx((-0.5, 5.5, -0.5, 5.5))


def test_fit_respects_view_size() -> None:
    shape = make_rectangle(100.0, 100.0)
    camera = CameraState()
    camera.resize(400, 200)

    auto_fit(camera, shape, transform_shape(identity_matrix(), shape))

    assert camera.zoom == pytest.approx(200.0 * 0.9 / 120.0)


def test_fit_is_idempotent() -> None:
    shape = make_rectangle(3.0, 7.0)
    transformed = transform_shape(translation(-10.0, 2.0), shape)
    camera = CameraState()

    auto_fit(camera, shape, transformed)
    first = (camera.zoom, camera.pan_x, camera.pan_y)
    auto_fit(camera, shape, transformed)

    assert (camera.zoom, camera.pan_x, camera.pan_y) == first


def test_fit_zoom_never_drops_below_zoom_min() -> None:
    assert fit_zoom((0.0, math.inf, 0.0, 1.0), 800.0, 800.0) == ZOOM_MIN
    assert fit_zoom((0.0, 1e300, 0.0, 1.0), 800.0, 800.0) == ZOOM_MIN


def test_overflowing_corners_do_not_break_the_camera() -> None:
    m = identity_matrix()
    m[0, 0] = 1e308
    shape = make_rectangle(5.0, 5.0)
    camera = CameraState()

    bounds = auto_fit(camera, shape, transform_shape(m, shape))

    assert bounds == pytest.approx((-0.5, 5.5, -0.5, 5.5))
    assert camera.zoom == AUTOFIT_ZOOM_CAP
    assert math.isfinite(camera.pan_x) and math.isfinite(camera.pan_y)
    camera.zoom_tick(10.0, 10.0, 1)
    camera.begin_drag(0.0, 0.0)
    assert camera.drag_to(5.0, 5.0)
    assert grid_spacing(camera.zoom) > 0.0


def test_huge_finite_image_fits_at_zoom_min() -> None:
    m = identity_matrix()
    m[0, 0] = 1e308
    shape = make_rectangle(1.0, 1.0)
    camera = CameraState()

    auto_fit(camera, shape, transform_shape(m, shape))

    assert camera.zoom == ZOOM_MIN
    assert math.isfinite(camera.pan_x)
    x_min, x_max, _, _ = camera.visible_world_bounds()
    assert grid_lines(x_min, x_max, grid_spacing(camera.zoom)).size <= GRID_MAX_LINES


def test_bounds_beyond_float_range_leave_camera_untouched() -> None:
    shape = make_rectangle(1.7e308, 1.0)
    camera = CameraState()

    assert auto_fit(camera, shape, transform_shape(identity_matrix(), shape)) is None
    assert camera == CameraState()
