"""World <-> view mapping, anchor preserving zoom and drag panning."""

from __future__ import annotations

import pytest

from transformviz.config import ZOOM_MAX, ZOOM_MIN
from transformviz.model.camera import CameraState


CAMERAS = [
    CameraState(),
    CameraState(zoom=0.1, pan_x=-300.0, pan_y=12.5),
    CameraState(zoom=73.2, pan_x=4.25, pan_y=-9.0, view_width=640.0, view_height=480.0),
    CameraState(zoom=1.0, pan_x=1e5, pan_y=-1e5, view_width=1.0, view_height=1.0),
]


@pytest.mark.parametrize("camera", CAMERAS)
@pytest.mark.parametrize("x, y", [(0.0, 0.0), (5.0, -3.0), (-123.456, 789.0), (1e-6, 1e6)])
def test_world_view_round_trip(camera: CameraState, x: float, y: float) -> None:
    vx, vy = camera.world_to_view(x, y)
    wx, wy = camera.view_to_world(vx, vy)
    assert wx == pytest.approx(x, rel=1e-9, abs=1e-9)
    assert wy == pytest.approx(y, rel=1e-9, abs=1e-9)


def test_pan_point_maps_to_view_center() -> None:
    camera = CameraState(zoom=3.0, pan_x=10.0, pan_y=20.0, view_width=600.0, view_height=400.0)
    assert camera.world_to_view(10.0, 20.0) == (300.0, 200.0)


def test_world_y_up_is_view_y_down() -> None:
    camera = CameraState(zoom=2.0)
    _, vy0 = camera.world_to_view(0.0, 0.0)
    _, vy1 = camera.world_to_view(0.0, 1.0)
    assert vy1 == vy0 - 2.0


def test_visible_world_bounds_default_camera() -> None:
    # 800 px at 2 px per unit around the origin
    assert CameraState().visible_world_bounds() == (-200.0, 200.0, -200.0, 200.0)


@pytest.mark.parametrize("anchor", [(400.0, 400.0), (0.0, 0.0), (123.0, 777.0)])
@pytest.mark.parametrize("direction", [1, -1])
def test_zoom_tick_keeps_world_point_under_anchor(anchor, direction) -> None:
    camera = CameraState(zoom=3.0, pan_x=7.0, pan_y=-2.0)
    before = camera.view_to_world(*anchor)

    camera.zoom_tick(*anchor, direction)

    after = camera.view_to_world(*anchor)
    assert after == pytest.approx(before)


def test_zoom_tick_factors() -> None:
    camera = CameraState(zoom=10.0)
    camera.zoom_tick(400.0, 400.0, 120)
    assert camera.zoom == pytest.approx(11.0)
    camera.zoom_tick(400.0, 400.0, -120)
    assert camera.zoom == pytest.approx(9.9)


def test_zoom_is_clamped() -> None:
    camera = CameraState(zoom=95.0)
    for _ in range(5):
        camera.zoom_tick(10.0, 10.0, 1)
    assert camera.zoom == ZOOM_MAX

    camera = CameraState(zoom=0.12)
    for _ in range(5):
        camera.zoom_tick(10.0, 10.0, -1)
    assert camera.zoom == ZOOM_MIN


def test_clamped_zoom_still_preserves_anchor() -> None:
    camera = CameraState(zoom=ZOOM_MAX, pan_x=1.0, pan_y=1.0)
    before = camera.view_to_world(100.0, 650.0)
    camera.zoom_at(100.0, 650.0, 4.0)
    assert camera.zoom == ZOOM_MAX
    assert camera.view_to_world(100.0, 650.0) == pytest.approx(before)


def test_drag_pans_by_pixel_delta_over_zoom() -> None:
    camera = CameraState(zoom=2.0)
    camera.begin_drag(100.0, 100.0)
    assert camera.drag_to(110.0, 90.0)

    assert camera.pan_x == pytest.approx(-5.0)
    assert camera.pan_y == pytest.approx(-5.0)
    assert (camera.last_x, camera.last_y) == (110.0, 90.0)


def test_drag_keeps_grabbed_world_point_under_pointer() -> None:
    camera = CameraState(zoom=4.0, pan_x=3.0, pan_y=3.0)
    grabbed = camera.view_to_world(200.0, 300.0)

    camera.begin_drag(200.0, 300.0)
    camera.drag_to(260.0, 250.0)
    camera.drag_to(300.0, 310.0)
    camera.end_drag()

    assert camera.world_to_view(*grabbed) == pytest.approx((300.0, 310.0))


def test_move_without_drag_does_nothing() -> None:
    camera = CameraState()
    assert not camera.drag_to(50.0, 50.0)
    assert (camera.pan_x, camera.pan_y) == (0.0, 0.0)

    camera.begin_drag(0.0, 0.0)
    camera.end_drag()
    assert not camera.drag_to(50.0, 50.0)


def test_resize_moves_view_center() -> None:
    camera = CameraState()
    camera.resize(300, 100)
    assert camera.view_center == (150.0, 50.0)
    camera.resize(0, -5)
    assert (camera.view_width, camera.view_height) == (1.0, 1.0)
