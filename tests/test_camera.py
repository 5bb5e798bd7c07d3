import datetime
import math

import numpy as np
import pytest

from bonobo.camera import FPSCamera, perspective
from bonobo.inputs import MOUSE_BUTTON_LEFT, Action, InputHandler, Key
from bonobo.transform import TRSTransform


def _ndc_depth(projection, z):
    clip = projection @ np.array([0.0, 0.0, z, 1.0])
    return clip[2] / clip[3]


def test_perspective_maps_near_and_far_planes():
    proj = perspective(math.radians(60), 1.5, 0.1, 100.0)
    assert _ndc_depth(proj, -0.1) == pytest.approx(-1.0)
    assert _ndc_depth(proj, -100.0) == pytest.approx(1.0)


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)


def test_projection_inverse_is_inverse():
    cam = FPSCamera(math.radians(50), 16 / 9, 0.5, 50.0)
    assert np.allclose(cam.projection @ cam.projection_inverse, np.eye(4))
    assert np.allclose(cam.clip_to_view_matrix(), cam.projection_inverse)
    assert np.allclose(cam.view_to_clip_matrix(), cam.projection)


def test_aspect_ratio_in_projection():
    cam = FPSCamera(1.0, 2.0, 0.1, 10.0)
    cam.set_aspect(3.0)
    assert cam.aspect() == 3.0
    assert cam.projection[1, 1] / cam.projection[0, 0] == pytest.approx(3.0)
    cam.set_fov(0.5)
    assert cam.fov() == 0.5
    assert cam.aspect() == 3.0


def test_default_camera_matrices():
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    assert np.allclose(cam.view_to_world_matrix(), np.eye(4))
    assert np.allclose(cam.world_to_clip_matrix(), cam.projection)
    assert np.allclose(cam.clip_to_world_matrix(), cam.projection_inverse)


def test_clip_to_view_round_trip():
    cam = FPSCamera(1.2, 1.3, 0.1, 10.0)
    point = np.array([0.4, -0.7, -3.0])
    clip = cam.projection @ np.append(point, 1.0)
    xyw = np.array([clip[0], clip[1], clip[3]])
    assert np.allclose(cam.clip_to_view(xyw), point)


def test_clip_to_world_applies_world_transform():
    cam = FPSCamera(1.2, 1.3, 0.1, 10.0)
    cam.world.set_translate((1.0, 2.0, 3.0))
    cam.world.rotate_y(0.3)
    point = np.array([0.2, 0.5, -2.0])
    clip = cam.projection @ np.append(point, 1.0)
    xyw = np.array([clip[0], clip[1], clip[3]])
    expected = (cam.world.matrix() @ np.append(point, 1.0))[:3]
    assert np.allclose(cam.clip_to_world(xyw), expected)


def _pressed(*keys):
    ih = InputHandler()
    ih.feed_mouse_motion((0.0, 0.0))
    ih.advance()
    for key in keys:
        ih.feed_keyboard(key, 0, Action.PRESS)
    ih.advance()
    return ih


def _moved(*keys, **kwargs):
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    cam.update(datetime.timedelta(seconds=1), _pressed(*keys), **kwargs)
    return cam.world.translation()


def test_forward_movement_follows_front():
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    front = cam.world.front()
    cam.update(datetime.timedelta(seconds=2), _pressed(Key.W))
    assert np.allclose(cam.world.translation(), front * 2.0)


def test_opposite_keys_cancel():
    assert np.allclose(_moved(Key.W, Key.S, Key.A, Key.D), np.zeros(3))


def test_modifiers_scale_movement():
    base = _moved(Key.D)
    assert np.allclose(_moved(Key.D, Key.LEFT_SHIFT), base * 4.0)
    assert np.allclose(_moved(Key.D, Key.LEFT_CONTROL), base * 0.25)
    assert np.allclose(_moved(Key.D, Key.LEFT_CONTROL, Key.LEFT_SHIFT), base * 0.25)


def test_ignored_or_captured_keyboard_does_not_move():
    assert np.allclose(_moved(Key.W, ignore_key_events=True), np.zeros(3))
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    ih = _pressed(Key.E)
    ih.set_ui_capture(False, True)
    cam.update(1.0, ih)
    assert np.allclose(cam.world.translation(), np.zeros(3))


def test_mouse_drag_rotates():
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    cam.mouse_sensitivity = np.array([0.01, 0.01])
    ih = InputHandler()
    ih.feed_mouse_motion((10.0, 0.0))
    ih.feed_mouse_buttons(MOUSE_BUTTON_LEFT, Action.PRESS)
    ih.advance()
    cam.update(0.0, ih)
    expected = TRSTransform()
    expected.pre_rotate_x(0.0)
    expected.rotate_y(-0.1)
    assert np.allclose(cam.world.rotation(), expected.rotation())


def test_mouse_motion_without_button_only_tracks_position():
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    ih = InputHandler()
    ih.feed_mouse_motion((7.0, 9.0))
    cam.update(0.0, ih)
    assert np.allclose(cam.world.rotation(), np.eye(3))
    assert np.allclose(cam.mouse_position, [7.0, 9.0])


def test_text_round_trip():
    cam = FPSCamera(0.9, 1.7, 0.2, 40.0)
    cam.movement_speed = np.array([2.0, 3.0, 4.0])
    cam.mouse_sensitivity = np.array([0.5, 0.25])
    cam.world.set_translate((1.0, -2.0, 3.5))
    cam.world.rotate_x(0.4)
    cam.world.set_scale(2.0)
    other = FPSCamera(1.0, 1.0, 0.1, 10.0)
    other.load_text(cam.to_text())
    assert other.fov() == cam.fov()
    assert other.aspect() == cam.aspect()
    assert (other.near, other.far) == (cam.near, cam.far)
    assert np.allclose(other.movement_speed, cam.movement_speed)
    assert np.allclose(other.mouse_sensitivity, cam.mouse_sensitivity)
    assert np.allclose(other.world.matrix(), cam.world.matrix())
    assert np.allclose(other.projection, cam.projection)


def test_load_text_rejects_short_input():
    cam = FPSCamera(1.0, 1.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        cam.load_text("1 2 3")
    with pytest.raises(ValueError):
        cam.load_text("1 1 0.1 10 1 1 1 1 1 0 0 0")