"""A first-person camera driven by keyboard and mouse input."""

from __future__ import annotations

import datetime
import math
from typing import Union

import numpy as np

from bonobo.inputs import MOUSE_BUTTON_LEFT, InputHandler, Key, KeyState
from bonobo.transform import TRSTransform

Duration = Union[datetime.timedelta, float]


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(fovy / 2.0)
    out = np.zeros((4, 4))
    out[0, 0] = f / aspect
    out[1, 1] = f
    out[2, 2] = -(far + near) / (far - near)
    out[2, 3] = -(2.0 * far * near) / (far - near)
    out[3, 2] = -1.0
    return out


def _seconds(delta_time: Duration) -> float:
    if isinstance(delta_time, datetime.timedelta):
        return delta_time.total_seconds()
    return float(delta_time)


class FPSCamera:
    """Camera with a world transform, a projection and WASDQE/mouse controls."""

    def __init__(self, fovy: float, aspect: float, near: float, far: float) -> None:
        self.world = TRSTransform()
        self.movement_speed = np.ones(3)
        self.mouse_sensitivity = np.ones(2)
        self.mouse_position = np.zeros(2)
        self.set_projection(fovy, aspect, near, far)

    def set_projection(self, fovy: float, aspect: float, near: float, far: float) -> None:
        projection = perspective(fovy, aspect, near, far)
        self._fov = float(fovy)
        self._aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.projection = projection
        self.projection_inverse = np.linalg.inv(projection)

    def set_fov(self, fovy: float) -> None:
        self.set_projection(fovy, self._aspect, self.near, self.far)

    def fov(self) -> float:
        return self._fov

    def set_aspect(self, aspect: float) -> None:
        self.set_projection(self._fov, aspect, self.near, self.far)

    def aspect(self) -> float:
        return self._aspect

    def update(
        self,
        delta_time: Duration,
        input_handler: InputHandler,
        ignore_key_events: bool = False,
        ignore_mouse_events: bool = False,
    ) -> None:
        """Rotate from mouse drags and move from held keys over ``delta_time``."""
        ih = input_handler
        new_position = np.asarray(ih.mouse_position(), dtype=float)
        mouse_diff = new_position - self.mouse_position
        self.mouse_position = new_position

        if (
            not ih.is_mouse_captured_by_ui()
            and not ignore_mouse_events
            and ih.mouse_state(MOUSE_BUTTON_LEFT) & KeyState.PRESSED
        ):
            mouse_diff[1] = -mouse_diff[1]
            mouse_diff = mouse_diff * self.mouse_sensitivity
            self.world.pre_rotate_x(float(mouse_diff[1]))
            self.world.rotate_y(float(-mouse_diff[0]))

        if ih.is_keyboard_captured_by_ui() or ignore_key_events:
            return

        def held(key: Key) -> bool:
            return bool(ih.keycode_state(key) & KeyState.PRESSED)

        move = float(held(Key.W)) - float(held(Key.S))
        strafe = float(held(Key.D)) - float(held(Key.A))
        levitate = float(held(Key.E)) - float(held(Key.Q))

        if held(Key.LEFT_CONTROL):
            modifier = 0.25
        elif held(Key.LEFT_SHIFT):
            modifier = 4.0
        else:
            modifier = 1.0

        change = modifier * (
            self.world.front() * move
            + self.world.right() * strafe
            + self.world.up() * levitate
        )
        self.world.translate(self.movement_speed * change * _seconds(delta_time))

    def view_to_world_matrix(self) -> np.ndarray:
        return self.world.matrix()

    def world_to_view_matrix(self) -> np.ndarray:
        return self.world.matrix_inverse()

    def clip_to_world_matrix(self) -> np.ndarray:
        return self.view_to_world_matrix() @ self.projection_inverse

    def world_to_clip_matrix(self) -> np.ndarray:
        return self.projection @ self.world_to_view_matrix()

    def clip_to_view_matrix(self) -> np.ndarray:
        return self.projection_inverse.copy()

    def view_to_clip_matrix(self) -> np.ndarray:
        return self.projection.copy()

    def clip_to_world(self, xyw) -> np.ndarray:
        view = np.append(self.clip_to_view(xyw), 1.0)
        return (self.world.matrix() @ view)[:3]

    def clip_to_view(self, xyw) -> np.ndarray:
        xyw = np.asarray(xyw, dtype=float)
        factors = np.array(
            [self.projection_inverse[0, 0], self.projection_inverse[1, 1], -1.0]
        )
        return xyw * factors

    def to_text(self) -> str:
        """Projection, speeds and the world transform as whitespace-separated text."""

        def fmt(values) -> str:
            return " ".join(repr(float(x)) for x in values)

        header = fmt([self._fov, self._aspect, self.near, self.far])
        speeds = fmt(list(self.movement_speed) + list(self.mouse_sensitivity))
        return f"{header}\n{speeds}\n{self.world.to_text()}"

    def load_text(self, text: str) -> None:
        """Read back what :meth:`to_text` wrote."""
        tokens = text.split()
        if len(tokens) < 9:
            raise ValueError(f"camera text needs at least 9 numbers, found {len(tokens)}")
        try:
            head = [float(tok) for tok in tokens[:9]]
        except ValueError as exc:
            raise ValueError(f"malformed camera text: {exc}") from exc
        world = TRSTransform()
        world.load_text(" ".join(tokens[9:]))
        self.set_projection(*head[:4])
        self.movement_speed = np.array(head[4:7])
        self.mouse_sensitivity = np.array(head[7:9])
        self.world = world