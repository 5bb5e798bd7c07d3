"""Translation-rotation-scale transforms, composed as M = T * R * S."""

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

Vector = Union[Sequence[float], np.ndarray]
ScaleArg = Union[float, Vector]

_LOOK_PARALLEL_LIMIT = 0.99999


def _vec3(v: Vector) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr.copy()


def _scale3(v: ScaleArg) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    if arr.ndim == 0:
        return np.full(3, float(arr))
    return _vec3(arr)


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def rotation_matrix(angle: float, axis: Vector) -> np.ndarray:
    """3x3 right-handed rotation of ``angle`` radians around ``axis``."""
    a = _normalize(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    cross = np.array(
        [
            [0.0, -a[2], a[1]],
            [a[2], 0.0, -a[0]],
            [-a[1], a[0], 0.0],
        ]
    )
    return c * np.eye(3) + (1.0 - c) * np.outer(a, a) + s * cross


def _homogeneous(upper: np.ndarray, column: np.ndarray | None = None) -> np.ndarray:
    out = np.eye(4)
    out[:3, :3] = upper
    if column is not None:
        out[:3, 3] = column
    return out


class TRSTransform:
    """A transform made of a translation, a rotation and a per-axis scale.

    Matrices are returned as numpy arrays meant to multiply column vectors:
    ``transform.matrix() @ (x, y, z, 1)``.
    """

    def __init__(self) -> None:
        self._t = np.zeros(3)
        self._r = np.eye(3)
        self._s = np.ones(3)

    def __repr__(self) -> str:
        return (
            f"TRSTransform(translation={self._t.tolist()}, "
            f"rotation={self._r.tolist()}, scale={self._s.tolist()})"
        )

    def reset_transform(self) -> None:
        """Reset to the identity transform."""
        self._t = np.zeros(3)
        self._s = np.ones(3)
        self._r = np.eye(3)

    # Relative transformations

    def translate(self, v: Vector) -> None:
        self._t = self._t + _vec3(v)

    def scale(self, v: ScaleArg) -> None:
        """Multiply the scale by a vector or by a uniform factor."""
        self._s = self._s * _scale3(v)

    def rotate(self, angle: float, axis: Vector) -> None:
        """Apply ``current * rotation``."""
        self._r = self._r @ rotation_matrix(angle, axis)

    def rotate_x(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[1] = c * r[1] - s * r[2]
        self._r[2] = c * r[2] + s * r[1]

    def rotate_y(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[0] = c * r[0] + s * r[2]
        self._r[2] = c * r[2] - s * r[0]

    def rotate_z(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[0] = c * r[0] - s * r[1]
        self._r[1] = c * r[1] + s * r[0]

    def pre_rotate(self, angle: float, axis: Vector) -> None:
        """Apply ``rotation * current``."""
        self._r = rotation_matrix(angle, axis) @ self._r

    def pre_rotate_x(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[:, 1] = c * r[:, 1] + s * r[:, 2]
        self._r[:, 2] = c * r[:, 2] - s * r[:, 1]

    def pre_rotate_y(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[:, 0] = c * r[:, 0] - s * r[:, 2]
        self._r[:, 2] = c * r[:, 2] + s * r[:, 0]

    def pre_rotate_z(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = self._r.copy()
        self._r[:, 0] = c * r[:, 0] + s * r[:, 1]
        self._r[:, 1] = c * r[:, 1] - s * r[:, 0]

    # Absolute transformations

    def set_translate(self, v: Vector) -> None:
        self._t = _vec3(v)

    def set_scale(self, v: ScaleArg) -> None:
        """Set the scale to a vector or to a uniform factor."""
        self._s = _scale3(v)

    def set_rotate(self, angle: float, axis: Vector) -> None:
        self._r = rotation_matrix(angle, axis)

    def set_rotate_x(self, angle: float) -> None:
        self._r = rotation_matrix(angle, (1.0, 0.0, 0.0))

    def set_rotate_y(self, angle: float) -> None:
        self._r = rotation_matrix(angle, (0.0, 1.0, 0.0))

    def set_rotate_z(self, angle: float) -> None:
        self._r = rotation_matrix(angle, (0.0, 0.0, 1.0))

    def look_towards(self, front: Vector, up: Vector = (0.0, 1.0, 0.0)) -> None:
        """Orient so that the front axis points along ``front``.

        Nothing changes when ``front`` and ``up`` are (nearly) parallel.
        """
        front_vec = _normalize(_vec3(front))
        up_vec = _normalize(_vec3(up))
        if abs(float(np.dot(up_vec, front_vec))) > _LOOK_PARALLEL_LIMIT:
            return
        right = np.cross(front_vec, up_vec)
        new_up = np.cross(right, front_vec)
        self._r[:, 0] = _normalize(right)
        self._r[:, 1] = _normalize(new_up)
        self._r[:, 2] = -front_vec

    def look_at(self, point: Vector, up: Vector = (0.0, 1.0, 0.0)) -> None:
        """Orient towards ``point`` as seen from the current translation."""
        self.look_towards(_vec3(point) - self._t, up)

    # Accessors

    def translation(self) -> np.ndarray:
        return self._t.copy()

    def rotation(self) -> np.ndarray:
        return self._r.copy()

    def scaling(self) -> np.ndarray:
        return self._s.copy()

    def matrix(self) -> np.ndarray:
        return _homogeneous(self._r * self._s, self._t)

    def matrix_inverse(self) -> np.ndarray:
        upper = (self._r.T) / self._s[:, np.newaxis]
        return _homogeneous(upper, -(upper @ self._t))

    def translation_matrix(self) -> np.ndarray:
        return _homogeneous(np.eye(3), self._t)

    def rotation_matrix(self) -> np.ndarray:
        return _homogeneous(self._r)

    def scale_matrix(self) -> np.ndarray:
        return _homogeneous(np.diag(self._s))

    def translation_matrix_inverse(self) -> np.ndarray:
        return _homogeneous(np.eye(3), -self._t)

    def rotation_matrix_inverse(self) -> np.ndarray:
        return _homogeneous(self._r.T)

    def scale_matrix_inverse(self) -> np.ndarray:
        return _homogeneous(np.diag(1.0 / self._s))

    def translation_rotation_matrix(self) -> np.ndarray:
        return _homogeneous(self._r, self._t)

    def up(self) -> np.ndarray:
        return self._r[:, 1] * self._s[1]

    def down(self) -> np.ndarray:
        return -self.up()

    def left(self) -> np.ndarray:
        return -self.right()

    def right(self) -> np.ndarray:
        return self._r[:, 0] * self._s[0]

    def front(self) -> np.ndarray:
        return -self.back()

    def back(self) -> np.ndarray:
        return self._r[:, 2] * self._s[2]

    # Text serialisation

    def to_text(self) -> str:
        """Translation, rotation (column by column) and scale, one per line."""

        def fmt(values) -> str:
            return " ".join(repr(float(x)) for x in values)

        return "\n".join(
            [fmt(self._t), fmt(self._r.T.ravel()), fmt(self._s)]
        ) + "\n"

    def load_text(self, text: str) -> None:
        """Read back what :meth:`to_text` wrote."""
        try:
            values = [float(tok) for tok in text.split()]
        except ValueError as exc:
            raise ValueError(f"malformed transform text: {exc}") from exc
        if len(values) < 15:
            raise ValueError(
                f"transform text needs 15 numbers, found {len(values)}"
            )
        self._t = np.array(values[0:3])
        self._r = np.array(values[3:12]).reshape(3, 3).T.copy()
        self._s = np.array(values[12:15])