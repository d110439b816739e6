"""Scene nodes with a position, rotation and scale."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from rushhour.scene_object import SceneObject

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)


def _vector3(value, what: str) -> np.ndarray:
    vector = np.array(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"{what} must have three components, got shape {vector.shape}")
    return vector


class _Vec3:
    """Descriptor storing a three-component float vector by value."""

    def __set_name__(self, owner, name: str) -> None:
        self._public = name
        self._attr = "_" + name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self._attr).copy()

    def __set__(self, obj, value) -> None:
        setattr(obj, self._attr, _vector3(value, self._public))


def translation_matrix(offset) -> np.ndarray:
    """A 4x4 matrix translating by ``offset``."""
    matrix = np.eye(4)
    matrix[:3, 3] = _vector3(offset, "offset")
    return matrix


def rotation_matrix(degrees: float, axis) -> np.ndarray:
    """A 4x4 matrix rotating by ``degrees`` around ``axis`` (right-handed)."""
    direction = _vector3(axis, "axis")
    length = float(np.linalg.norm(direction))
    if length == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    x, y, z = direction / length
    theta = math.radians(degrees)
    cos, sin = math.cos(theta), math.sin(theta)
    cross = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    unit = np.array([x, y, z])
    matrix = np.eye(4)
    matrix[:3, :3] = cos * np.eye(3) + (1.0 - cos) * np.outer(unit, unit) + sin * cross
    return matrix


def scale_matrix(factors) -> np.ndarray:
    """A 4x4 matrix scaling each axis by the matching factor."""
    matrix = np.eye(4)
    matrix[:3, :3] = np.diag(_vector3(factors, "scale"))
    return matrix


class Node(SceneObject):
    """An invisible object with a base matrix and position, rotation and scale offsets.

    Rotation is given in degrees around the X, Y and Z axes.
    """

    position = _Vec3()
    rotation = _Vec3()
    scale = _Vec3()

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.base_matrix = np.eye(4)
        self.position = (0.0, 0.0, 0.0)
        self.rotation = (0.0, 0.0, 0.0)
        self.scale = (1.0, 1.0, 1.0)

    @property
    def base_matrix(self) -> np.ndarray:
        """The base model matrix the offsets are applied on top of."""
        return self._base_matrix.copy()

    @base_matrix.setter
    def base_matrix(self, value) -> None:
        matrix = np.array(value, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"base matrix must be 4x4, got shape {matrix.shape}")
        self._base_matrix = matrix

    def local_matrix(self) -> np.ndarray:
        """Base matrix, then scale, X, Y and Z rotation, then translation."""
        rx, ry, rz = self._rotation
        rotation = (
            rotation_matrix(rz, _Z_AXIS)
            @ rotation_matrix(ry, _Y_AXIS)
            @ rotation_matrix(rx, _X_AXIS)
        )
        offset = translation_matrix(self._position) @ rotation @ scale_matrix(self._scale)
        return offset @ self._base_matrix

    def render(self, view_matrix) -> None:
        """Nodes have no appearance; only the view matrix is recorded."""
        super().render(view_matrix)