"""Orthographic and perspective cameras."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from rushhour.node import Node


def _window_size(window_width: int, window_height: int) -> tuple[float, float]:
    if window_width <= 0 or window_height <= 0:
        raise ValueError(
            f"window size must be positive, got {window_width}x{window_height}"
        )
    return float(window_width), float(window_height)


class Camera(Node, ABC):
    """Base for cameras: 90 degree field of view, clipping from 0.01 to 1000."""

    priority = 200

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.fov = 90.0
        self.active = False
        self.set_clipping(0.01, 1000.0)

    def set_clipping(self, near: float, far: float) -> None:
        """Set the near and far clipping planes."""
        self.near_clipping = float(near)
        self.far_clipping = float(far)

    @abstractmethod
    def projection_matrix(self, window_width: int, window_height: int) -> np.ndarray:
        """Return the projection matrix for a window of the given size."""


class OrthoCamera(Camera):
    """A camera without perspective; ``zoom`` is the visible extent."""

    def __init__(self, name: Optional[str] = None, zoom: float = 1.0) -> None:
        super().__init__(name)
        self.zoom = zoom

    @property
    def zoom(self) -> float:
        """The visible extent along the longer window side; never negative."""
        return self._zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        self._zoom = max(float(value), 0.0)

    def projection_matrix(self, window_width: int, window_height: int) -> np.ndarray:
        width, height = _window_size(window_width, window_height)
        if self._zoom == 0.0:
            raise ValueError("an orthographic projection needs a positive zoom")
        longest = max(width, height)
        half_w = width / longest * self._zoom / 2.0
        half_h = height / longest * self._zoom / 2.0
        near, far = self.near_clipping, self.far_clipping
        matrix = np.eye(4)
        matrix[0, 0] = 1.0 / half_w
        matrix[1, 1] = 1.0 / half_h
        matrix[2, 2] = -2.0 / (far - near)
        matrix[2, 3] = -(far + near) / (far - near)
        return matrix


class PerspectiveCamera(Camera):
    """A camera with a perspective projection using ``fov`` in degrees."""

    def projection_matrix(self, window_width: int, window_height: int) -> np.ndarray:
        width, height = _window_size(window_width, window_height)
        aspect = width / height
        tan_half = math.tan(math.radians(self.fov) / 2.0)
        near, far = self.near_clipping, self.far_clipping
        matrix = np.zeros((4, 4))
        matrix[0, 0] = 1.0 / (aspect * tan_half)
        matrix[1, 1] = 1.0 / tan_half
        matrix[2, 2] = -(far + near) / (far - near)
        matrix[2, 3] = -(2.0 * far * near) / (far - near)
        matrix[3, 2] = -1.0
        return matrix