"""Point, directional and spot lights."""

from __future__ import annotations

from typing import Optional

import numpy as np

from rushhour.node import Node


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
        vector = np.array(value, dtype=float)
        if vector.shape != (3,):
            raise ValueError(
                f"{self._public} must have three components, got shape {vector.shape}"
            )
        setattr(obj, self._attr, vector)


class Light(Node):
    """Base for lights; black ambient, white diffuse and specular colours."""

    priority = 100

    ambient_color = _Vec3()
    diffuse_color = _Vec3()
    specular_color = _Vec3()

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.ambient_color = (0.0, 0.0, 0.0)
        self.diffuse_color = (1.0, 1.0, 1.0)
        self.specular_color = (1.0, 1.0, 1.0)


class PointLight(Light):
    """A light shining in every direction within ``radius``."""

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.radius = 1.0


class DirectionalLight(Light):
    """A light with infinite range shining along ``direction``."""

    direction = _Vec3()

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.direction = (0.0, 1.0, 0.0)


class SpotLight(Light):
    """A cone of light with a cutoff angle, attenuation exponent and radius."""

    direction = _Vec3()

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.direction = (0.0, 1.0, 0.0)
        self.cutoff = 45.0
        self.exponent = 8.0
        self.radius = 1.0