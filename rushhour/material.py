"""Materials and the image textures they can carry."""

from __future__ import annotations

import os
from typing import Optional

import numpy as np
from PIL import Image

from rushhour.scene_object import SceneObject


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


class Texture(SceneObject):
    """An image loaded from a file and converted to 8-bit RGBA pixels."""

    def __init__(self, path, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.path = os.fspath(path)
        try:
            with Image.open(self.path) as image:
                rgba = image.convert("RGBA")
        except OSError as exc:
            raise OSError(f"failed to load texture {self.path!r}") from exc
        self._pixels = np.asarray(rgba, dtype=np.uint8).copy()

    @property
    def width(self) -> int:
        """Width of the image in pixels."""
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        """Height of the image in pixels."""
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        """A copy of the pixels as a ``(height, width, 4)`` RGBA array."""
        return self._pixels.copy()

    def render(self, view_matrix) -> None:
        """Bind the texture for drawing with ``view_matrix``."""
        super().render(view_matrix)


class Material(SceneObject):
    """Surface colours, shininess and an optional texture for a mesh.

    Defaults: no emission, light grey (0.75) ambient, diffuse and specular
    colours, shininess 64 and no texture.
    """

    emission_color = _Vec3()
    ambient_color = _Vec3()
    diffuse_color = _Vec3()
    specular_color = _Vec3()

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name)
        self.emission_color = (0.0, 0.0, 0.0)
        self.ambient_color = (0.75, 0.75, 0.75)
        self.diffuse_color = (0.75, 0.75, 0.75)
        self.specular_color = (0.75, 0.75, 0.75)
        self.shininess = 64.0
        self.texture: Optional[Texture] = None

    def render(self, view_matrix) -> None:
        """Render the texture, if the material has one."""
        if self.texture is not None:
            self.texture.render(view_matrix)