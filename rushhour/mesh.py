"""Triangle meshes, the unit plane and the skybox cube."""

from __future__ import annotations

import os
from typing import ClassVar, Iterable, Optional

import numpy as np
from PIL import Image, ImageOps

from rushhour.material import Material
from rushhour.node import Node


def _rows(value, columns: int, what: str) -> np.ndarray:
    array = np.array(value, dtype=np.float32)
    if array.size == 0:
        array = array.reshape(0, columns)
    if array.ndim != 2 or array.shape[1] != columns:
        raise ValueError(f"{what} must be rows of {columns} components, got shape {array.shape}")
    return array


class Mesh(Node):
    """A shape made of indexed triangles with normals and texture coordinates.

    A new mesh has a default material and casts shadows.
    """

    def __init__(self, vertices, faces, normals, uvs, name: Optional[str] = None) -> None:
        super().__init__(name)
        self._vertices = _rows(vertices, 3, "vertices")
        self._normals = _rows(normals, 3, "normals")
        self._uvs = _rows(uvs, 2, "uvs")
        count = len(self._vertices)
        if len(self._normals) != count or len(self._uvs) != count:
            raise ValueError("vertices, normals and uvs must have the same length")
        indices = np.array(faces, dtype=np.int64).reshape(-1)
        if indices.size and (indices.min() < 0 or indices.max() >= count):
            raise ValueError("face index out of range of the vertices")
        self._faces = indices.astype(np.uint32)
        self.material = Material()
        self.cast_shadows = True

    @property
    def material(self) -> Material:
        """The material of this mesh. Assigning None gives it a default material."""
        return self._material

    @material.setter
    def material(self, value: Optional[Material]) -> None:
        self._material = Material() if value is None else value

    @property
    def vertices(self) -> np.ndarray:
        """A copy of the vertex positions, one row per vertex."""
        return self._vertices.copy()

    @property
    def normals(self) -> np.ndarray:
        """A copy of the vertex normals."""
        return self._normals.copy()

    @property
    def uvs(self) -> np.ndarray:
        """A copy of the texture coordinates."""
        return self._uvs.copy()

    @property
    def faces(self) -> np.ndarray:
        """A copy of the flat list of triangle vertex indices."""
        return self._faces.copy()

    @property
    def triangle_count(self) -> int:
        """Number of complete triangles described by the face indices."""
        return len(self._faces) // 3

    def render(self, view_matrix) -> None:
        """Draw the mesh's triangles with ``view_matrix``."""
        super().render(view_matrix)


class Plane(Mesh):
    """A unit square in the XY plane facing -Z."""

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(
            [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
            [0, 1, 2, 0, 2, 3],
            [(0.0, 0.0, -1.0)] * 4,
            [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (1.0, 1.0)],
            name,
        )


def _load_side(path: str) -> np.ndarray:
    try:
        with Image.open(path) as image:
            mode = "RGBA" if "A" in image.getbands() else "RGB"
            converted = image.convert(mode)
    except OSError as exc:
        raise OSError(f"failed to load file {path!r}") from exc
    # Mirror for viewing from inside the cube, then flip upside down.
    return np.asarray(ImageOps.flip(ImageOps.mirror(converted)), dtype=np.uint8).copy()


class Skybox(Node):
    """A cube map drawn around the scene from six images.

    The images are, in order, +X, -X, +Y, -Y, +Z and -Z.
    """

    VERTICES: ClassVar[np.ndarray] = np.array(
        [
            (-1.0, 1.0, 1.0),
            (-1.0, -1.0, 1.0),
            (1.0, -1.0, 1.0),
            (1.0, 1.0, 1.0),
            (-1.0, 1.0, -1.0),
            (-1.0, -1.0, -1.0),
            (1.0, -1.0, -1.0),
            (1.0, 1.0, -1.0),
        ],
        dtype=np.float32,
    )

    FACES: ClassVar[np.ndarray] = np.array(
        [
            0, 2, 1, 0, 3, 2,
            3, 6, 2, 3, 7, 6,
            4, 3, 0, 4, 7, 3,
            6, 4, 5, 7, 4, 6,
            4, 1, 5, 4, 0, 1,
            1, 6, 5, 1, 2, 6,
        ],
        dtype=np.uint16,
    )

    def __init__(self, textures: Iterable, name: Optional[str] = None) -> None:
        super().__init__(name)
        paths = [os.fspath(path) for path in textures]
        if len(paths) < 6:
            raise ValueError(f"a skybox needs six images, got {len(paths)}")
        self.texture_paths = paths[:6]
        self._sides = [_load_side(path) for path in self.texture_paths]

    @property
    def sides(self) -> list[np.ndarray]:
        """Copies of the six cube map images as ``(height, width, channels)`` arrays."""
        return [side.copy() for side in self._sides]

    def render(self, view_matrix) -> None:
        """Draw the cube; the matrix is recorded but does not affect the draw."""
        super().render(view_matrix)