"""Base scene-graph object: identity, name and children."""

from __future__ import annotations

import itertools
from typing import ClassVar, Iterator, Optional

import numpy as np


def _matrix4(value) -> np.ndarray:
    matrix = np.array(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


class SceneObject:
    """An object that can be placed in a scene graph.

    Every object gets a unique, increasing id and, unless given one,
    the name ``"[<id>]"``.
    """

    _ids: ClassVar[Iterator[int]] = itertools.count()

    #: Objects with a higher priority are drawn first.
    priority: ClassVar[int] = 0

    def __init__(self, name: Optional[str] = None) -> None:
        self._id = next(SceneObject._ids)
        self.name = f"[{self._id}]" if name is None else name
        self._children: list[SceneObject] = []
        self.view_matrix: Optional[np.ndarray] = None

    @property
    def id(self) -> int:
        """The automatically assigned id of this object."""
        return self._id

    @property
    def children(self) -> list[SceneObject]:
        """A copy of the list of child objects."""
        return list(self._children)

    def add_child(self, child: SceneObject) -> None:
        """Append ``child`` to this object's children."""
        self._children.append(child)

    def local_matrix(self) -> np.ndarray:
        """The local model matrix; the identity for plain objects."""
        return np.eye(4)

    def render(self, view_matrix) -> None:
        """Record the 4x4 view matrix this object is drawn with."""
        self.view_matrix = _matrix4(view_matrix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id}, name={self.name!r})"